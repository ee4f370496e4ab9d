from marshmallow import Schema, fields, post_load
from oauth1_login.models import TemporaryCredentials


class TemporaryCredentialsSchema(Schema):
    identifier = fields.Str(required=True)
    secret = fields.Str(required=True)

    @post_load
    def make_credentials(self, data, **kwargs):
        return TemporaryCredentials(**data)


class UserSchema(Schema):
    id = fields.Str()
    nickname = fields.Str(allow_none=True)
    name = fields.Str(allow_none=True)
    email = fields.Str(allow_none=True)
    avatar = fields.Str(allow_none=True)
    raw = fields.Dict()
    token = fields.Str()
    token_secret = fields.Str()
