from collections import namedtuple


class Credentials(namedtuple('Credentials', ['identifier', 'secret'])):
    '''A token/secret pair handed out by an OAuth1 provider.'''
    __slots__ = ()


class TemporaryCredentials(Credentials):
    __slots__ = ()


class TokenCredentials(Credentials):
    __slots__ = ()


# What the OAuth1 server hands back after fetching the user's profile
Profile = namedtuple('Profile', ['uid', 'nickname', 'name', 'email', 'image_url', 'extra'])


class User(namedtuple('User', [
        'id', 'nickname', 'name', 'email', 'avatar', 'raw', 'token', 'token_secret'])):
    '''The normalized user produced by a completed login.'''
    __slots__ = ()

    @classmethod
    def from_profile(cls, profile, token):
        return cls(
            id=profile.uid,
            nickname=profile.nickname,
            name=profile.name,
            email=profile.email,
            avatar=profile.image_url,
            raw=dict(profile.extra or {}),
            token=token.identifier,
            token_secret=token.secret,
        )
