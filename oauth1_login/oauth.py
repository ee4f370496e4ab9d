'''Talks to OAuth1 providers through authlib.

Signing, transport and the token exchange itself all happen inside authlib's
OAuth1Session, this module only feeds it the right endpoints and credentials.
'''
import yaml
import requests
from authlib.integrations.base_client import OAuthError
from authlib.integrations.requests_client import OAuth1Session

from oauth1_login.errors import ProviderError
from oauth1_login.models import Profile, TemporaryCredentials, TokenCredentials

PROFILE_FIELDS = ('uid', 'nickname', 'name', 'email', 'image_url')


def providers_loader(fpath):
    with open(fpath, 'r') as f:
        settings = yaml.safe_load(f)

    return settings.get('providers') or {}


class OAuth1Server(object):
    '''One OAuth1 provider, e.g. twitter.

    The server never keeps track of any flow, every call gets the credentials it
    needs passed in.
    '''
    def __init__(self, name, consumer_key, consumer_secret, callback_uri,
                 request_token_url, authorize_url, access_token_url,
                 user_details_url, user_details_params=None, fields=None):
        self.name = name
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.callback_uri = callback_uri
        self.request_token_url = request_token_url
        self.authorize_url = authorize_url
        self.access_token_url = access_token_url
        self.user_details_url = user_details_url
        self.user_details_params = user_details_params or {}
        self.fields = fields or {}

    def _session(self, token=None, token_secret=None, **kwargs):
        return OAuth1Session(
            self.consumer_key,
            self.consumer_secret,
            token=token,
            token_secret=token_secret,
            **kwargs
        )

    def get_temporary_credentials(self):
        '''Asks the provider for a request token.

        Returns:
            TemporaryCredentials
        '''
        session = self._session(redirect_uri=self.callback_uri)
        try:
            resp = session.fetch_request_token(self.request_token_url)
        except (OAuthError, requests.RequestException) as err:
            raise ProviderError('Could not obtain temporary credentials from {}: {}'.format(self.name, err)) from err

        if str(resp.get('oauth_callback_confirmed', 'true')).lower() != 'true':
            raise ProviderError('Error in retrieving temporary credentials from {}'.format(self.name))

        return TemporaryCredentials(resp['oauth_token'], resp['oauth_token_secret'])

    def get_authorization_url(self, temporary_credentials):
        session = self._session()
        return session.create_authorization_url(
            self.authorize_url, request_token=temporary_credentials.identifier
        )

    def get_token_credentials(self, temporary_credentials, token, verifier):
        '''Exchanges the temporary credentials and verifier for token credentials.

        The token echoed back on the callback has to be the one we stored,
        anything else means the callback belongs to a different login attempt.
        '''
        if temporary_credentials.identifier != token:
            raise ProviderError(
                'Temporary identifier passed back by server does not match that of stored temporary credentials.'
            )

        session = self._session(
            token=temporary_credentials.identifier,
            token_secret=temporary_credentials.secret,
        )
        try:
            resp = session.fetch_access_token(self.access_token_url, verifier=verifier)
        except (OAuthError, requests.RequestException) as err:
            raise ProviderError('Could not obtain token credentials from {}: {}'.format(self.name, err)) from err

        return TokenCredentials(resp['oauth_token'], resp['oauth_token_secret'])

    def get_user_details(self, token_credentials):
        '''Fetches the user's profile with the given token credentials.

        Returns:
            Profile, provider fields not used for the profile end up in extra.
        '''
        session = self._session(
            token=token_credentials.identifier,
            token_secret=token_credentials.secret,
        )
        try:
            resp = session.get(self.user_details_url, params=self.user_details_params)
            resp.raise_for_status()
            data = resp.json()
        except (OAuthError, requests.RequestException, ValueError) as err:
            raise ProviderError('Could not fetch user details from {}: {}'.format(self.name, err)) from err

        return self.make_profile(data)

    def make_profile(self, data):
        mapped = {field: data.get(self.fields.get(field, field)) for field in PROFILE_FIELDS}
        used = {self.fields.get(field, field) for field in PROFILE_FIELDS}
        extra = {k: v for k, v in data.items() if k not in used}

        if mapped['uid'] is not None:
            mapped['uid'] = str(mapped['uid'])

        return Profile(extra=extra, **mapped)


class OAuth1(object):
    '''Registry of the OAuth1 providers an app can sign users in with.'''
    def __init__(self, app=None):
        self.providers = {}
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.app = app
        fpath = app.config.get('OAUTH1_PROVIDERS_FILE')
        if fpath:
            for name, settings in providers_loader(fpath).items():
                self.register(name, **settings)

        app.extensions['oauth1'] = self

    def register(self, name, app_key=None, **endpoints):
        endpoints['app_key'] = app_key or name.upper()
        self.providers[name] = endpoints
        return endpoints

    def create_server(self, name, callback_uri, config=None):
        '''Builds the server for a registered provider.

        Raises:
            KeyError if the provider was never registered.
        '''
        settings = dict(self.providers[name])
        config = config if config is not None else self.app.config
        credentials = config.get(settings.pop('app_key')) or {}

        return OAuth1Server(
            name,
            credentials.get('consumer_key'),
            credentials.get('consumer_secret'),
            callback_uri,
            **settings
        )


oauth = OAuth1()
