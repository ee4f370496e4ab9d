'''This module handles the OAuth1 sign in flow: stash, redirect, exchange, normalize.'''
import os
import tempfile
from flask import current_app, redirect, request, session as flask_session
from marshmallow import ValidationError

from oauth1_login.errors import (
    MissingTemporaryCredentialError,
    MissingVerifierError,
    StorageWriteError,
)
from oauth1_login.models import User
from oauth1_login.schemas import TemporaryCredentialsSchema

TEMP_KEY = 'oauth.temp'

schema = TemporaryCredentialsSchema()


class SessionCredentialStore(object):
    '''Keeps the temporary credentials in the user's session.

    Every browser session gets its own slot so concurrent logins never collide.
    '''
    def __init__(self, session=None):
        self.session = session

    def _session(self):
        return self.session if self.session is not None else flask_session

    def put(self, credentials):
        self._session()[TEMP_KEY] = schema.dump(credentials)

    def take(self, identifier):
        stored = self._session().pop(TEMP_KEY, None)
        if stored is None:
            return None

        return schema.load(stored)


class FileCredentialStore(object):
    '''Keeps the temporary credentials in a single file on disk.

    There is exactly one slot for the whole process, so only one login can be in
    flight at a time. A second begin overwrites the first one's credentials.
    '''
    def __init__(self, storage_dir):
        self.path = os.path.join(storage_dir, TEMP_KEY)

    def put(self, credentials):
        if os.path.exists(self.path):
            current_app.logger.warning('Overwriting temporary credentials of an in-flight login')

        storage_dir = os.path.dirname(self.path)
        try:
            # readers only ever see a complete slot or none at all
            with tempfile.NamedTemporaryFile('w', dir=storage_dir, prefix=TEMP_KEY, delete=False) as f:
                f.write(schema.dumps(credentials))
            os.replace(f.name, self.path)
        except OSError as err:
            msg = 'Could not write temp credentials. Is {} writable?'.format(storage_dir)
            current_app.logger.critical(msg)
            raise StorageWriteError(msg) from err

    def take(self, identifier):
        try:
            with open(self.path, 'r') as f:
                stored = f.read()
        except FileNotFoundError:
            return None

        os.remove(self.path)
        try:
            return schema.loads(stored)
        except (ValueError, ValidationError) as err:
            msg = 'Discarding unreadable temp credentials in {}: {}'.format(self.path, err)
            current_app.logger.warning(msg)
            return None


class CacheCredentialStore(object):
    '''Keeps the temporary credentials in a flask-caching cache.

    Entries are keyed by the temporary identifier, which the provider echoes back
    as oauth_token on the callback, so any number of logins can be in flight.
    '''
    def __init__(self, cache, timeout=10*60):
        self.cache = cache
        self.timeout = timeout

    def _key(self, identifier):
        return '{}:{}'.format(TEMP_KEY, identifier)

    def put(self, credentials):
        ok = self.cache.set(self._key(credentials.identifier), schema.dump(credentials), timeout=self.timeout)
        if ok is False:
            msg = 'Could not write temp credentials to the cache'
            current_app.logger.critical(msg)
            raise StorageWriteError(msg)

    def take(self, identifier):
        key = self._key(identifier)
        stored = self.cache.get(key)
        if stored is None:
            return None

        # whoever deletes the entry owns it
        if not self.cache.delete(key):
            return None

        return schema.load(stored)


class AuthFlowAdapter(object):
    '''Runs the three legs of an OAuth1 login against one provider.

    Args:
        server: the OAuth1Server doing the actual protocol work
        store: where temporary credentials wait for the callback. Defaults to the
            session, or to a single file in storage_dir when stateless.
        stateless: do not touch the session
        storage_dir: directory for the file store
    '''
    def __init__(self, server, store=None, stateless=False, storage_dir=None):
        self.server = server
        self.request = None

        if store is None:
            if stateless:
                if not storage_dir:
                    raise ValueError('A storage_dir is required when stateless')
                store = FileCredentialStore(storage_dir)
            else:
                store = SessionCredentialStore()

        self.store = store

    def set_session(self, session):
        '''Use this session instead of flask's for storing temporary credentials.'''
        if not isinstance(self.store, SessionCredentialStore):
            raise ValueError('Provider is not using session storage')

        self.store.session = session
        return self

    def set_request(self, request_):
        self.request = request_
        return self

    def begin_auth(self):
        '''Gets temporary credentials, stores them and returns the url to send the user to.'''
        temp = self.server.get_temporary_credentials()
        self.store.put(temp)

        url = self.server.get_authorization_url(temp)
        msg = 'Redirecting to {} for authorization'.format(self.server.name)
        current_app.logger.info(msg)

        return url

    def redirect(self):
        return redirect(self.begin_auth())

    @staticmethod
    def has_necessary_verifier(params):
        return bool(params.get('oauth_token')) and bool(params.get('oauth_verifier'))

    def complete_auth(self, params):
        '''Finishes the login with the parameters the provider called back with.

        Returns:
            the normalized User
        '''
        if not self.has_necessary_verifier(params):
            raise MissingVerifierError()

        token = self.get_token(params)
        profile = self.server.get_user_details(token)

        msg = 'User {} signed in with {}'.format(profile.uid, self.server.name)
        current_app.logger.info(msg)

        return User.from_profile(profile, token)

    def user(self):
        '''complete_auth for the bound request, or flask's current one.'''
        req = self.request if self.request is not None else request
        return self.complete_auth(req.values)

    def get_token(self, params):
        oauth_token = params.get('oauth_token')
        temp = self.store.take(oauth_token)

        if temp is None:
            msg = 'No temporary credentials found for token {}'.format(oauth_token)
            current_app.logger.info(msg)
            raise MissingTemporaryCredentialError()

        return self.server.get_token_credentials(temp, oauth_token, params.get('oauth_verifier'))
