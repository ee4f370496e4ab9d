'''Errors raised while signing a user in through an OAuth1 provider.'''


class LoginError(Exception):
    '''Base class for login flow failures.

    Mirrors the oauthlib error shape so views can render any of them the same way.
    '''
    error = 'login_error'
    status_code = 400
    description = ''

    def __init__(self, description=None):
        if description is not None:
            self.description = description
        super().__init__(self.description)

    @property
    def twotuples(self):
        return [('error', self.error), ('error_description', self.description)]


class MissingVerifierError(LoginError):
    error = 'missing_verifier'
    description = 'Invalid request. Missing OAuth verifier.'


class MissingTemporaryCredentialError(LoginError):
    error = 'missing_temporary_credentials'
    description = 'No temporary credentials stored for this login attempt.'


class ProviderError(LoginError):
    error = 'provider_error'
    status_code = 502
    description = 'The OAuth provider could not complete the request.'


class StorageWriteError(LoginError):
    error = 'storage_write_error'
    status_code = 500
    description = 'Could not write temporary credentials.'
