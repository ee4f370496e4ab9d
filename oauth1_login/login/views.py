from flask import (
    abort,
    current_app,
    jsonify,
    redirect,
    request,
    url_for,
)

from oauth1_login.cache import cache
from oauth1_login.errors import LoginError
from oauth1_login.oauth import oauth
from oauth1_login.schemas import UserSchema
from oauth1_login.login import login
from oauth1_login.login.core import (
    AuthFlowAdapter,
    CacheCredentialStore,
    FileCredentialStore,
    SessionCredentialStore,
)


@login.errorhandler(LoginError)
def handle_login_error(error):
    """Error handler."""
    current_app.logger.debug('{}: {}'.format(error.error, error.description))
    return jsonify(dict(error.twotuples)), error.status_code


def make_store(config):
    """Picks the temporary credential store from the app config."""
    kind = config['OAUTH1_CREDENTIAL_STORE']
    if config['OAUTH1_STATELESS'] and kind == 'session':
        kind = 'file'

    if kind == 'cache':
        return CacheCredentialStore(cache, timeout=config['OAUTH1_CACHE_TIMEOUT'])

    if kind == 'file':
        return FileCredentialStore(config['OAUTH1_STORAGE_DIR'])

    if kind == 'session':
        return SessionCredentialStore()

    raise ValueError('Unknown OAUTH1_CREDENTIAL_STORE {!r}'.format(kind))


def make_adapter(provider):
    callback_uri = url_for('login.authorize_callback', provider=provider, _external=True)
    try:
        server = oauth.create_server(provider, callback_uri, config=current_app.config)
    except KeyError:
        abort(404)

    msg = 'Callback url is {}'.format(callback_uri)
    current_app.logger.debug(msg)

    return AuthFlowAdapter(server, store=make_store(current_app.config))


@login.route('/login/<provider>')
def authorize(provider):
    """Directs user to the provider's authorization page."""
    return make_adapter(provider).redirect()


@login.route('/login/<provider>/callback')
def authorize_callback(provider):
    """Callback after a user completes the provider's login (or not)
    ?oauth_token=value&oauth_verifier=value

    or, when the user refused
    ?denied=value
    """
    adapter = make_adapter(provider)

    front_url = current_app.config.get('FRONT_URL')
    if 'denied' in request.args and front_url:
        current_app.logger.debug('User denied access on {}'.format(provider))
        return redirect(front_url + '/login/callback?denied=True')

    user = adapter.set_request(request).user()
    return jsonify(UserSchema().dump(user)), 200
