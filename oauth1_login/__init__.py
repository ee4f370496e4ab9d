import logging
import os

from flask import Flask

from oauth1_login import config
from oauth1_login.cache import cache
from oauth1_login.login import login
from oauth1_login.login.core import FileCredentialStore
from oauth1_login.login.views import make_store
from oauth1_login.oauth import oauth


def setup_logger_handlers(app):
    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(
    '%(asctime)s %(levelname)s: %(message)s '
    '[in %(pathname)s:%(lineno)d]'
    ))
    sh.setLevel(logging.DEBUG)
    app.logger.addHandler(sh)


def init_storage(app):
    """Checks the credential store config and creates the file store directory."""
    if isinstance(make_store(app.config), FileCredentialStore):
        os.makedirs(app.config['OAUTH1_STORAGE_DIR'], exist_ok=True)


def create_app(config_name=None):
    """
    Returns the Flask app.
    """
    app = Flask(__name__)

    if not config_name:
        config_name = os.getenv('FLASK_ENV', 'development')

    if config_name == 'production':
        setup_logger_handlers(app)

    app.config.from_object(config.app_config[config_name])

    oauth.init_app(app)
    cache.init_app(app)
    init_storage(app)

    app.register_blueprint(login)

    return app
