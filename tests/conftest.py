import pytest

from flask.cli import load_dotenv
load_dotenv()

from oauth1_login import create_app
from oauth1_login.cache import cache as _cache
from oauth1_login.models import Profile, TemporaryCredentials, TokenCredentials


@pytest.fixture(scope="session")
def app():
    app = create_app("testing")

    with app.app_context():
        yield app


@pytest.fixture(scope="function")
def cache(app):
    yield _cache
    _cache.clear()


def temp_credentials():
    return TemporaryCredentials("temp_token", "temp_secret")


def token_credentials():
    return TokenCredentials("access_token", "access_secret")


def profile():
    return Profile(
        uid="42",
        nickname="bob",
        name="Bob",
        email="b@x.com",
        image_url="http://x/a.png",
        extra={"followers_count": 3, "lang": "en"},
    )


@pytest.fixture(scope="function")
def server(app, mocker):
    server = mocker.Mock()
    server.name = "twitter"
    server.get_temporary_credentials.return_value = temp_credentials()
    server.get_authorization_url.side_effect = (
        lambda temp: "https://api.twitter.com/oauth/authenticate?oauth_token=" + temp.identifier
    )
    server.get_token_credentials.return_value = token_credentials()
    server.get_user_details.return_value = profile()
    return server
