import pytest
import requests
from authlib.integrations.base_client import OAuthError

from oauth1_login.errors import ProviderError
from oauth1_login.models import Profile, TemporaryCredentials, TokenCredentials
from oauth1_login.oauth import OAuth1, OAuth1Server, providers_loader

from conftest import temp_credentials, token_credentials


def twitter_server():
    return OAuth1Server(
        'twitter',
        'test_key',
        'test_secret',
        'http://localhost/login/twitter/callback',
        request_token_url='https://api.twitter.com/oauth/request_token',
        authorize_url='https://api.twitter.com/oauth/authenticate',
        access_token_url='https://api.twitter.com/oauth/access_token',
        user_details_url='https://api.twitter.com/1.1/account/verify_credentials.json',
        user_details_params={'include_email': 'true'},
        fields={
            'uid': 'id_str',
            'nickname': 'screen_name',
            'image_url': 'profile_image_url_https',
        },
    )


def mock_twitter_user():
    return {
        'id': 42,
        'id_str': '42',
        'screen_name': 'bob',
        'name': 'Bob',
        'email': 'b@x.com',
        'profile_image_url_https': 'http://x/a.png',
        'followers_count': 3,
    }


def mock_session(mocker):
    return mocker.patch('oauth1_login.oauth.OAuth1Session').return_value


def test_get_temporary_credentials(mocker):
    session = mock_session(mocker)
    session.fetch_request_token.return_value = {
        'oauth_token': 'temp_token',
        'oauth_token_secret': 'temp_secret',
        'oauth_callback_confirmed': 'true',
    }

    temp = twitter_server().get_temporary_credentials()

    assert temp == temp_credentials()
    session.fetch_request_token.assert_called_once_with('https://api.twitter.com/oauth/request_token')


def test_get_temporary_credentials_callback_not_confirmed(mocker):
    session = mock_session(mocker)
    session.fetch_request_token.return_value = {
        'oauth_token': 'temp_token',
        'oauth_token_secret': 'temp_secret',
        'oauth_callback_confirmed': 'false',
    }

    with pytest.raises(ProviderError):
        twitter_server().get_temporary_credentials()


@pytest.mark.parametrize('error', [
        OAuthError('fetch_token_denied', 'nope'),
        requests.ConnectionError('down'),
    ])
def test_get_temporary_credentials_provider_failure(mocker, error):
    session = mock_session(mocker)
    session.fetch_request_token.side_effect = error

    with pytest.raises(ProviderError):
        twitter_server().get_temporary_credentials()


def test_get_authorization_url():
    url = twitter_server().get_authorization_url(temp_credentials())

    assert url == 'https://api.twitter.com/oauth/authenticate?oauth_token=temp_token'


def test_get_token_credentials(mocker):
    session = mock_session(mocker)
    session.fetch_access_token.return_value = {
        'oauth_token': 'access_token',
        'oauth_token_secret': 'access_secret',
        'user_id': '42',
        'screen_name': 'bob',
    }

    token = twitter_server().get_token_credentials(temp_credentials(), 'temp_token', 'verifier')

    assert token == token_credentials()
    session.fetch_access_token.assert_called_once_with(
        'https://api.twitter.com/oauth/access_token', verifier='verifier'
    )


def test_get_token_credentials_mismatched_token(mocker):
    session = mock_session(mocker)

    with pytest.raises(ProviderError):
        twitter_server().get_token_credentials(temp_credentials(), 'someone_else', 'verifier')

    session.fetch_access_token.assert_not_called()


def test_get_token_credentials_denied(mocker):
    session = mock_session(mocker)
    session.fetch_access_token.side_effect = OAuthError('fetch_token_denied', 'nope')

    with pytest.raises(ProviderError):
        twitter_server().get_token_credentials(temp_credentials(), 'temp_token', 'verifier')


def test_get_user_details(mocker):
    session = mock_session(mocker)
    session.get.return_value.json.return_value = mock_twitter_user()

    profile = twitter_server().get_user_details(token_credentials())

    assert profile == Profile(
        uid='42',
        nickname='bob',
        name='Bob',
        email='b@x.com',
        image_url='http://x/a.png',
        extra={'id': 42, 'followers_count': 3},
    )
    session.get.assert_called_once_with(
        'https://api.twitter.com/1.1/account/verify_credentials.json',
        params={'include_email': 'true'},
    )


def test_get_user_details_http_error(mocker):
    session = mock_session(mocker)
    session.get.return_value.raise_for_status.side_effect = requests.HTTPError('401')

    with pytest.raises(ProviderError):
        twitter_server().get_user_details(token_credentials())


def test_make_profile_missing_fields():
    profile = twitter_server().make_profile({'id_str': 7, 'screen_name': 'bob'})

    assert profile.uid == '7'
    assert profile.email is None
    assert profile.extra == {}


def test_providers_loader(app):
    providers = providers_loader(app.config['OAUTH1_PROVIDERS_FILE'])

    assert providers['twitter']['app_key'] == 'TWITTER'
    assert providers['twitter']['fields']['uid'] == 'id_str'


class TestRegistry(object):
    def test_create_server(self, app):
        server = app.extensions['oauth1'].create_server('twitter', 'http://cb')

        assert server.consumer_key == 'test_key'
        assert server.consumer_secret == 'test_secret'
        assert server.callback_uri == 'http://cb'
        assert server.authorize_url == 'https://api.twitter.com/oauth/authenticate'

    def test_unknown_provider(self, app):
        with pytest.raises(KeyError):
            app.extensions['oauth1'].create_server('myspace', 'http://cb')

    def test_register(self):
        registry = OAuth1()
        registry.register('example', request_token_url='r', authorize_url='a',
                          access_token_url='t', user_details_url='u')

        config = {'EXAMPLE': {'consumer_key': 'k', 'consumer_secret': 's'}}
        server = registry.create_server('example', 'http://cb', config=config)

        assert server.name == 'example'
        assert server.consumer_key == 'k'
        assert server.fields == {}
