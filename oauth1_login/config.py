import os


def _flag(name, default='false'):
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


class Config(object):
    SECRET_KEY = os.getenv('SECRET_KEY_AUTH')
    FRONT_URL = os.getenv('FRONT_HOST')
    AUTH_HOST = os.getenv('AUTH_HOST')

    OAUTH1_PROVIDERS_FILE = os.path.join(os.path.dirname(__file__), 'providers.yml')
    # 'session', 'file' or 'cache'
    OAUTH1_CREDENTIAL_STORE = os.getenv('OAUTH1_CREDENTIAL_STORE', 'session')
    OAUTH1_STATELESS = _flag('OAUTH1_STATELESS')
    OAUTH1_STORAGE_DIR = os.getenv('OAUTH1_STORAGE_DIR', os.path.join(os.getcwd(), 'storage', 'app'))
    OAUTH1_CACHE_TIMEOUT = 10 * 60

    CACHE_TYPE = 'SimpleCache'
    CACHE_DEFAULT_TIMEOUT = 5
    CACHE_KEY_PREFIX = 'oauth1-login:'

    TWITTER = {
        'consumer_key': os.getenv('TWITTER_CONSUMER_KEY'),
        'consumer_secret': os.getenv('TWITTER_CONSUMER_SECRET'),
    }


class DevConfig(Config):
    SECRET_KEY = os.getenv('SECRET_KEY_AUTH', 'dev')


class TestConfig(Config):
    SECRET_KEY = 'testing'
    FRONT_URL = 'mock://mock-front'
    TESTING = True
    OAUTH1_CREDENTIAL_STORE = 'session'
    OAUTH1_STATELESS = False
    TWITTER = {
        'consumer_key': 'test_key',
        'consumer_secret': 'test_secret',
    }


class ProdConfig(Config):
    CACHE_TYPE = 'RedisCache'
    CACHE_REDIS_HOST = os.getenv('REDIS_HOST')
    CACHE_REDIS_PORT = os.getenv('REDIS_PORT')


app_config = {
    'development': DevConfig,
    'testing': TestConfig,
    'production': ProdConfig
}
