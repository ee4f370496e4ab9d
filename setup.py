from setuptools import setup, find_packages

setup(
    name='oauth1_login',
    version='0.1.0',
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    package_data={
        'oauth1_login': ['providers.yml'],
    },
    install_requires=[
        'flask',
        'authlib',
        'requests',
        'flask-caching',
        'marshmallow>=3',
        'pyyaml',
        'redis',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-flask',
            'pytest-mock',
        ],
    },
)
