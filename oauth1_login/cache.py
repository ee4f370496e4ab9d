from flask_caching import Cache

# Configured from app.config by create_app
cache = Cache()
