from envparse import env


"""Base config for the reference store server."""
DEBUG = False
TESTING = False
ANNOSTORE_ENV = env('FLASK_ENV', default='development')

# Prepended to every id the store hands out, e.g. http://localhost:5002/id/
STORE_ID_PREFIX = env('STORE_ID_PREFIX', default='')

# Largest accepted JSON body, in bytes.
MAX_CONTENT_LENGTH = env.int('STORE_MAX_CONTENT_LENGTH', default=4 * 1024 * 1024)
