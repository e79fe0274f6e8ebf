from annostore.config.base import *  # noqa # Must be absolute package name

DEBUG = True
TESTING = True
ANNOSTORE_ENV = env('FLASK_ENV', default='test')
