import logging

from envparse import env

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure(name, level=logging.INFO, stderr_fallback=True):
    """Sends the root logger's records to Google Cloud Logging as `name`.

    Only when USE_CLOUD_LOGGING is on and we are not inside a pytest run.
    Otherwise records go to stderr, or stay with the host's own handlers
    (Flask) when `stderr_fallback` is off. Returns whether Cloud Logging
    was attached.
    """
    under_pytest = env("PYTEST_CURRENT_TEST", default=None) is not None
    if under_pytest or not env.bool("USE_CLOUD_LOGGING", default=False):
        if stderr_fallback:
            logging.basicConfig(level=level, format=LOG_FORMAT)
        return False

    from google.cloud import logging as glog
    from google.cloud.logging.handlers import CloudLoggingHandler, setup_logging

    setup_logging(CloudLoggingHandler(glog.Client(), name=name), log_level=level)
    return True
