import mockito
import pytest

from tests.fixtures import (  # noqa
    store_server_client,
    store_session,
    adapter_config,
    document_dao,
)


@pytest.fixture(autouse=True)
def unstub_mockito():
    yield
    mockito.unstub()


@pytest.fixture(scope="session", autouse=True)
def disable_cloud_logging():
    import os
    old_val = os.environ.get('USE_CLOUD_LOGGING', default=None)
    os.environ['USE_CLOUD_LOGGING'] = '0'

    yield

    if old_val is None:
        del os.environ['USE_CLOUD_LOGGING']
    else:
        os.environ['USE_CLOUD_LOGGING'] = old_val
