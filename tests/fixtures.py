import pytest

from annostore.config import test as test_config
from annostore.dao.document_dao import DocumentDao
from annostore.shared.config import AdapterConfig
from annostore.store_server import create_app
from tests.utils import FlaskStoreSession

BASE_URL = "http://store.test"


@pytest.fixture
def store_server_client():
    app = create_app(test_config)

    # Shared across threads, so no preserved request context.
    return app.test_client()


@pytest.fixture
def store_session(store_server_client):
    return FlaskStoreSession(store_server_client, base_url=BASE_URL)


@pytest.fixture
def adapter_config():
    return AdapterConfig(endpoint_url=BASE_URL, timeout=5.0)


@pytest.fixture
def document_dao(adapter_config, store_session):
    return DocumentDao(config=adapter_config, session=store_session)
