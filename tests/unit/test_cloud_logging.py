import logging

from mockito import when, verify

from annostore.shared import cloud_logging


def test_configure_logs_to_stderr_without_cloud_logging():
    when(logging).basicConfig(...).thenReturn(None)

    assert cloud_logging.configure("annostore-cli") is False

    verify(logging).basicConfig(level=logging.INFO, format=cloud_logging.LOG_FORMAT)


def test_configure_never_attaches_cloud_logging_under_pytest(monkeypatch):
    monkeypatch.setenv("USE_CLOUD_LOGGING", "1")
    when(logging).basicConfig(...).thenReturn(None)

    assert cloud_logging.configure("annostore-store-server", stderr_fallback=False) is False

    verify(logging, times=0).basicConfig(...)
