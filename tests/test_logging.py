import logging

import pytest

from usernorm.core.logging import PACKAGE_LOGGER, PIISafeFilter, setup_logging
from usernorm.normalization.email_normalizer import normalize_email
from usernorm.normalization.username import generate_unique_username


def test_pii_filter_redacts_email_and_phone(caplog):
    logger = logging.getLogger("test.pii")
    logger.setLevel(logging.INFO)
    logger.filters = []
    logger.addFilter(PIISafeFilter())

    with caplog.at_level(logging.INFO, logger="test.pii"):
        logger.info("Contact wang.yu@hzxb.com phone 18237009876")

    assert "wang.yu@hzxb.com" not in caplog.text
    assert "18237009876" not in caplog.text
    assert "[REDACTED]" in caplog.text


def test_pii_filter_phone_pattern_spares_short_numbers():
    sanitize = PIISafeFilter()._sanitize

    assert sanitize("processed 1200 users in batch 42") == "processed 1200 users in batch 42"
    assert sanitize("mobile 182-3700-9876 rejected") == "mobile [REDACTED] rejected"
    assert sanitize("+86 18237009876") == "[REDACTED]"


def test_pii_filter_redacts_field_assignment_and_args(caplog):
    logger = logging.getLogger("test.fields")
    logger.setLevel(logging.INFO)
    logger.filters = []
    logger.addFilter(PIISafeFilter())

    with caplog.at_level(logging.INFO, logger="test.fields"):
        logger.info("syncing mobile=9876 for %s", "lisi@hzxb.com")

    assert "9876" not in caplog.text
    assert "lisi@hzxb.com" not in caplog.text
    assert "mobile=[REDACTED]" in caplog.text


def test_normalizers_never_log_raw_values(caplog):
    with caplog.at_level(logging.DEBUG, logger="usernorm"):
        normalize_email("wang·yu@hzxb", "wangyu", "hzxb.com")
        normalize_email("not-an-address", "wangyu", "hzxb.com")
        generate_unique_username("wangyu", "18237009876", lambda _: True)

    assert caplog.records
    assert "wangyu" not in caplog.text
    assert "9876" not in caplog.text
    assert "hzxb" not in caplog.text


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = logger.handlers[:], logger.level, logger.propagate
    yield logger
    logger.handlers, logger.propagate = saved[0], saved[2]
    logger.setLevel(saved[1])


def test_setup_logging_configures_package_logger_only(clean_settings, monkeypatch, package_logger):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    root = logging.getLogger()
    root_handlers, root_level = root.handlers[:], root.level

    assert setup_logging() is package_logger
    assert package_logger.level == logging.WARNING
    assert package_logger.propagate is False
    assert any(
        isinstance(f, PIISafeFilter) for handler in package_logger.handlers for f in handler.filters
    )
    assert root.handlers == root_handlers
    assert root.level == root_level


def test_setup_logging_prefixes_app_name_and_redacts(clean_settings, monkeypatch, capsys, package_logger):
    monkeypatch.setenv("APP_NAME", "hr-sync")

    setup_logging("debug")
    logging.getLogger("usernorm.normalization.username").debug("retrying mobile=18237009876")

    err = capsys.readouterr().err
    assert "hr-sync DEBUG usernorm.normalization.username" in err
    assert "mobile=[REDACTED]" in err
    assert "9876" not in err
