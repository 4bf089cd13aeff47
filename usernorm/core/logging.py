"""PII-safe logging for the ``usernorm`` package.

The package only creates module loggers; it installs no handlers on
import.  Applications that want the package's own console output call
``setup_logging()`` once at start-up.  It configures the ``usernorm``
logger tree only, leaving the root logger to the host application.
"""
import logging
import logging.config
import re

PII_PATTERNS = [
    re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"),
    # 11-digit mobiles, optionally with +, spaces or hyphens; longer digit runs are redacted too
    re.compile(r"(?<!\d)\+?\d[\d\s-]{9,}\d(?!\d)"),
    re.compile(r"(?i)((?:mobile|phone|mail)\s*[=:]\s*)([^,\s]+)"),
]

PACKAGE_LOGGER = "usernorm"


class PIISafeFilter(logging.Filter):
    def _sanitize(self, value: object) -> object:
        if not isinstance(value, str):
            return value

        redacted = value
        for pattern in PII_PATTERNS:
            if pattern.groups:
                redacted = pattern.sub(r"\1[REDACTED]", redacted)
            else:
                redacted = pattern.sub("[REDACTED]", redacted)
        return redacted

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._sanitize(record.msg)

        if isinstance(record.args, tuple):
            record.args = tuple(self._sanitize(item) for item in record.args)
        elif isinstance(record.args, dict):
            record.args = {key: self._sanitize(value) for key, value in record.args.items()}

        return True


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a PII-filtered console handler to the ``usernorm`` logger.

    *level* overrides ``LOG_LEVEL``.  Lines are prefixed with ``APP_NAME``
    so they can be told apart in a host application's output.  Records are
    not propagated to the root logger.
    """
    from usernorm.core.settings import get_settings

    settings = get_settings()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "pii_safe": {
                    "()": "usernorm.core.logging.PIISafeFilter",
                }
            },
            "formatters": {
                "default": {
                    "format": f"%(asctime)s {settings.app_name} %(levelname)s %(name)s %(message)s",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "filters": ["pii_safe"],
                }
            },
            "loggers": {
                PACKAGE_LOGGER: {
                    "handlers": ["console"],
                    "level": (level or settings.log_level).upper(),
                    "propagate": False,
                },
            },
        }
    )
    return logging.getLogger(PACKAGE_LOGGER)
