import logging
import sys

from supermix.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Pillow's PNG plugin logs every chunk it writes while a QR code is saved.
QUIET_LOGGERS = ("PIL",)


def _formatter() -> logging.Formatter:
    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        return JsonFormatter(
            fmt=JSON_FORMAT,
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    return logging.Formatter(TEXT_FORMAT)


def configure_logging() -> None:
    """Send supermix logs to stderr at ``SUPERMIX_LOG_LEVEL``.

    ``SUPERMIX_LOG_JSON=true`` switches to one JSON object per line. Call once
    at startup; the payload details are logged at DEBUG by the PIX service.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
