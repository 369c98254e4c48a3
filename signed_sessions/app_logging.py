"""JSON log output for apps that use sessions."""

import logging

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def _json_handler(logger: logging.Logger) -> logging.Handler:
    for handler in logger.handlers:
        if isinstance(handler.formatter, JsonFormatter):
            return handler
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(
        LOG_FORMAT,
        rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
    ))
    logger.addHandler(handler)
    return handler


def setup_logger(level: int = logging.INFO) -> logging.Handler:
    """
    Send log records from every logger to stderr as JSON.

    Safe to call once per app: the root logger only ever gets one JSON
    handler, which is returned.
    """
    root = logging.getLogger()
    root.setLevel(level)
    return _json_handler(root)
