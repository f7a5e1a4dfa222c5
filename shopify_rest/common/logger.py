import logging
from http.client import HTTPConnection
from sys import stderr
from typing import Optional

from shopify_rest.common.environments import env
from shopify_rest.feature_flags import in_global_debug_mode

logging_format = '[ %(asctime)s | %(levelname)s ] %(name)s: %(message)s'
overriding_logging_level_name = env(
    'SHOPIFY_LOG_LEVEL',
    description='Default CLI/library log level. In the debug mode, the log level will be overridden to DEBUG',
    required=False
)
default_logging_level = getattr(logging, overriding_logging_level_name) \
    if overriding_logging_level_name in ('DEBUG', 'INFO', 'WARNING', 'ERROR') \
    else logging.WARNING

if in_global_debug_mode:
    default_logging_level = logging.DEBUG
    HTTPConnection.debuglevel = 1

logging.basicConfig(format=logging_format,
                    level=default_logging_level)

# Configure the logger of HTTP client (global settings)
requests_log = logging.getLogger("urllib3")
requests_log.setLevel(default_logging_level)
requests_log.propagate = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """ Get the named logger

        The handler is attached only once per name so that repeatedly created clients do not duplicate the output.
    """
    log_level = level or default_logging_level

    logger = logging.getLogger(f'shopify_rest.{name}')
    logger.setLevel(log_level)
    logger.propagate = False

    if not logger.handlers:
        handler = logging.StreamHandler(stderr)
        handler.setFormatter(logging.Formatter(logging_format))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(log_level)

    return logger


def get_logger_for(ref: object, level: Optional[int] = None) -> logging.Logger:
    """ Shortcut for creating a logger of a class/object """
    return get_logger(type(ref).__name__, level)
