"""
Settings read from the environment variables

Each variable is reported once at the DEBUG level (enabled by ``SHOPIFY_DEBUG``) so that the effective configuration
of a CLI run can be inspected. Secret values are masked.
"""
import json
import logging
import os
from sys import stderr
from typing import Any, Callable, Dict, Optional

_TRUTHY_VALUES = ('1', 'true', 'yes', 'on')

# The main logger takes its level from the variables read here, so this module has its own logger.
_logger = logging.getLogger('shopify_rest.environment')
_logger.propagate = False
if not _logger.handlers:
    _handler = logging.StreamHandler(stderr)
    _handler.setFormatter(logging.Formatter('[ %(asctime)s | %(levelname)s ] %(name)s: %(message)s'))
    _logger.addHandler(_handler)
_logger.setLevel(logging.DEBUG if os.getenv('SHOPIFY_DEBUG', '').strip().lower() in _TRUTHY_VALUES else logging.INFO)

_reported_values: Dict[str, str] = dict()


class EnvironmentVariableRequired(RuntimeError):
    def __init__(self, environment_variable_name: str, hint: Optional[str] = None):
        feedback = f'Environment variable required: {environment_variable_name}'
        super(EnvironmentVariableRequired, self).__init__(f'{feedback} ({hint})' if hint else feedback)


class InvalidEnvironmentVariable(ValueError):
    """ Raised when the value of an environment variable cannot be converted """

    def __init__(self, environment_variable_name: str, value: str, reason: str):
        super(InvalidEnvironmentVariable, self).__init__(
            f'Invalid value of {environment_variable_name}: {value!r} ({reason})'
        )
        self.environment_variable_name = environment_variable_name


def _report(key: str, value: Any, kind: str, description: Optional[str], secret: bool):
    if key in _reported_values:
        return

    shown_value = '"***"' if secret and value else json.dumps(value)
    _reported_values[key] = shown_value

    label = f'{kind.upper()} "{key}" ({description})' if description else f'{kind.upper()} "{key}"'
    _logger.debug(f'{label} -> {shown_value}')


def env(key: str,
        default: Any = None,
        required: bool = False,
        transform: Optional[Callable[[str], Any]] = None,
        hint: Optional[str] = None,
        env_type: Optional[str] = None,
        description: Optional[str] = None,
        secret: bool = False) -> Any:
    """
    Read the environment variable

    :param transform: converts the raw value. A ``ValueError`` from it becomes :class:`InvalidEnvironmentVariable`.
    :param secret: mask the value in the log
    """
    raw_value = os.getenv(key)

    if raw_value is None:
        if required:
            _logger.error(f'Missing {(env_type or "var").upper()} "{key}" ({description})')
            raise EnvironmentVariableRequired(key, hint)
        value = default
    elif transform:
        try:
            value = transform(raw_value)
        except ValueError as e:
            raise InvalidEnvironmentVariable(key, '***' if secret else raw_value, str(e)) from e
    else:
        value = raw_value

    _report(key, value, env_type or 'env', description, secret)

    return value


def flag(key: str, description: Optional[str] = None) -> bool:
    return bool(env(key,
                    default=False,
                    transform=lambda v: v.strip().lower() in _TRUTHY_VALUES,
                    env_type='flag',
                    description=description))
