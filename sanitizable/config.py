# Configuration settings should be set in app.config
# The get_config function looks up the flask app config first, then the options passed to Sanitize(app, ...),
# then the Sanitize class defaults and finally the environment
import os
import logging
from flask import current_app, has_app_context
import sanitizable
from typing import Any, Optional

TRUTHY = ("1", "true", "yes", "on")


def get_config(option: str) -> Optional[Any]:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    result = None
    if has_app_context():
        result = current_app.config.get(option, None)
        extension = current_app.extensions.get("sanitizable", None)
        if result is None and extension is not None:
            # options passed to Sanitize(app, ...)
            result = extension.config.get(option, None)
    if result is None:
        result = getattr(sanitizable.Sanitize, option, None)
    if result is None:
        result = os.environ.get(option, None)
    return result


def get_flag(option: str) -> bool:
    """
    :param option: boolean configuration parameter
    :return: the parameter value, environment strings like "1" or "true" are accepted
    """
    result = get_config(option)
    if isinstance(result, str):
        return result.strip().lower() in TRUTHY
    return bool(result)


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return sanitizable.log.getEffectiveLevel() < logging.INFO
