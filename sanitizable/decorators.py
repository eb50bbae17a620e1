"""
View decorator that renders the sanitizable errors
"""
from functools import wraps
from typing import Callable
from flask import current_app, jsonify
import sanitizable
from .errors import SanitizeError


def handle_sanitize_errors(fun: Callable) -> Callable:
    """Decorator for flask views that extract or patch models
    - roll back the db session
    - convert `SanitizeError`s (and errors returned by `update_thrown_error` that carry a `status_code`)
      to a json error response

    Other exceptions are not caught
    :param fun: view function
    :return: wrapped fun
    """

    @wraps(fun)
    def view_wrapper(*args, **kwargs):
        """Wrap the view and perform error handling
        :param *args:
        :param **kwargs:
        :return: result of the wrapped view or an error response
        """
        try:
            return fun(*args, **kwargs)
        except Exception as exc:
            if not isinstance(exc, SanitizeError) and not hasattr(exc, "status_code"):
                raise
            sanitizable.log.exception(exc)
            if "sqlalchemy" in current_app.extensions:
                sanitizable.DB.session.rollback()
            status_code = getattr(exc, "status_code", 400)
            api_code = getattr(exc, "api_code", None) or status_code
            title = getattr(exc, "message", None) or str(exc)
            detail = getattr(exc, "detail", title)
            errors = dict(title=title, detail=detail, code=str(api_code))
            return jsonify({"errors": [errors]}), status_code

    return view_wrapper
