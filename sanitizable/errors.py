# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The exceptions can be caught by the handle_sanitize_errors view decorator and formatted, for example:
# {
#      "title": "Validation Error: name is required",
#      "detail": "Validation Error: name is required",
#      "code": "400"
# }
#
import traceback
from flask import request, has_request_context
from werkzeug.exceptions import NotFound
import sanitizable
from sqlalchemy.exc import DontWrapMixin
from http import HTTPStatus
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class SanitizeError(Exception, DontWrapMixin):
    """
    Superclass of the errors raised while extracting or patching models
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = ""
    api_code = None

    def __str__(self):
        return self.message


class MissingBodyError(SanitizeError):
    """
    This exception is raised when the request doesn't carry a JSON object body
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Missing JSON Body"

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        Exception.__init__(self)
        self.status_code = status_code
        self.api_code = api_code
        sanitizable.log.warning("MissingBodyError: %s", message)
        if message:
            self.message += f": {message}"


class NotFoundError(SanitizeError, NotFound):
    """
    This exception is raised when an item was not found
    """

    status_code = HTTPStatus.NOT_FOUND.value
    message = "NotFoundError "

    def __init__(self, message="", status_code=HTTPStatus.NOT_FOUND.value, api_code=None):
        """
        :param message: Message to be returned in the (json) body
        :param status_code: HTTP Status code
        :param api_code: API code
        """
        SanitizeError.__init__(self)
        self.status_code = status_code
        self.api_code = api_code
        sanitizable.log.error("Not found: %s", message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class GenericError(SanitizeError):
    """
    This exception is raised when an error has been detected
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value  # 500
    message = "Generic Error: "

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, api_code=None):
        Exception.__init__(self)
        self.status_code = status_code
        self.api_code = api_code
        sanitizable.log.error("Generic Error: %s", message)
        if is_debug():
            if has_request_context():
                sanitizable.log.info(f"Error in {request.url}")
            sanitizable.log.debug(traceback.format_exc(120))
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class ValidationError(SanitizeError):
    """
    This exception is raised when invalid input has been detected (client side input)
    Always send back the message to the client in the response
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        Exception.__init__(self)
        self.status_code = status_code
        self.api_code = api_code
        sanitizable.log.warning("ValidationError: %s", message)
        self.message += message


class ConstructionError(ValidationError):
    """
    This exception is raised when a model can't be built from a JSON document
    Models may translate it to a domain specific error with `update_thrown_error`
    """

    message = "Construction Error: "

    def __init__(self, message="", field=None, status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        super().__init__(message, status_code=status_code, api_code=api_code)
        self.field = field


class MissingFieldError(ConstructionError):
    """
    A required field is absent from the document
    """

    def __init__(self, field, model_name=""):
        super().__init__(f'{model_name} requires "{field}"'.strip(), field=field)


class FieldTypeError(ConstructionError):
    """
    A field value can't be converted to the column type
    """

    def __init__(self, field, value, reason=""):
        super().__init__(f'Invalid value "{value}" for "{field}" {reason}'.strip(), field=field)
