# flake8: noqa: F401
#
# sanitizable: extract allowlist-filtered models from (flask) request JSON
#
from .sanitize_init import DB, log, Sanitize
from .errors import (
    SanitizeError,
    MissingBodyError,
    NotFoundError,
    GenericError,
    ValidationError,
    ConstructionError,
    MissingFieldError,
    FieldTypeError,
)
from .permit import permit, inject, merge
from .contract import Sanitizable
from .extraction import extract_model, patch_model, patch_model_by_id
from .request import SanitizeRequest
from .base import SanitizableBase
from .decorators import handle_sanitize_errors
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "Sanitize",
    "DB",
    "log",
    # contract & base:
    "Sanitizable",
    "SanitizableBase",
    # pipelines:
    "permit",
    "inject",
    "merge",
    "extract_model",
    "patch_model",
    "patch_model_by_id",
    # request
    "SanitizeRequest",
    "handle_sanitize_errors",
    # Errors:
    "SanitizeError",
    "MissingBodyError",
    "NotFoundError",
    "GenericError",
    "ValidationError",
    "ConstructionError",
    "MissingFieldError",
    "FieldTypeError",
)
