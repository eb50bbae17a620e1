"""
Request class that extracts sanitized models from the request JSON body.

The `Sanitize` extension installs it as the flask `app.request_class`, the view functions can then use:

    user = request.extract_model(User)
    book = request.extract_model(Book, injecting={"user_id": user_id})
    book = request.patch_model_by_id(Book, book_id)
"""
from collections.abc import Mapping
from typing import Any, Optional
from flask import Request
import sanitizable
from .contract import M
from .extraction import extract_model, patch_model, patch_model_by_id
from .permit import JSONDocument


# pylint: disable=too-many-ancestors
class SanitizeRequest(Request):
    """
    Flask request with model extraction helpers
    """

    @property
    def json_body(self) -> Optional[JSONDocument]:
        """
        :return: the JSON object sent in the request body or None

        None is returned when there's no body, when the content type isn't json,
        when the json can't be parsed and when the json isn't an object
        """
        result = self.get_json(silent=True)
        if result is None:
            return None
        if not isinstance(result, Mapping):
            sanitizable.log.warning(f"Invalid JSON Payload type: {type(result).__name__}")
            return None
        return result

    def extract_model(self, model_cls: type[M], injecting: Optional[Mapping] = None) -> M:
        """
        Extract a `model_cls` instance from the request JSON, cfr. `sanitizable.extraction.extract_model`
        """
        return extract_model(model_cls, self.json_body, injecting=injecting)

    def patch_model(self, model: M) -> M:
        """
        Update the provided `model` with the request JSON, cfr. `sanitizable.extraction.patch_model`
        """
        return patch_model(model, self.json_body)

    def patch_model_by_id(self, model_cls: type[M], identifier: Any) -> M:
        """
        Update the `model_cls` instance with the provided `identifier`
        """
        return patch_model_by_id(model_cls, identifier, self.json_body)
