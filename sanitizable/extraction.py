# -*- coding: utf-8 -*-
"""
    extraction.py: build sanitized models from request JSON

    extract_model: create path (permit -> inject -> pre_validate -> from_json -> post_validate)
    patch_model: update path (permit -> merge onto model.to_json() -> from_json -> exists -> post_validate)

    These functions don't persist anything, the caller adds/commits the returned instance.
"""
from collections.abc import Mapping
from typing import Any, Optional

import sanitizable
from .config import get_flag
from .contract import M
from .errors import GenericError, MissingBodyError, NotFoundError, SanitizeError
from .permit import JSONDocument, inject, merge, permit


def _require_body(body: Any) -> Mapping:
    """
    :param body: parsed request JSON
    :return: body, if it's a JSON object
    """
    if body is None:
        raise MissingBodyError()
    if not isinstance(body, Mapping):
        raise MissingBodyError(f"expected a JSON object, got {type(body).__name__}")
    return body


def _construct(model_cls: type[M], data: JSONDocument) -> M:
    """
    Instantiate `model_cls` from `data`, failures are translated by `model_cls.update_thrown_error`
    """
    try:
        return model_cls.from_json(data)
    except Exception as exc:
        sanitizable.log.warning(f"Failed to instantiate {model_cls.__name__}: {exc}")
        error = model_cls.update_thrown_error(exc)
        if error is exc:
            raise
        raise error from exc


def extract_model(model_cls: type[M], body: Any, injecting: Optional[Mapping] = None) -> M:
    """
    Extract a `model_cls` instance from the request JSON, first stripping the fields
    that are not permitted and then adding/overriding the `injecting` values.

    :param model_cls: `Sanitizable` model class
    :param body: parsed request JSON
    :param injecting: trusted values to set after sanitizing, eg. a foreign key from the url
    :return: the new (not persisted) instance
    :raises MissingBodyError: the request doesn't have a JSON body
    :raises: the error returned by `model_cls.update_thrown_error` when instantiation fails
    """
    body = _require_body(body)
    sanitized = permit(body, model_cls.permitted)
    dropped = set(body) - set(sanitized)
    if dropped:
        sanitizable.log.debug(f"{model_cls.__name__}: ignoring fields {sorted(dropped)}")

    if injecting:
        sanitizable.log.debug(f"{model_cls.__name__}: injecting {sorted(injecting)}")
    inject(sanitized, injecting)

    model_cls.pre_validate(sanitized)
    model = _construct(model_cls, sanitized)
    model.post_validate()
    return model


def patch_model(model: M, body: Any) -> M:
    """
    Update the provided `model` with the permitted fields of the request JSON.
    The request values are merged onto `model.to_json()` and a new instance is built from the result,
    `model` itself is left untouched.

    :param model: `Sanitizable` instance to patch
    :param body: parsed request JSON
    :return: the patched instance, with `exists` set
    :raises MissingBodyError: the request doesn't have a JSON body
    :raises: the error returned by `update_thrown_error` when instantiation fails
    """
    model_cls = type(model)
    body = _require_body(body)
    patch = permit(body, model_cls.permitted)

    merged = merge(model.to_json(), patch)
    if get_flag("SANITIZE_PATCH_PREVALIDATE"):
        model_cls.pre_validate(merged)

    patched = _construct(model_cls, merged)
    patched.exists = True
    patched.post_validate()
    return patched


def patch_model_by_id(model_cls: type[M], identifier: Any, body: Any) -> M:
    """
    Fetch the `model_cls` instance with the given `identifier` and patch it, cfr. `patch_model`

    :raises NotFoundError: no instance was found
    :raises GenericError: the lookup failed (unless SANITIZE_COLLAPSE_LOOKUP_ERRORS is set)
    """
    # the body is checked before the lookup hits the db
    body = _require_body(body)
    try:
        model = model_cls.find(identifier)
    except SanitizeError:
        # the model reported the error itself, eg. NotFoundError
        raise
    except Exception as exc:
        if get_flag("SANITIZE_COLLAPSE_LOOKUP_ERRORS"):
            raise NotFoundError(f'Invalid "{model_cls.__name__}" ID "{identifier}"') from exc
        raise GenericError(f"Failed to fetch {model_cls.__name__} {identifier}: {exc}") from exc

    if model is None:
        raise NotFoundError(f'Invalid "{model_cls.__name__}" ID "{identifier}"')

    return patch_model(model, body)
