"""
    permit.py: top-level JSON document filtering and merging

    A JSON document is a plain dict as returned by `flask.Request.get_json`.
    Only top-level keys are considered, nested values are passed as-is.
"""
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional

JSONDocument = Dict[str, Any]


def permit(document: Optional[Mapping], permitted: Iterable[str]) -> JSONDocument:
    """
    :param document: client supplied JSON object
    :param permitted: names of the keys the client is allowed to set
    :return: new document holding only the permitted keys

    Values are not copied or modified, a document without permitted keys results in {}
    """
    if not isinstance(document, Mapping):
        return {}
    permitted = permitted if isinstance(permitted, (set, frozenset)) else frozenset(permitted)
    return {key: value for key, value in document.items() if key in permitted}


def inject(document: JSONDocument, values: Optional[Mapping]) -> JSONDocument:
    """
    Set (or override) the keys of `values` in `document`, in place.
    The values are trusted server side values, they're not filtered
    :param document: sanitized document
    :param values: values to inject, None means nothing to inject
    :return: document
    """
    if values:
        for key, value in values.items():
            document[key] = value
    return document


def merge(base: Mapping, patch: Mapping) -> JSONDocument:
    """
    Right-biased merge: the `patch` values override the `base` values
    :param base: existing document, it isn't modified
    :param patch: incoming values
    :return: merged document
    """
    result = dict(base)
    for key, value in patch.items():
        result[key] = value
    return result
