# base.py: implements the SanitizableBase SQLAlchemy db Mixin
#
# pylint: disable=no-self-argument,no-member,line-too-long,protected-access
#
"""
SanitizableBase customizable attributes and methods, override these to customize how
instances are extracted from request JSON.

permitted:
Type: frozenset[str] or classproperty
Description: The top-level JSON keys a client is allowed to set.
Defaults to the column attribute names, except for the primary keys and `exclude_attrs`.


exclude_attrs:
Type: list[str]
Description: Column attribute names that are never permitted, eg. "owner_id" or "created".


pre_validate:
Type: classmethod
Description: Validates the sanitized JSON document before the instance is constructed.


post_validate:
Type: method
Description: Validates the constructed instance.


update_thrown_error:
Type: classmethod
Description: Translates the exception raised by `from_json` into the error that is raised to the caller.


from_json:
Type: classmethod
Description: Creates a transient instance from a JSON document.


to_json:
Type: method
Description: Returns the JSON document with all column values, the base document when patching.


find:
Type: classmethod
Description: Returns the instance with the given primary key or None.


exists:
Type: property
Description: Whether the instance is persisted, `patch_model` sets it to True.
"""
from __future__ import annotations
import datetime
import decimal
import uuid
from functools import lru_cache
from typing import Optional
from flask_sqlalchemy.model import Model
from sqlalchemy import inspect as sqla_inspect

# sanitizable dependencies:
import sanitizable
from .attr_parse import parse_attr
from .errors import MissingFieldError, SanitizeError, ValidationError
from .util import classproperty


def _encode_value(value):
    """
    :return: JSON compatible representation of a column value that `parse_attr` can read back
    """
    if isinstance(value, datetime.datetime):
        return value.isoformat(" ")
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, decimal.Decimal):
        return str(value)
    return value


#
# SanitizableBase superclass
#
class SanitizableBase(Model):
    """This SQLAlchemy mixin lets Flask-SQLAlchemy models be extracted from request JSON:
    it implements the `sanitizable.contract.Sanitizable` capabilities.

    Instances created by `from_json` are transient: they're not added to the session,
    the caller decides how to persist them (`session.add` for new instances, `session.merge`
    for patched instances).
    """

    exclude_attrs = []  # attribute names that clients are never allowed to set

    @classmethod
    @lru_cache(maxsize=None)
    def _s_column_attrs(cls) -> dict:
        """
        :return: dict mapping the column attribute names to their columns
        """
        return {prop.key: prop.columns[0] for prop in sqla_inspect(cls).column_attrs}

    @classmethod
    @lru_cache(maxsize=None)
    def _s_pk_names(cls) -> tuple:
        pk_columns = set(sqla_inspect(cls).primary_key)
        return tuple(name for name, column in cls._s_column_attrs().items() if column in pk_columns)

    @classproperty
    def permitted(cls) -> frozenset:
        return cls._s_default_permitted()

    @classmethod
    @lru_cache(maxsize=None)
    def _s_default_permitted(cls) -> frozenset:
        pk_names = cls._s_pk_names()
        return frozenset(name for name in cls._s_column_attrs() if name not in pk_names and name not in cls.exclude_attrs)

    @classmethod
    def _s_is_required(cls, attr_name) -> bool:
        """
        Primary keys are not required: they're generated or come from the existing instance
        """
        column = cls._s_column_attrs()[attr_name]
        if attr_name in cls._s_pk_names():
            return False
        return not column.nullable and column.default is None and column.server_default is None

    @classmethod
    def pre_validate(cls, data: dict) -> None:
        """
        Override this to validate the sanitized document, raise an exception if it isn't valid
        :param data: sanitized (and injected) JSON document
        """

    def post_validate(self) -> None:
        """
        Override this to validate the constructed instance
        """

    @classmethod
    def update_thrown_error(cls, error: Exception) -> Exception:
        """
        :param error: exception raised by `from_json`
        :return: the exception that will be raised instead

        Override this to return a domain specific error.
        By default `SanitizeError`s are kept, other errors become a `ValidationError`
        """
        if isinstance(error, SanitizeError):
            return error
        return ValidationError(f"Failed to create {cls.__name__}: {error}")

    @classmethod
    def from_json(cls, data: dict) -> SanitizableBase:
        """
        :param data: JSON document, keys that aren't column attributes are ignored
        :return: new transient `cls` instance
        :raises MissingFieldError: a required attribute is missing or null
        :raises FieldTypeError: a value can't be parsed for its column
        """
        attributes = {}
        for attr_name, column in cls._s_column_attrs().items():
            attr_val = data.get(attr_name, None)
            if attr_name not in data:
                if cls._s_is_required(attr_name):
                    raise MissingFieldError(attr_name, cls.__name__)
                # let sqlalchemy apply the column default
                continue
            if attr_val is None and not column.nullable and attr_name not in cls._s_pk_names():
                raise MissingFieldError(attr_name, cls.__name__)
            attributes[attr_name] = parse_attr(attr_name, column, attr_val)

        # pylint: disable=not-callable
        return cls(**attributes)

    def to_json(self) -> dict:
        """
        :return: dictionary with all column attribute values
        """
        return {attr_name: _encode_value(getattr(self, attr_name)) for attr_name in self._s_column_attrs()}

    @classmethod
    def find(cls, identifier) -> SanitizableBase | None:
        """
        :param identifier: primary key value, eg. the id from the url
        :return: instance or None

        Database errors are not caught, `patch_model_by_id` decides how to report them
        """
        pk_names = cls._s_pk_names()
        if len(pk_names) == 1:
            column = cls._s_column_attrs()[pk_names[0]]
            try:
                python_type = column.type.python_type
            except NotImplementedError:
                python_type = None
            if python_type is not None and not isinstance(identifier, python_type):
                try:
                    identifier = python_type(identifier)
                except (ValueError, TypeError):
                    # a malformed id is just an unknown id
                    sanitizable.log.debug(f"Invalid {cls.__name__} id {identifier!r}")
                    return None
        return sanitizable.DB.session.get(cls, identifier)

    @property
    def exists(self) -> bool:
        """
        :return: True if the flag has been set, otherwise whether the instance is in the database
        """
        forced = self.__dict__.get("_s_exists", None)
        if forced is not None:
            return forced
        state = sqla_inspect(self)
        return state.persistent or state.detached

    @exists.setter
    def exists(self, value: Optional[bool]) -> None:
        """
        None clears the flag, `exists` is derived from the instance state again
        """
        if value is None:
            self.__dict__.pop("_s_exists", None)
        else:
            self.__dict__["_s_exists"] = bool(value)
