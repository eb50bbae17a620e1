from typing import Any, Collection, Optional, Protocol, TypeVar, runtime_checkable

from .permit import JSONDocument

M = TypeVar("M", bound="Sanitizable")


@runtime_checkable
class Sanitizable(Protocol):
    """
    Capabilities a model class needs to be extracted from or patched with request JSON.
    `SanitizableBase` implements them for Flask-SQLAlchemy models.

    - permitted: the top-level keys a client may set
    - pre_validate: validate the sanitized document before construction
    - from_json: construct an instance from a document
    - update_thrown_error: translate a construction error
    - post_validate: validate the constructed instance
    - find: lookup by identifier, for patching
    - exists: whether the instance is (believed to be) persisted
    - to_json: full document representation, the base for patching
    """

    permitted: Collection[str]
    exists: bool

    @classmethod
    def pre_validate(cls, data: JSONDocument) -> None:
        ...

    @classmethod
    def from_json(cls: type[M], data: JSONDocument) -> M:
        ...

    @classmethod
    def update_thrown_error(cls, error: Exception) -> Exception:
        ...

    @classmethod
    def find(cls: type[M], identifier: Any) -> Optional[M]:
        ...

    def post_validate(self) -> None:
        ...

    def to_json(self) -> JSONDocument:
        ...
