"""Node contract, the Reference variant, and fail-fast construction helpers.

Every object kind in the document model is a :class:`Node`: a frozen
Pydantic model with two halves.

* ``from_raw(data)`` -- classmethod turning a decoded map into the typed
  node. It reads only known fields (through :func:`~specparse.keys.normalize_shallow`)
  and recursively builds every nested position. The first nested failure
  raises :class:`~specparse.exceptions.StructuralError` and aborts the whole
  build, so a partial tree is never returned.
* ``check(context)`` -- walks the built node and raises the first
  :class:`~specparse.exceptions.SpecValidationError` in a fixed order.

Nodes are created with ``model_construct``: construction is purely
structural, and every value rule is enforced later by ``check``, where the
failure can be reported with its breadcrumb path. Field annotations describe
the shape of a *valid* document.

Any position that may hold "a concrete object or a reference" is resolved once,
at construction time, into either a :class:`Reference` or the concrete model.
Both variants implement ``check``, so validators simply call ``node.check(path)``.
Consumers that need to tell them apart read :attr:`Node.is_reference`.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import Any, ClassVar, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from specparse.exceptions import StructuralError
from specparse.keys import Key, normalize_shallow
from specparse.validation import check_reference, check_type

T = TypeVar("T")


class SpecVersion(str, enum.Enum):
    """The three document dialects the parser recognises."""

    SWAGGER_2_0 = "2.0"
    OPENAPI_3_0 = "3.0"
    OPENAPI_3_1 = "3.1"

    @property
    def label(self) -> str:
        """Human-readable dialect name, e.g. ``"OpenAPI 3.1"``."""
        family = "Swagger" if self is SpecVersion.SWAGGER_2_0 else "OpenAPI"
        return f"{family} {self.value}"


class Node(BaseModel):
    """Base class for every construct-then-validate object."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    is_reference: ClassVar[bool] = False

    @classmethod
    def from_raw(cls, data: Any) -> Any:
        raise NotImplementedError

    def check(self, context: str = "") -> None:
        raise NotImplementedError


class Reference(Node):
    """A pointer to another location in this document or an external resource.

    Only ``summary`` and ``description`` are read next to ``$ref``; any other
    sibling key is ignored.
    """

    ref: Optional[str] = Field(default=None, alias="$ref")
    summary: Optional[str] = None
    description: Optional[str] = None

    is_reference: ClassVar[bool] = True

    @classmethod
    def from_raw(cls, data: Any) -> Reference:
        data = normalize_shallow(expect_map(data, "reference"))
        return cls.model_construct(
            ref=data.get(Key.REF),
            summary=data.get(Key.SUMMARY),
            description=data.get(Key.DESCRIPTION),
        )

    def check(self, context: str = "reference") -> None:
        check_reference(self.ref, context)
        check_type(self.summary, "string", f"{context}.summary")
        check_type(self.description, "string", f"{context}.description")


# --- Construction helpers ---


def expect_map(data: Any, what: str) -> dict[Any, Any]:
    """Return *data* if it is a map, otherwise raise ``StructuralError``."""
    if not isinstance(data, dict):
        raise StructuralError(f"{what} must be a map")
    return data


def has_ref(data: Any) -> bool:
    """Return True when raw *data* is a map carrying the ``$ref`` key."""
    return isinstance(data, dict) and Key.REF in data


def ref_or(builder: Callable[[Any], T]) -> Callable[[Any], Any]:
    """Wrap *builder* so that maps carrying ``$ref`` become a :class:`Reference`."""

    def build(data: Any) -> Any:
        if has_ref(data):
            return Reference.from_raw(data)
        return builder(data)

    return build


def data_key(key: Any) -> Any:
    """Map keys of user-named maps back to plain strings."""
    return key.value if isinstance(key, Key) else key


def build_optional(value: Any, builder: Callable[[Any], T]) -> Optional[T]:
    """Build *value* with *builder* unless it is absent."""
    if value is None:
        return None
    return builder(value)


def build_map(value: Any, builder: Callable[[Any], T], what: str) -> Optional[dict[Any, T]]:
    """Build every value of a user-named map, stopping at the first failure."""
    if value is None:
        return None
    mapping = expect_map(value, what)
    return {data_key(key): builder(item) for key, item in mapping.items()}


def build_list(value: Any, builder: Callable[[Any], T], what: str) -> Optional[list[T]]:
    """Build every element of a list, stopping at the first failure."""
    if value is None:
        return None
    if not isinstance(value, list):
        raise StructuralError(f"{what} must be a list")
    return [builder(item) for item in value]
