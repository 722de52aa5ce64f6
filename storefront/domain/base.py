"""Base classes for domain layer.

Value objects compare by value; entities compare by their id.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, TypeVar


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable, attribute-compared domain value.

    Subclasses are frozen dataclasses, e.g. ``Money`` or ``Product``.
    Two instances holding the same fields are interchangeable.
    """


IdT = TypeVar("IdT", bound=ValueObject)


@dataclass(kw_only=True)
class Entity(ABC, Generic[IdT]):
    """Mutable domain object with a stable identity.

    Subclasses must declare ``eq=False`` on their own dataclass decorator
    so the identity comparison below is not replaced by a field-wise one.

    Attributes:
        id: Typed identifier of the entity.
    """

    id: IdT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
