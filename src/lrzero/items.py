"""LR(0) items and item-set comparison."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from ._misc import override
from .grammar import Production

__all__ = ("Item", "item_set_key", "same_item_set", "unique_items")


@dataclass(frozen=True)
class Item:
    """A specific stage of parsing a production rule, e.g. "E -> E . + T".

    Extended Summary
    ----------------
    Items are values: two items are equal iff their right hand side, dot position and origin are equal, no matter
    how or where they were synthesized. The production number only serves display purposes.

    Attributes
    ----------
    prod: tuple[str, ...]
        The right hand side of the production.
    dot: int
        How many symbols of `prod` have been matched. `dot == len(prod)` marks a completed item.
    origin: str
        The left hand side the item reduces to.
    number: int
        Production number. Not part of the item's identity.
    """

    prod: tuple[str, ...]
    dot: int
    origin: str
    number: int = field(default=-1, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.dot <= len(self.prod):
            msg = f"Dot position {self.dot} is outside of [0, {len(self.prod)}]."
            raise ValueError(msg)

    @classmethod
    def start(cls, p: Production) -> "Item":
        return cls(p.prod, 0, p.name, p.number)

    @property
    def at_dot(self) -> Optional[str]:
        """The symbol right after the dot, or None for a completed item."""

        if self.dot < len(self.prod):
            return self.prod[self.dot]
        return None

    @property
    def is_complete(self) -> bool:
        return self.dot == len(self.prod)

    def advance(self) -> "Item":
        """Return the successor item with the dot moved past one symbol."""

        if self.is_complete:
            msg = f"Can't advance completed item ({self})."
            raise ValueError(msg)
        return Item(self.prod, self.dot + 1, self.origin, self.number)

    @override
    def __str__(self) -> str:
        syms = [*self.prod[: self.dot], ".", *self.prod[self.dot :]]
        return f'{self.origin} -> {" ".join(syms)}'


def unique_items(items: Iterable[Item]) -> tuple[Item, ...]:
    """Drop duplicate items, keeping the first occurrence of each."""

    return tuple(dict.fromkeys(items))


def item_set_key(items: Iterable[Item]) -> frozenset[Item]:
    """Order-independent key of an item set. Equal keys mean set-equal item sets."""

    return frozenset(items)


def same_item_set(a: Iterable[Item], b: Iterable[Item]) -> bool:
    return item_set_key(a) == item_set_key(b)
