from abc import abstractmethod
from typing import List, Iterable, Iterator, Tuple, Optional

from .constants import INT64_MIN, INT64_MAX, DOT, PRINT_ESCAPES, TRUE_LITERAL, FALSE_LITERAL


class Datum:
    """A base class for all kinds of parsed data."""

    __slots__ = ()

    @abstractmethod
    def __eq__(self, other) -> bool:
        raise NotImplementedError

    def __ne__(self, other) -> bool:
        return not self == other

    def __str__(self) -> str:
        return print_datum(self)


class Nil(Datum):
    """The empty list. Use the module-level ``NIL`` instead of creating new instances."""

    __slots__ = ()

    def __eq__(self, other) -> bool:
        return isinstance(other, Nil)

    def __hash__(self) -> int:
        return hash(Nil)

    def __repr__(self) -> str:
        return 'NIL'


NIL = Nil()


class Boolean(Datum):
    __slots__ = ('value',)

    def __init__(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError(f"boolean value must be bool type, but got '{type(value)}' type")
        self.value: bool = value

    def __eq__(self, other) -> bool:
        return isinstance(other, Boolean) and self.value == other.value

    def __hash__(self) -> int:
        return hash((Boolean, self.value))

    def __repr__(self) -> str:
        return f'Boolean({self.value})'


class Integer(Datum):
    """A 64-bit signed integer.

    Args:
        value (int): The integer value. Must lie in the 64-bit signed range.
    """

    __slots__ = ('value',)

    def __init__(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"integer value must be int type, but got '{type(value)}' type")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f'integer value out of 64-bit range: {value}')
        self.value: int = value

    def __eq__(self, other) -> bool:
        return isinstance(other, Integer) and self.value == other.value

    def __hash__(self) -> int:
        return hash((Integer, self.value))

    def __repr__(self) -> str:
        return f'Integer({self.value})'


class Symbol(Datum):
    """A symbol. The name is never empty and never the reserved dot."""

    __slots__ = ('name',)

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError('symbol name must not be empty')
        if name == DOT:
            raise ValueError(f"'{DOT}' is reserved for dotted pairs and is not a symbol")
        self.name: str = name

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return hash((Symbol, self.name))

    def __repr__(self) -> str:
        return f'Symbol({self.name!r})'


class Text(Datum):
    """A string literal."""

    __slots__ = ('value',)

    def __init__(self, value: str) -> None:
        self.value: str = value

    def __eq__(self, other) -> bool:
        return isinstance(other, Text) and self.value == other.value

    def __hash__(self) -> int:
        return hash((Text, self.value))

    def __repr__(self) -> str:
        return f'Text({self.value!r})'


class Vector(Datum):
    """A fixed-length sequence of data.

    Args:
        items (Iterable[Datum]): Elements of the vector.

    Attributes:
        items (Tuple[Datum, ...]): Elements of the vector.
    """

    __slots__ = ('items',)

    def __init__(self, items: Iterable[Datum] = ()) -> None:
        self.items: Tuple[Datum, ...] = tuple(items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Datum]:
        return iter(self.items)

    def __getitem__(self, idx: int) -> Datum:
        return self.items[idx]

    def __eq__(self, other) -> bool:
        return isinstance(other, Vector) and self.items == other.items

    def __repr__(self) -> str:
        return f'Vector([{", ".join(repr(item) for item in self.items)}])'


class Pair(Datum):
    """A cons cell. Chains of pairs form lists.

    Attributes:
        first (Datum): The head of the cell.
        rest (Datum): The tail of the cell. ``NIL`` ends a proper list, any other non-pair an improper one.
    """

    __slots__ = ('first', 'rest')

    def __init__(self, first: Datum, rest: Datum) -> None:
        self.first: Datum = first
        self.rest: Datum = rest

    @classmethod
    def from_list(cls, items: Iterable[Datum], tail: Datum = NIL) -> Datum:
        """Fold items right-to-left into pairs ending in ``tail``.

        An empty sequence yields ``tail`` itself.
        """
        ret = tail
        for item in reversed(list(items)):
            ret = cls(item, ret)
        return ret

    def to_list(self) -> Tuple[List[Datum], Datum]:
        """Return the elements of the chain and the datum that terminates it."""
        elements = []
        cell: Datum = self
        while isinstance(cell, Pair):
            elements.append(cell.first)
            cell = cell.rest
        return elements, cell

    @property
    def is_proper(self) -> bool:
        return self.to_list()[1] == NIL

    def __iter__(self) -> Iterator[Datum]:
        return iter(self.to_list()[0])

    def __eq__(self, other) -> bool:
        this: Datum = self
        while isinstance(this, Pair):
            if not isinstance(other, Pair) or this.first != other.first:
                return False
            this, other = this.rest, other.rest
        return this == other

    def __repr__(self) -> str:
        return f'Pair({self.first!r}, {self.rest!r})'


def make_list(*items: Datum, tail: Optional[Datum] = None) -> Datum:
    """Build a list from items, proper unless ``tail`` is given."""
    return Pair.from_list(items, NIL if tail is None else tail)


def _print_text(value: str) -> str:
    return '"' + ''.join('\\' + PRINT_ESCAPES[c] if c in PRINT_ESCAPES else c for c in value) + '"'


def print_datum(datum: Datum) -> str:
    """Return the canonical textual form of a datum."""
    if isinstance(datum, Nil):
        return '()'
    elif isinstance(datum, Boolean):
        return TRUE_LITERAL if datum.value else FALSE_LITERAL
    elif isinstance(datum, Integer):
        return str(datum.value)
    elif isinstance(datum, Symbol):
        return datum.name
    elif isinstance(datum, Text):
        return _print_text(datum.value)
    elif isinstance(datum, Vector):
        return '#(' + ' '.join(print_datum(item) for item in datum) + ')'
    elif isinstance(datum, Pair):
        elements, tail = datum.to_list()
        ret = '(' + ' '.join(print_datum(element) for element in elements)
        if tail != NIL:
            ret += ' . ' + print_datum(tail)
        return ret + ')'
    else:
        raise TypeError(f"cannot print object of '{type(datum)}' type")
