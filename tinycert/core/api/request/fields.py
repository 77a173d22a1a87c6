"""
Request field collection.

A request's parameters are kept as ``(name, value)`` pairs and rendered
into the canonical form the server recomputes when verifying the digest:
pairs sorted by name (byte order), each part form-encoded, joined with
``=`` and ``&``.
"""
from enum import Enum
from typing import Iterable, Iterator, List, Tuple, Union
from urllib.parse import quote_plus

FieldValue = Union[str, int, Enum]

Pair = Tuple[str, FieldValue]


def stringify(value: FieldValue) -> str:
    """
    Convert a field value to its wire string.

    Integers use plain decimal digits and enum members use their value,
    so the result never depends on locale or ``repr`` details.

    Raises:
        TypeError: If the value is not a str, int or enum member
    """
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, bool):
        raise TypeError("bool is not a valid field value")
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, str):
        return value
    raise TypeError(f"unsupported field value type: {type(value).__name__}")


def encode(text: str) -> str:
    """Form-encode one name or value (space becomes ``+``)."""
    return quote_plus(text, safe='', encoding='utf-8')


class FieldCollection:
    """
    Ordered collection of request fields.

    Names are unique within a collection. Values are checked when added.

    Example:
        >>> fields = FieldCollection([('ca_id', 7), ('what', 'cert')])
        >>> fields.to_canonical_form()
        'ca_id=7&what=cert'
    """

    def __init__(self, pairs: Iterable[Pair] = ()):
        self._pairs: List[Tuple[str, FieldValue]] = []
        for name, value in pairs:
            self.append(name, value)

    def append(self, name: str, value: FieldValue) -> 'FieldCollection':
        if not isinstance(name, str) or not name:
            raise TypeError("field name must be a non-empty string")
        stringify(value)
        if name in self:
            raise ValueError(f"duplicate field name: {name}")
        self._pairs.append((name, value))
        return self

    def copy(self) -> 'FieldCollection':
        clone = FieldCollection()
        clone._pairs = list(self._pairs)
        return clone

    def sorted_pairs(self) -> List[Tuple[str, str]]:
        """Pairs sorted by the UTF-8 bytes of their name, values stringified."""
        return [
            (name, stringify(value))
            for name, value in sorted(self._pairs, key=lambda pair: pair[0].encode('utf-8'))
        ]

    def to_canonical_form(self) -> str:
        return '&'.join(
            f"{encode(name)}={encode(value)}" for name, value in self.sorted_pairs()
        )

    def names(self) -> List[str]:
        return [name for name, _ in self._pairs]

    def __contains__(self, name: object) -> bool:
        return any(existing == name for existing, _ in self._pairs)

    def __iter__(self) -> Iterator[Tuple[str, FieldValue]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldCollection):
            return NotImplemented
        return self.sorted_pairs() == other.sorted_pairs()

    def __repr__(self) -> str:
        return f"FieldCollection({self.names()!r})"
