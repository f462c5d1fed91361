"""
reclist Records
===============

A Record is one type/ID-tagged bundle of key/value fields:

    @planet=Mars
    	radius:	0.5320
    	mass:	0.107

Normalization
-------------
| Part  | Rule                                          | Example              |
|-------|-----------------------------------------------|----------------------|
| type  | lower-cased, whitespace runs joined with '-'  | "Dwarf  Planet" -> "dwarf-planet" |
| key   | same as type                                  | "foo   BAR" -> "foo-bar" |
| ID    | whitespace runs collapsed to one space        | " Halley's   Comet " -> "Halley's Comet" |
| value | leading and trailing whitespace trimmed       | "  0.107 " -> "0.107" |

All normalization functions are idempotent.

Records never hold empty strings: setting a field to an empty (or
all-whitespace) value removes the field, and a record whose type or ID
normalizes to the empty string is never created.
"""

from typing import Iterator, Optional

from reclist.errors import InvalidRecordError


# =============================================================================
# Normalization
# =============================================================================

def normalize_type(text: str) -> str:
    """Lower-case a record type and join its words with hyphens."""
    return "-".join(text.split()).lower()


def normalize_key(text: str) -> str:
    """Lower-case a field key and join its words with hyphens."""
    return "-".join(text.split()).lower()


def normalize_id(text: str) -> str:
    """Collapse whitespace runs in a record ID to single spaces."""
    return " ".join(text.split())


# =============================================================================
# Record
# =============================================================================

class Record:
    """
    A reclist record: a type, an ID and a set of fields.

    Use Record.create() when the type or ID comes from untrusted input;
    it returns None instead of raising for an empty type or ID.

    Example:
        >>> rec = Record.create("Planet", "Mars")
        >>> rec.set("Moons", "Phobos Deimos")
        >>> rec.get("moons")
        'Phobos Deimos'
        >>> rec.keys()
        ['moons']
    """

    __slots__ = ("_type", "_id", "_fields")

    def __init__(self, type_: str, id_: str):
        """
        Create a record with the given type and ID.

        Args:
            type_: Record type (normalized to lower-case, hyphen-joined)
            id_: Record ID (whitespace collapsed, case preserved)

        Raises:
            InvalidRecordError: If type or ID normalizes to empty
        """
        norm_type = normalize_type(type_)
        norm_id = normalize_id(id_)
        if not norm_type or not norm_id:
            raise InvalidRecordError(type_, id_)
        self._type = norm_type
        self._id = norm_id
        self._fields: dict[str, str] = {}

    @classmethod
    def create(cls, type_: str, id_: str) -> Optional["Record"]:
        """
        Create a record, or return None if type or ID normalizes to empty.

        Example:
            >>> Record.create("star", "  ") is None
            True
        """
        if not normalize_type(type_) or not normalize_id(id_):
            return None
        return cls(type_, id_)

    # =========================================================================
    # Identity
    # =========================================================================

    @property
    def type(self) -> str:
        """The normalized record type."""
        return self._type

    @property
    def id(self) -> str:
        """The normalized record ID."""
        return self._id

    # =========================================================================
    # Fields
    # =========================================================================

    def get(self, key: str) -> str:
        """
        Return the value of a field, or "" if the field is not set.

        The key is normalized before lookup, so "Moons" and "moons"
        address the same field.
        """
        return self._fields.get(normalize_key(key), "")

    def set(self, key: str, value: str) -> None:
        """
        Set the value of a field.

        The key is normalized and the value trimmed. An empty key is
        ignored; an empty value removes the field.
        """
        key = normalize_key(key)
        if not key:
            return
        value = value.strip()
        if not value:
            self._fields.pop(key, None)
            return
        self._fields[key] = value

    def keys(self) -> list[str]:
        """Return the field keys in lexicographic order."""
        return sorted(self._fields)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (key, value) pairs in key order."""
        for key in self.keys():
            yield key, self._fields[key]

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return normalize_key(key) in self._fields

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return (
            self._type == other._type
            and self._id == other._id
            and self._fields == other._fields
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Record({self._type!r}, {self._id!r}, fields={self.keys()})"
