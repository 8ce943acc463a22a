"""
Flag sources: the two canonical Pattern shapes.

FlagList: ordered (key-matcher, optional value-matcher) entries.
    Scanned linearly, duplicate keys allowed, any matching entry satisfies
    the query.

FlagMap: unique string keys -> optional value-matcher.
    Direct lookup.

Query contract (both shapes), for matches(key, value):
- value is None (presence query): true iff some entry's key matches,
  whether or not that entry declares a value.
- value is a string (value query): true iff some entry's key matches AND
  that entry declares a value whose matcher accepts it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from .matchers import ExactMatcher, OptionalMatcher, as_matcher
from .protocols import Matcher, Pattern


FlagEntry = tuple[Matcher, OptionalMatcher]


def _key_matcher(key: Any) -> Matcher:
    matcher = as_matcher(key)
    if matcher is None:
        raise TypeError("Flag key cannot be None")
    return matcher


class FlagList:
    """
    An ordered list of flags.

    Example:
        flags = FlagList.from_pairs([
            ("unix", None),
            ("target_pointer_width", "32"),
            ("feature", ["std", "alloc"]),
        ])
        flags.matches("unix", None)         # True
        flags.matches("feature", "alloc")   # True
        flags.matches("unix", "anything")   # False: unix declares no value
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[FlagEntry] = ()):
        self._entries: tuple[FlagEntry, ...] = tuple(entries)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Any]) -> "FlagList":
        """
        Build from (key, value) pairs.

        Keys may be strings or matchers; values may be None, a string, an
        iterable of strings or a matcher (see as_matcher). A bare string
        entry is shorthand for (name, None).
        """
        entries: list[FlagEntry] = []
        for pair in pairs:
            if isinstance(pair, str):
                key, value = pair, None
            else:
                try:
                    key, value = pair
                except (TypeError, ValueError):
                    raise TypeError(
                        f"Flag entry must be a (key, value) pair, got {pair!r}"
                    ) from None
            entries.append((_key_matcher(key), OptionalMatcher(as_matcher(value))))
        return cls(entries)

    def matches(self, key: str, value: str | None) -> bool:
        if value is None:
            return any(k.matches(key) for k, _ in self._entries)
        return any(k.matches(key) and v.matches(value) for k, v in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FlagEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlagList):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"FlagList({list(self._entries)!r})"


class FlagMap:
    """
    A mapping of unique flag names to optional value matchers.

    Example:
        flags = FlagMap.from_mapping({
            "foo": None,
            "target_os": ["macos"],
            "target_pointer_width": "32",
        })
        flags.matches("foo", None)            # True
        flags.matches("target_os", "macos")   # True
        flags.matches("foo", "bar")           # False: foo declares no value
    """

    __slots__ = ("_flags",)

    def __init__(self, flags: Mapping[str, OptionalMatcher] | None = None):
        self._flags: dict[str, OptionalMatcher] = dict(flags or {})

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "FlagMap":
        """Build from a name -> value(s) mapping (values as in as_matcher)."""
        flags: dict[str, OptionalMatcher] = {}
        for key, value in mapping.items():
            if not isinstance(key, str):
                raise TypeError(f"Flag names must be strings, got {type(key).__name__}")
            flags[key] = OptionalMatcher(as_matcher(value))
        return cls(flags)

    def matches(self, key: str, value: str | None) -> bool:
        if value is None:
            return key in self._flags
        declared = self._flags.get(key)
        return declared is not None and declared.matches(value)

    def names(self) -> list[str]:
        return sorted(self._flags)

    def entries(self) -> list[FlagEntry]:
        """The flags as FlagList entries, in insertion order."""
        return [(ExactMatcher(key), value) for key, value in self._flags.items()]

    def __len__(self) -> int:
        return len(self._flags)

    def __iter__(self) -> Iterator[str]:
        return iter(self._flags)

    def __contains__(self, key: object) -> bool:
        return key in self._flags

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlagMap):
            return NotImplemented
        return self._flags == other._flags

    __hash__ = None

    def __repr__(self) -> str:
        return f"FlagMap({self._flags!r})"


def as_pattern(obj: Any) -> Pattern:
    """
    Coerce a flag source into a Pattern.

    Conversions:
        Pattern implementation           -> unchanged
        {"foo": None, "os": ["macos"]}   -> FlagMap
        [("foo", None), ("os", "macos")] -> FlagList

    Raises:
        TypeError: If the object cannot act as a flag source.
    """
    if isinstance(obj, (FlagList, FlagMap)):
        return obj
    if isinstance(obj, Mapping):
        return FlagMap.from_mapping(obj)
    if isinstance(obj, (str, bytes)):
        raise TypeError("A flag source cannot be a bare string")
    if isinstance(obj, Pattern):
        return obj
    if isinstance(obj, Iterable):
        return FlagList.from_pairs(obj)
    raise TypeError(f"Cannot use {type(obj).__name__} as a flag source")


__all__ = [
    "FlagEntry",
    "FlagList",
    "FlagMap",
    "as_pattern",
]
