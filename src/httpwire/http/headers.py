"""
=============================================================================
RESPONSE HEADER MULTIMAP
=============================================================================

HTTP allows the same header name to appear more than once in a response:

    Set-Cookie: session=abc\r\n
    Set-Cookie: theme=dark\r\n

A plain dict cannot hold that, so headers are kept as an insertion-ordered
list of (name, value) pairs:

    ┌──────┬──────────────┬────────────────────┐
    │ pos  │ name         │ value              │
    ├──────┼──────────────┼────────────────────┤
    │  0   │ Content-Type │ text/html          │
    │  1   │ Set-Cookie   │ session=abc        │
    │  2   │ Set-Cookie   │ theme=dark         │
    └──────┴──────────────┴────────────────────┘

    add(name, value)  → append a row, never touches existing rows
    set(name, value)  → drop every row for name, then append one

Names are compared byte-for-byte (case-sensitive). Nothing is validated:
whatever bytes go in are written out unchanged.

=============================================================================
"""

from typing import Iterable, Iterator, List, Mapping, Optional, Tuple, Union


HeaderValue = Union[str, bytes]
HeaderPair = Tuple[bytes, bytes]


def to_header_bytes(value: HeaderValue, encoding: str = "utf-8") -> bytes:
    """Encode a header name or value to bytes; bytes pass through."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode(encoding)
    raise TypeError(f"Header names and values must be str or bytes, not {type(value).__name__}")


def iter_header_pairs(
    headers: Union[Mapping[HeaderValue, HeaderValue], Iterable[Tuple[HeaderValue, HeaderValue]]],
) -> Iterator[Tuple[HeaderValue, HeaderValue]]:
    """Yield (name, value) pairs from a mapping or an iterable of pairs."""
    if isinstance(headers, Mapping):
        yield from headers.items()
    else:
        for name, value in headers:
            yield name, value


class HeaderList:
    """
    Ordered multimap of header name → value, both stored as bytes.

    Iterating yields (name, value) tuples in insertion order, so duplicates
    come out exactly in the order they were added.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding
        self._items: List[HeaderPair] = []

    def _encode(self, value: HeaderValue) -> bytes:
        return to_header_bytes(value, self._encoding)

    # =========================================================================
    # MUTATION
    # =========================================================================

    def add(self, name: HeaderValue, value: HeaderValue) -> None:
        """Append an entry; existing entries for name are kept."""
        self._items.append((self._encode(name), self._encode(value)))

    def set(self, name: HeaderValue, value: HeaderValue) -> None:
        """Replace every entry for name with a single new one."""
        self.remove(name)
        self.add(name, value)

    def remove(self, name: HeaderValue) -> None:
        """Drop every entry for name. Missing names are ignored."""
        key = self._encode(name)
        self._items = [item for item in self._items if item[0] != key]

    def clear(self) -> None:
        self._items.clear()

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def contains(self, name: HeaderValue, value: Optional[HeaderValue] = None) -> bool:
        """
        Check for an entry named name, optionally with an exact value.

        Args:
            name: Header name.
            value: If given, only an entry whose value equals it counts.
        """
        key = self._encode(name)
        if value is None:
            return any(n == key for n, _ in self._items)
        wanted = self._encode(value)
        return any(n == key and v == wanted for n, v in self._items)

    def get_all(self, name: HeaderValue) -> List[bytes]:
        """All values stored for name, in insertion order (maybe empty)."""
        key = self._encode(name)
        return [v for n, v in self._items if n == key]

    def first(self, name: HeaderValue, default: Optional[bytes] = None) -> Optional[bytes]:
        key = self._encode(name)
        for n, v in self._items:
            if n == key:
                return v
        return default

    def items(self) -> List[HeaderPair]:
        return list(self._items)

    def __iter__(self) -> Iterator[HeaderPair]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: HeaderValue) -> bool:
        return self.contains(name)

    def __repr__(self) -> str:
        return f"HeaderList({self._items!r})"
