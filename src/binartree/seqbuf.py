"""Double-ended sequence buffer implementation"""

from collections import deque
from typing import Any, Callable, Iterable, Iterator, List, Optional, Type, TypeVar

from binartree.base import check_key

B = TypeVar("B", bound="SeqBufferBase")


class SeqBufferBase:
    """
    An ordered, index-addressable, double-ended buffer of keys.

    The buffer is what a tree hands back from traversals and set algebra,
    and the staging area for bulk rebuilds. Iterating it is destructive:
    each produced element is popped from the front (or from the back when
    iterated with reversed()), so a buffer iterated to exhaustion is left
    empty. Use copy() or to_list() to read without consuming.

    Capacity is tracked separately from length. It never shrinks on its own
    and grows by doubling, starting at MIN_CAPACITY.
    """
    # Will be overridden by factory-created subclasses
    KEY_TYPE: Optional[type] = None
    MIN_CAPACITY: int = 4

    __slots__ = ("_items", "_capacity")

    def __init__(self, values: Optional[Iterable[Any]] = None):
        self._items: deque = deque()
        self._capacity: int = 0
        if values is not None:
            self.extend(values)

    @classmethod
    def new(cls: Type[B]) -> B:
        return cls()

    @classmethod
    def with_capacity(cls: Type[B], capacity: int) -> B:
        """Create an empty buffer with room for at least `capacity` keys."""
        if not isinstance(capacity, int) or capacity < 0:
            raise ValueError(f"with_capacity(): capacity must be a non-negative int, got {capacity!r}")
        buf = cls()
        buf._capacity = capacity
        return buf

    @classmethod
    def from_iter(cls: Type[B], values: Iterable[Any]) -> B:
        return cls(values)

    @classmethod
    def _wrap(cls: Type[B], values: Iterable[Any]) -> B:
        """Build a buffer from keys that are already known to be valid."""
        buf = cls.__new__(cls)
        buf._items = deque(values)
        buf._capacity = len(buf._items)
        return buf

    # Capacity

    def _grow(self, required: int) -> None:
        if required <= self._capacity:
            return
        self._capacity = max(required, 2 * self._capacity, self.MIN_CAPACITY)

    def capacity(self) -> int:
        return self._capacity

    def reserve(self, additional: int) -> None:
        """Make room for at least `additional` more keys."""
        if not isinstance(additional, int) or additional < 0:
            raise ValueError(f"reserve(): additional must be a non-negative int, got {additional!r}")
        required = len(self._items) + additional
        if required > self._capacity:
            self._capacity = required

    def shrink_to_fit(self) -> None:
        self._capacity = len(self._items)

    # Size

    def len(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    # Element access

    def _check_index(self, index: int, upper: int, op: str) -> None:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"{op}(): index must be int, got {type(index).__name__!r}")
        if index < 0 or index >= upper:
            raise IndexError(f"{op}(): index {index} out of range for length {len(self._items)}")

    def get(self, index: int) -> Any:
        self._check_index(index, len(self._items), "get")
        return self._items[index]

    __getitem__ = get

    def front(self) -> Optional[Any]:
        return self._items[0] if self._items else None

    def back(self) -> Optional[Any]:
        return self._items[-1] if self._items else None

    # Double-ended push and pop

    def push_front(self, value: Any) -> None:
        check_key(value, self.KEY_TYPE, "push_front")
        self._grow(len(self._items) + 1)
        self._items.appendleft(value)

    def push_back(self, value: Any) -> None:
        check_key(value, self.KEY_TYPE, "push_back")
        self._grow(len(self._items) + 1)
        self._items.append(value)

    def pop_front(self) -> Optional[Any]:
        """Remove and return the first key, or None if the buffer is empty."""
        return self._items.popleft() if self._items else None

    def pop_back(self) -> Optional[Any]:
        """Remove and return the last key, or None if the buffer is empty."""
        return self._items.pop() if self._items else None

    # Positional editing

    def insert(self, index: int, value: Any) -> None:
        """Insert a key before position `index`; index == len appends."""
        self._check_index(index, len(self._items) + 1, "insert")
        check_key(value, self.KEY_TYPE, "insert")
        self._grow(len(self._items) + 1)
        self._items.insert(index, value)

    def remove(self, index: int) -> Any:
        """Remove and return the key at `index`, shifting the rest."""
        self._check_index(index, len(self._items), "remove")
        value = self._items[index]
        del self._items[index]
        return value

    def swap_remove_front(self, index: int) -> Any:
        """
        Remove the key at `index` in O(1) by moving the first key into its
        slot. Does not preserve order.
        """
        items = self._items
        self._check_index(index, len(items), "swap_remove_front")
        value = items[index]
        first = items.popleft()
        if index:
            items[index - 1] = first
        return value

    def swap_remove_back(self, index: int) -> Any:
        """
        Remove the key at `index` in O(1) by moving the last key into its
        slot. Does not preserve order.
        """
        items = self._items
        self._check_index(index, len(items), "swap_remove_back")
        value = items[index]
        last = items.pop()
        if index < len(items):
            items[index] = last
        return value

    def truncate(self, length: int) -> None:
        """Drop keys from the back until at most `length` remain."""
        if not isinstance(length, int) or length < 0:
            raise ValueError(f"truncate(): length must be a non-negative int, got {length!r}")
        items = self._items
        while len(items) > length:
            items.pop()

    def clear(self) -> None:
        self._items.clear()

    # Bulk editing

    def drain(self: B, start: Optional[int] = None, stop: Optional[int] = None) -> B:
        """
        Remove the keys in [start, stop) and return them as a new buffer.
        Omitted bounds default to the whole buffer.

        Raises:
            IndexError: If start > stop or stop > len.
        """
        size = len(self._items)
        start = 0 if start is None else start
        stop = size if stop is None else stop
        if start < 0 or start > stop or stop > size:
            raise IndexError(f"drain(): range {start}..{stop} out of bounds for length {size}")
        items = list(self._items)
        self._items = deque(items[:start] + items[stop:])
        return self._wrap(items[start:stop])

    def drain_filter(self: B, predicate: Callable[[Any], bool]) -> B:
        """
        Remove every key for which `predicate` is true and return them, in
        their original order, as a new buffer. The remaining keys keep their
        relative order.
        """
        kept: List[Any] = []
        removed: List[Any] = []
        for value in self._items:
            (removed if predicate(value) else kept).append(value)
        self._items = deque(kept)
        return self._wrap(removed)

    def retain(self, predicate: Callable[[Any], bool]) -> None:
        """Keep only the keys for which `predicate` is true."""
        self.drain_filter(lambda value: not predicate(value))

    def full_dedup(self) -> None:
        """Sort the buffer ascending and drop repeated keys."""
        deduped: List[Any] = []
        for value in sorted(self._items):
            if not deduped or deduped[-1] != value:
                deduped.append(value)
        self._items = deque(deduped)

    def split_off(self: B, at: int) -> B:
        """
        Split the buffer in two. This buffer keeps [0, at); the returned
        buffer holds [at, len).
        """
        self._check_index(at, len(self._items) + 1, "split_off")
        items = list(self._items)
        self._items = deque(items[:at])
        return self._wrap(items[at:])

    def append(self, other: "SeqBufferBase") -> None:
        """Move every key of `other` to the back of this buffer."""
        if other is self:
            raise ValueError("append(): cannot append a buffer to itself")
        self._grow(len(self._items) + len(other._items))
        self._items.extend(other._items)
        other._items.clear()

    def extend(self, values: Iterable[Any]) -> None:
        """
        Push every value to the back. Extending from another buffer
        consumes it.
        """
        for value in values:
            self.push_back(value)

    def extend_from_slice(self, values: Iterable[Any]) -> None:
        """Push copies of `values` to the back without consuming them."""
        if isinstance(values, SeqBufferBase):
            values = values.to_list()
        self.extend(list(values))

    # Copies and views

    def copy(self: B) -> B:
        dup = self._wrap(self._items)
        dup._capacity = self._capacity
        return dup

    def to_list(self) -> List[Any]:
        return list(self._items)

    # Destructive iteration

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._items:
            raise StopIteration
        return self._items.popleft()

    def __reversed__(self) -> Iterator[Any]:
        items = self._items
        while items:
            yield items.pop()

    def __contains__(self, value: Any) -> bool:
        return value in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeqBufferBase):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({list(self._items)!r})"
