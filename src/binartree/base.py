"""Shared interfaces and helpers for the multiset tree"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional, TypeVar, Generic

T = TypeVar("T", bound="AbstractMultisetDataStructure")


class AbstractMultisetDataStructure(ABC, Generic[T]):
    """
    Abstract base class for an ordered collection that may hold equal keys
    more than once.
    """

    @abstractmethod
    def insert(self, value: Any) -> None:
        """
        Insert one occurrence of a value.

        Parameters:
            value: The value to be inserted. Must be comparable with every
                value already stored.
        """
        pass

    @abstractmethod
    def contains(self, value: Any) -> bool:
        """
        Check whether at least one occurrence of the value is stored.

        Parameters:
            value: The value to look for.

        Returns:
            bool: True if the value is present.
        """
        pass

    @abstractmethod
    def remove(self, value: Any) -> bool:
        """
        Remove exactly one occurrence of the value.

        Parameters:
            value: The value to remove.

        Returns:
            bool: True if an occurrence was found and removed.
        """
        pass


class RemovalResult(NamedTuple):
    """
    Result of removing a key from a node.

    Attributes:
        found (bool):
            True if a node holding the key was reached and discarded.
        orphaned_keys (Optional[Any]):
            A sequence buffer with the in-order keys of the discarded node's
            left subtree followed by those of its right subtree. These keys
            are no longer stored anywhere and must be reinserted by the
            caller. None if nothing was found.
    """
    found: bool
    orphaned_keys: Optional[Any]


def check_key(value: Any, key_type: Optional[type], op: str) -> Any:
    """
    Validate a value before it enters a tree or buffer.

    Parameters:
        value: The value to check.
        key_type (Optional[type]): Required type, or None to accept any type.
        op (str): Name of the calling operation, used in error messages.

    Returns:
        The value, unchanged.

    Raises:
        TypeError: If the value is None or not an instance of key_type.
        ValueError: If the value is not equal to itself (e.g. NaN).
    """
    if value is None:
        raise TypeError(f"{op}(): None is not a valid key")
    if key_type is not None:
        # bool is an int subclass but not a meaningful int key
        if not isinstance(value, key_type) or (
            isinstance(value, bool) and key_type is not bool
        ):
            raise TypeError(
                f"{op}(): key must be {key_type.__name__}, "
                f"got {type(value).__name__!r}"
            )
    if value != value:
        raise ValueError(f"{op}(): key {value!r} is not totally ordered")
    return value
