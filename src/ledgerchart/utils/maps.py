"""Mapping helpers."""

from typing import Callable, MutableMapping, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def get_or_insert(mapping: MutableMapping[K, V], key: K, default: Callable[[], V]) -> V:
    """Return ``mapping[key]``, inserting ``default()`` first when absent.

    Insertion order of a plain ``dict`` is preserved, so keys appear in the
    order they were first requested.
    """
    try:
        return mapping[key]
    except KeyError:
        value = default()
        mapping[key] = value
        return value
