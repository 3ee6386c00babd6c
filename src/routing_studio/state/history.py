"""Linear undo/redo over immutable snapshots."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class History(Generic[T]):
    """Undo/redo with value semantics.

    ``past`` is oldest first, ``future`` is nearest-redo first. Snapshots are
    stored as given and never modified here, so callers must hand ``set`` a
    fresh copy rather than a mutated ``present``.
    """

    def __init__(self, initial: T) -> None:
        self._past: list[T] = []
        self._present: T = initial
        self._future: list[T] = []

    @property
    def past(self) -> tuple[T, ...]:
        return tuple(self._past)

    @property
    def present(self) -> T:
        return self._present

    @property
    def future(self) -> tuple[T, ...]:
        return tuple(self._future)

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def set(self, next_value: T) -> None:
        """Commit a new present. Discards any redo history."""
        if next_value is self._present:
            return
        self._past.append(self._present)
        self._present = next_value
        self._future = []

    def undo(self) -> None:
        if not self._past:
            return
        self._future.insert(0, self._present)
        self._present = self._past.pop()

    def redo(self) -> None:
        if not self._future:
            return
        self._past.append(self._present)
        self._present = self._future.pop(0)

    def reset(self, next_value: T) -> None:
        """Replace everything, e.g. after loading a different file."""
        self._past = []
        self._present = next_value
        self._future = []
