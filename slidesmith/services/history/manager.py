"""
Undo/redo history over whole-document snapshots.

The manager is generic: it never looks inside the values it stores. Every
entry in ``past`` and ``future`` is a complete snapshot, so undo and redo
are plain stack moves and never replay operations.
"""

import copy
import logging
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Transition(str, Enum):
    """Which operation produced a new present."""

    SET = "set"
    UNDO = "undo"
    REDO = "redo"
    RESET = "reset"


@dataclass(frozen=True)
class HistoryState(Generic[T]):
    """The past/present/future triple for one editing session."""

    present: T
    past: tuple = field(default_factory=tuple)
    future: tuple = field(default_factory=tuple)


HistoryListener = Callable[[HistoryState, Transition], None]


class HistoryManager(Generic[T]):
    """
    Linear undo/redo history.

    ``set`` records an edit, ``undo``/``redo`` walk the stacks and ``reset``
    starts a fresh chain (used when a new document is loaded). Listeners are
    notified after every effective transition; while they run, ``set`` is
    ignored so a listener reacting to a restored present cannot erase the
    redo stack by writing that present back as a new edit.
    """

    def __init__(
        self,
        initial: T,
        limit: Optional[int] = None,
        equals: Callable[[T, T], bool] = operator.eq,
        snapshot: Callable[[T], T] = copy.deepcopy,
    ):
        """
        Args:
            initial: The session's starting value
            limit: Maximum number of undo steps; oldest are dropped first
            equals: Deep value equality used to skip no-op edits
            snapshot: Copies a value before it is stored
        """
        if limit is not None and limit < 1:
            raise ValueError("History limit must be at least 1")

        self._limit = limit
        self._equals = equals
        self._snapshot = snapshot
        self._state: HistoryState[T] = HistoryState(present=snapshot(initial))
        self._listeners: list[HistoryListener] = []
        self._is_notifying = False

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def state(self) -> HistoryState[T]:
        return self._state

    @property
    def present(self) -> T:
        return self._state.present

    @property
    def can_undo(self) -> bool:
        return len(self._state.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._state.future) > 0

    @property
    def undo_count(self) -> int:
        return len(self._state.past)

    @property
    def redo_count(self) -> int:
        return len(self._state.future)

    @property
    def is_notifying(self) -> bool:
        """True while listeners are reacting to a transition."""
        return self._is_notifying

    def equals(self, left: T, right: T) -> bool:
        """Compare two values with this history's equality."""
        return self._equals(left, right)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def set(self, new_state: T) -> HistoryState[T]:
        """Record an edit: push present onto past and clear future."""
        if self._is_notifying:
            logger.debug("Ignoring set() issued while notifying history listeners")
            return self._state

        current = self._state
        if self._equals(current.present, new_state):
            return current

        past = current.past + (current.present,)
        if self._limit is not None and len(past) > self._limit:
            past = past[len(past) - self._limit:]

        return self._commit(
            HistoryState(present=self._snapshot(new_state), past=past, future=()),
            Transition.SET,
        )

    def undo(self) -> HistoryState[T]:
        """Restore the most recent past entry."""
        current = self._state
        if not current.past:
            return current

        return self._commit(
            HistoryState(
                present=current.past[-1],
                past=current.past[:-1],
                future=(current.present,) + current.future,
            ),
            Transition.UNDO,
        )

    def redo(self) -> HistoryState[T]:
        """Re-apply the nearest future entry."""
        current = self._state
        if not current.future:
            return current

        return self._commit(
            HistoryState(
                present=current.future[0],
                past=current.past + (current.present,),
                future=current.future[1:],
            ),
            Transition.REDO,
        )

    def reset(self, new_state: T) -> HistoryState[T]:
        """Replace present and drop both stacks."""
        return self._commit(HistoryState(present=self._snapshot(new_state)), Transition.RESET)

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        """Register a transition listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: HistoryState[T], transition: Transition) -> HistoryState[T]:
        self._state = state
        logger.debug(
            f"History {transition.value}: {len(state.past)} undo / {len(state.future)} redo"
        )

        was_notifying = self._is_notifying
        self._is_notifying = True
        try:
            for listener in list(self._listeners):
                listener(state, transition)
        finally:
            self._is_notifying = was_notifying

        return state
