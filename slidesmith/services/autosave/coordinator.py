"""
Autosave Coordinator.

Watches a history manager and persists its present document after a quiet
period. Every transition (edit, undo, redo or reset) counts the same. At
most one persist call is in flight; edits that land during a save queue a
single follow-up save instead of being dropped.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from slidesmith.core.debug import increment_save_count
from slidesmith.models import PresentationDocument
from slidesmith.services.history import HistoryManager, HistoryState, Transition

from .models import AutosaveStatus
from .persistence import Persister

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.5


class AutosaveCoordinator:
    """Debounced persistence observer over a history manager."""

    def __init__(
        self,
        history: HistoryManager[PresentationDocument],
        persister: Persister,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        enabled: bool = True,
    ):
        self._history = history
        self._persister = persister
        self._debounce_seconds = debounce_seconds
        self.enabled = enabled

        # The starting document counts as saved until something changes it
        self._saved_snapshot: Optional[PresentationDocument] = history.present
        self._has_unsaved_changes = False
        self._last_saved: Optional[datetime] = None
        self._is_saving = False
        self._save_error: Optional[str] = None

        self._followup_requested = False
        self._timer: Optional[asyncio.TimerHandle] = None
        self._current_save: Optional[asyncio.Future] = None
        self._tasks: set[asyncio.Task] = set()

        self._unsubscribe = history.subscribe(self._on_transition)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    @property
    def has_unsaved_changes(self) -> bool:
        return self._has_unsaved_changes

    @property
    def last_saved(self) -> Optional[datetime]:
        return self._last_saved

    @property
    def is_saving(self) -> bool:
        return self._is_saving

    @property
    def save_error(self) -> Optional[str]:
        return self._save_error

    @property
    def has_pending_save(self) -> bool:
        """A debounced save is waiting for its timer."""
        return self._timer is not None

    @property
    def status(self) -> AutosaveStatus:
        return AutosaveStatus(
            has_unsaved_changes=self._has_unsaved_changes,
            last_saved=self._last_saved,
            is_saving=self._is_saving,
            save_error=self._save_error,
        )

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    async def save(self) -> bool:
        """
        Persist the current present document.

        Also serves as the manual retry after a failure. Ignored while
        another save is in flight.

        Returns:
            True if the document was persisted
        """
        if self._is_saving:
            logger.debug("Save already in flight, ignoring save()")
            return False

        self._cancel_timer()
        self._is_saving = True
        self._followup_requested = False
        self._current_save = asyncio.get_running_loop().create_future()
        snapshot = self._history.present

        succeeded = False
        try:
            await self._persister.persist(snapshot)
        except Exception as e:
            self._save_error = str(e) or e.__class__.__name__
            logger.warning(f"Autosave failed: {self._save_error}")
        else:
            self._saved_snapshot = snapshot
            self._last_saved = datetime.now(timezone.utc)
            self._save_error = None
            succeeded = True
            increment_save_count()
            logger.info(f"Saved presentation '{snapshot.title}'")
        finally:
            self._is_saving = False
            self._refresh_unsaved()
            self._current_save.set_result(succeeded)
            self._current_save = None

        if self._followup_requested:
            self._followup_requested = False
            if self._has_unsaved_changes:
                logger.debug("Edits arrived during save, scheduling follow-up save")
                self._schedule()

        return succeeded

    async def flush(self) -> bool:
        """
        Save now if anything is unsaved, skipping the debounce window.

        Waits for an in-flight save first.

        Returns:
            True if nothing is left unsaved
        """
        self._cancel_timer()
        if self._current_save is not None:
            await asyncio.shield(self._current_save)
            self._cancel_timer()

        if not self._has_unsaved_changes:
            return True
        return await self.save()

    def close(self) -> None:
        """Stop observing the history and drop any pending timer."""
        self._cancel_timer()
        self._unsubscribe()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _on_transition(self, state: HistoryState, transition: Transition) -> None:
        self._refresh_unsaved()

        if not self.enabled:
            return

        if self._is_saving:
            self._followup_requested = True
            return

        if self._has_unsaved_changes:
            self._schedule()
        else:
            # Undo back to the saved document
            self._cancel_timer()

    def _refresh_unsaved(self) -> None:
        if self._saved_snapshot is None:
            self._has_unsaved_changes = True
        else:
            self._has_unsaved_changes = not self._history.equals(
                self._history.present, self._saved_snapshot
            )

    def _schedule(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, autosave deferred until the next save()")
            return

        self._cancel_timer()
        self._timer = loop.call_later(self._debounce_seconds, self._fire)

    def _fire(self) -> None:
        self._timer = None
        task = asyncio.get_running_loop().create_task(self.save())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
