"""
Unit tests for the autosave coordinator.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest

from slidesmith.core.errors import PersistenceError
from slidesmith.models import PresentationDocument, documents_equal
from slidesmith.services.autosave import (
    AutosaveCoordinator,
    AutosaveStatus,
    FilePersister,
    describe_last_saved,
)
from slidesmith.services.history import HistoryManager

DEBOUNCE = 0.02


def titled(title: str) -> PresentationDocument:
    return PresentationDocument(title=title, slides=[])


class RecordingPersister:
    """Persister that records titles and can be told to fail or block."""

    def __init__(self):
        self.saved: list[str] = []
        self.fail_next = False
        self.gate: asyncio.Event | None = None
        self.started = asyncio.Event()

    async def persist(self, document: PresentationDocument) -> None:
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_next:
            self.fail_next = False
            raise PersistenceError("disk full")
        self.saved.append(document.title)


def make_coordinator(persister, debounce=DEBOUNCE, enabled=True):
    history = HistoryManager(titled("D0"), equals=documents_equal)
    coordinator = AutosaveCoordinator(history, persister, debounce_seconds=debounce, enabled=enabled)
    return history, coordinator


async def settle(seconds: float = DEBOUNCE * 5):
    await asyncio.sleep(seconds)


class TestDebounce:
    """Tests for debounced saving."""

    @pytest.mark.asyncio
    async def test_initial_document_counts_as_saved(self):
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister)

        assert coordinator.has_unsaved_changes is False
        assert coordinator.last_saved is None

    @pytest.mark.asyncio
    async def test_edit_saves_after_quiet_period(self):
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister)

        history.set(titled("D1"))

        assert coordinator.has_unsaved_changes is True
        assert coordinator.has_pending_save is True
        assert persister.saved == []

        await settle()

        assert persister.saved == ["D1"]
        assert coordinator.has_unsaved_changes is False
        assert coordinator.last_saved is not None

    @pytest.mark.asyncio
    async def test_burst_of_edits_coalesces(self):
        """Several quick edits produce one save of the latest present."""
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister, debounce=0.05)

        for title in ("D1", "D2", "D3"):
            history.set(titled(title))
            await asyncio.sleep(0.01)

        await settle(0.2)

        assert persister.saved == ["D3"]

    @pytest.mark.asyncio
    async def test_undo_and_redo_trigger_saves(self):
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister)
        history.set(titled("D1"))
        await settle()

        history.undo()
        await settle()
        history.redo()
        await settle()

        assert persister.saved == ["D1", "D0", "D1"]

    @pytest.mark.asyncio
    async def test_undo_to_saved_document_cancels_pending_save(self):
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister, debounce=0.05)

        history.set(titled("D1"))
        history.undo()

        assert coordinator.has_unsaved_changes is False
        assert coordinator.has_pending_save is False
        await settle(0.15)
        assert persister.saved == []

    @pytest.mark.asyncio
    async def test_disabled_tracks_but_never_saves(self):
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister, enabled=False)

        history.set(titled("D1"))
        await settle()

        assert persister.saved == []
        assert coordinator.has_unsaved_changes is True

        assert await coordinator.save() is True
        assert persister.saved == ["D1"]


class TestInFlight:
    """Tests for edits that land while a save is running."""

    @pytest.mark.asyncio
    async def test_edit_during_save_queues_one_followup(self):
        persister = RecordingPersister()
        persister.gate = asyncio.Event()
        history, coordinator = make_coordinator(persister)

        history.set(titled("D1"))
        await persister.started.wait()
        assert coordinator.is_saving is True

        history.set(titled("D2"))
        history.set(titled("D3"))
        assert coordinator.has_pending_save is False

        persister.gate.set()
        await settle()

        assert persister.saved == ["D1", "D3"]
        assert coordinator.has_unsaved_changes is False

    @pytest.mark.asyncio
    async def test_manual_save_ignored_while_saving(self):
        persister = RecordingPersister()
        persister.gate = asyncio.Event()
        history, coordinator = make_coordinator(persister)

        history.set(titled("D1"))
        await persister.started.wait()

        assert await coordinator.save() is False

        persister.gate.set()
        await settle()
        assert persister.saved == ["D1"]


class TestFailures:
    """Tests for failed saves and retries."""

    @pytest.mark.asyncio
    async def test_failure_keeps_unsaved_and_records_error(self):
        persister = RecordingPersister()
        persister.fail_next = True
        history, coordinator = make_coordinator(persister)

        history.set(titled("D1"))
        await settle()

        assert persister.saved == []
        assert coordinator.save_error == "disk full"
        assert coordinator.has_unsaved_changes is True
        assert coordinator.status.label == "Save failed"
        assert history.present.title == "D1"

    @pytest.mark.asyncio
    async def test_edit_after_failure_saves_latest_once(self):
        """The next edit after a failure persists the newest present exactly once."""
        persister = RecordingPersister()
        persister.fail_next = True
        history, coordinator = make_coordinator(persister)

        history.set(titled("D1"))
        await settle()
        history.set(titled("D2"))
        await settle()

        assert persister.saved == ["D2"]
        assert coordinator.save_error is None

    @pytest.mark.asyncio
    async def test_manual_retry_clears_error(self):
        persister = RecordingPersister()
        persister.fail_next = True
        history, coordinator = make_coordinator(persister, debounce=60)

        history.set(titled("D1"))
        assert await coordinator.save() is False
        assert coordinator.status.can_retry is True

        assert await coordinator.save() is True
        assert coordinator.save_error is None
        assert coordinator.has_unsaved_changes is False
        assert persister.saved == ["D1"]


class TestFlushAndClose:
    """Tests for flush() and close()."""

    @pytest.mark.asyncio
    async def test_flush_skips_debounce(self):
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister, debounce=60)
        history.set(titled("D1"))

        assert await coordinator.flush() is True
        assert persister.saved == ["D1"]
        assert coordinator.has_pending_save is False

    @pytest.mark.asyncio
    async def test_flush_with_nothing_unsaved(self):
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister)

        assert await coordinator.flush() is True
        assert persister.saved == []

    @pytest.mark.asyncio
    async def test_close_stops_observing(self):
        persister = RecordingPersister()
        history, coordinator = make_coordinator(persister)
        coordinator.close()

        history.set(titled("D1"))
        await settle()

        assert persister.saved == []
        assert coordinator.has_pending_save is False


class TestFilePersister:
    """Tests for the on-disk persister."""

    @pytest.mark.asyncio
    async def test_persist_and_load(self, tmp_path, sample_document):
        persister = FilePersister(tmp_path / "sessions" / "abc.json")

        assert persister.load() is None
        await persister.persist(sample_document)

        assert persister.exists()
        assert persister.load() == sample_document.to_dict()

    @pytest.mark.asyncio
    async def test_write_failure_raises_persistence_error(self, tmp_path, sample_document):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        persister = FilePersister(blocker / "abc.json")

        with pytest.raises(PersistenceError):
            await persister.persist(sample_document)

    @pytest.mark.asyncio
    async def test_failed_replace_leaves_no_temp_file(self, tmp_path, sample_document):
        """A write that fails midway keeps the previous save and cleans up."""
        target = tmp_path / "abc.json"
        persister = FilePersister(target)
        await persister.persist(titled("Before"))

        with patch("slidesmith.services.autosave.persistence.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceError):
                await persister.persist(sample_document)

        assert not (tmp_path / "abc.json.tmp").exists()
        assert persister.load()["title"] == "Before"

    @pytest.mark.asyncio
    async def test_non_finite_numbers_not_written(self, tmp_path):
        """NaN would produce a file that strict JSON readers reject."""
        document = MagicMock()
        document.to_dict.return_value = {"title": "T", "slides": [], "zoom": float("nan")}
        persister = FilePersister(tmp_path / "abc.json")

        with pytest.raises(PersistenceError):
            await persister.persist(document)

        assert not persister.exists()


class TestStatus:
    """Tests for status labels."""

    def test_describe_last_saved(self):
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        assert describe_last_saved(None, now) == "Never saved"
        assert describe_last_saved(now - timedelta(seconds=30), now) == "Just now"
        assert describe_last_saved(now - timedelta(minutes=5), now) == "5m ago"
        assert describe_last_saved(now - timedelta(hours=3), now) == "3h ago"
        assert describe_last_saved(now - timedelta(days=2), now) == "2d ago"

    def test_label_priority(self):
        assert AutosaveStatus(is_saving=True, save_error="x").label == "Saving..."
        assert AutosaveStatus(save_error="x", has_unsaved_changes=True).label == "Save failed"
        assert AutosaveStatus(has_unsaved_changes=True).label == "Unsaved changes"
        assert AutosaveStatus().label == "No changes"

    def test_to_dict(self):
        data = AutosaveStatus(has_unsaved_changes=True).to_dict()

        assert data["label"] == "Unsaved changes"
        assert data["can_retry"] is True
        assert data["last_saved"] is None
