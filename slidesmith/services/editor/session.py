"""Editing session state."""
from dataclasses import dataclass, field
from datetime import datetime, timezone

from slidesmith.models import PresentationDocument
from slidesmith.services.autosave import AutosaveCoordinator
from slidesmith.services.history import HistoryManager


def default_document() -> PresentationDocument:
    """The document a brand new session starts from."""
    return PresentationDocument(
        title="Untitled Presentation",
        slides=[
            {
                "id": "slide-1",
                "elements": [
                    {"id": "element-1", "type": "heading", "content": "Welcome"},
                    {"id": "element-2", "type": "paragraph", "content": "Click to start editing."},
                ],
            }
        ],
    )


@dataclass
class EditorSession:
    """
    One open presentation.

    Owns the session's history exclusively; the autosave coordinator only
    observes it.
    """
    session_id: str
    history: HistoryManager[PresentationDocument]
    autosave: AutosaveCoordinator
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def document(self) -> PresentationDocument:
        return self.history.present

    def to_dict(self) -> dict:
        """Convert session to dictionary for API responses."""
        return {
            "session_id": self.session_id,
            "document": self.document.to_dict(),
            "can_undo": self.history.can_undo,
            "can_redo": self.history.can_redo,
            "undo_count": self.history.undo_count,
            "redo_count": self.history.redo_count,
            "autosave": self.autosave.status.to_dict(),
        }
