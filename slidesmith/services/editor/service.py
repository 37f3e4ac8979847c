"""Editor Service: owns the open editing sessions."""

import json
import logging
import re
import uuid
from pathlib import Path
from typing import Optional

from slidesmith.core import get_settings
from slidesmith.core.config import Settings
from slidesmith.core.errors import SchemaViolationError, SessionNotFoundError
from slidesmith.models import PresentationDocument, documents_equal
from slidesmith.services.autosave import AutosaveCoordinator, FilePersister
from slidesmith.services.history import HistoryManager
from slidesmith.services.validation import parse_presentation

from .session import EditorSession, default_document

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class EditorService:
    """Creates, looks up and closes editing sessions."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._sessions: dict[str, EditorSession] = {}

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def _persister_for(self, session_id: str) -> FilePersister:
        return FilePersister(self._settings.presentations_dir / f"{session_id}.json")

    def _build_session(
        self,
        session_id: str,
        document: PresentationDocument,
        persister: FilePersister,
    ) -> EditorSession:
        history = HistoryManager(
            document,
            limit=self._settings.history_limit,
            equals=documents_equal,
        )
        autosave = AutosaveCoordinator(
            history,
            persister,
            debounce_seconds=self._settings.autosave_debounce_seconds,
            enabled=self._settings.autosave_enabled,
        )
        session = EditorSession(session_id=session_id, history=history, autosave=autosave)
        self._sessions[session_id] = session
        return session

    def create_session(self, document: Optional[PresentationDocument] = None) -> EditorSession:
        """Start a new session from a document (or the default one)."""
        session_id = uuid.uuid4().hex
        session = self._build_session(
            session_id,
            document or default_document(),
            self._persister_for(session_id),
        )
        logger.info(f"Created session {session_id}")
        return session

    def open_session(self, session_id: str) -> EditorSession:
        """
        Return an open session, or reopen one from its saved document.

        Raises:
            SessionNotFoundError: If the session is neither open nor stored
            SchemaViolationError: If the stored document is no longer valid
        """
        if session_id in self._sessions:
            return self._sessions[session_id]

        if not SESSION_ID_PATTERN.match(session_id):
            raise SessionNotFoundError(session_id)

        persister = self._persister_for(session_id)
        try:
            data = persister.load()
        except json.JSONDecodeError as e:
            raise SchemaViolationError(f"Stored presentation is corrupt: {e}") from e

        if data is None:
            raise SessionNotFoundError(session_id)

        document = parse_presentation(data, require_unique_ids=self._settings.require_unique_ids)
        logger.info(f"Reopened session {session_id} from {persister.path}")
        return self._build_session(session_id, document, persister)

    def get_session(self, session_id: str) -> EditorSession:
        """
        Raises:
            SessionNotFoundError: If no session is open under this id
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def close_session(self, session_id: str) -> bool:
        """
        Flush unsaved work and forget the session.

        Returns:
            True if everything was saved before closing
        """
        session = self.get_session(session_id)
        saved = await session.autosave.flush()
        session.autosave.close()
        del self._sessions[session_id]
        logger.info(f"Closed session {session_id} (saved={saved})")
        return saved

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.close_session(session_id)


# Singleton instance
_editor_service: Optional[EditorService] = None


def get_editor_service() -> EditorService:
    """Get the singleton editor service instance."""
    global _editor_service
    if _editor_service is None:
        _editor_service = EditorService()
    return _editor_service
