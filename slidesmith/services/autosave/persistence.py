"""Persistence collaborators used by the autosave coordinator."""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from slidesmith.core.errors import PersistenceError
from slidesmith.models import PresentationDocument

logger = logging.getLogger(__name__)


class Persister(Protocol):
    """Stores a document; raises on failure."""
    
    async def persist(self, document: PresentationDocument) -> None:
        ...


class FilePersister:
    """Writes one session's document as pretty-printed JSON on disk."""
    
    def __init__(self, path: Path):
        self.path = Path(path)
    
    async def persist(self, document: PresentationDocument) -> None:
        try:
            payload = json.dumps(document.to_dict(), indent=2, ensure_ascii=False, allow_nan=False)
        except ValueError as e:
            raise PersistenceError(f"Could not serialize presentation: {e}") from e
        try:
            await asyncio.to_thread(self._write, payload)
        except OSError as e:
            raise PersistenceError(f"Could not write {self.path.name}: {e.strerror or e}") from e
        logger.debug(f"Persisted presentation to {self.path}")
    
    def _write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
    
    def exists(self) -> bool:
        return self.path.exists()
    
    def load(self) -> Optional[dict]:
        """Read the stored document data, or None when nothing was saved yet."""
        if not self.path.exists():
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)
