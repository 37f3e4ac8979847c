"""Exception hierarchy shared by the editing core."""
from enum import Enum


class SlidesmithError(Exception):
    """Base class for all Slidesmith errors."""


class ImportErrorKind(str, Enum):
    """Why an import was rejected."""
    
    MALFORMED_INPUT = "malformed_input"
    SCHEMA_VIOLATION = "schema_violation"
    DECODE_FAILURE = "decode_failure"
    UNSUPPORTED_TYPE = "unsupported_type"


class DocumentImportError(SlidesmithError):
    """An import was rejected before it reached the editing history."""
    
    def __init__(self, kind: ImportErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)
    
    @property
    def user_message(self) -> str:
        """Message shown to the user; decode failures read like malformed input."""
        if self.kind in (ImportErrorKind.MALFORMED_INPUT, ImportErrorKind.DECODE_FAILURE):
            return f"The file could not be read: {self.message}"
        if self.kind == ImportErrorKind.SCHEMA_VIOLATION:
            return f"The file is not a valid presentation: {self.message}"
        return self.message
    
    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


class SchemaViolationError(SlidesmithError):
    """Structured data failed presentation validation."""
    
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PersistenceError(SlidesmithError):
    """The persistence collaborator could not store a document."""


class DocumentOperationError(SlidesmithError):
    """An edit referenced a slide or element that does not exist."""


class SessionNotFoundError(SlidesmithError):
    """No editing session exists for the requested id."""
    
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")
