"""Data models for the autosave coordinator."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def describe_last_saved(last_saved: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Render how long ago the last save happened ("Just now", "5m ago", ...)."""
    if last_saved is None:
        return "Never saved"
    
    now = now or datetime.now(timezone.utc)
    diff = int((now - last_saved).total_seconds())
    
    if diff < 60:
        return "Just now"
    if diff < 3600:
        return f"{diff // 60}m ago"
    if diff < 86400:
        return f"{diff // 3600}h ago"
    return f"{diff // 86400}d ago"


class AutosaveStatus(BaseModel):
    """Snapshot of the save state shown next to the undo/redo controls."""
    
    has_unsaved_changes: bool = Field(default=False, description="Present differs from the last persisted snapshot")
    last_saved: Optional[datetime] = Field(default=None, description="When the last successful save finished (UTC)")
    is_saving: bool = Field(default=False, description="A persist call is in flight")
    save_error: Optional[str] = Field(default=None, description="Reason the last save failed")
    
    @property
    def label(self) -> str:
        """Status text, most urgent state first."""
        if self.is_saving:
            return "Saving..."
        if self.save_error:
            return "Save failed"
        if self.has_unsaved_changes:
            return "Unsaved changes"
        if self.last_saved is None:
            return "No changes"
        return f"Saved {describe_last_saved(self.last_saved)}"
    
    @property
    def can_retry(self) -> bool:
        """Whether a manual save/retry action should be offered."""
        return (self.has_unsaved_changes or self.save_error is not None) and not self.is_saving
    
    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["label"] = self.label
        data["can_retry"] = self.can_retry
        return data
