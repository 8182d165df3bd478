"""Version snapshot model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SnapshotDescriptor(BaseModel):
    """Summary of one stored snapshot; the content itself stays on disk."""

    version_id: str
    timestamp: Optional[datetime] = None
    size: int
    author: str
    preview: str

    def __repr__(self) -> str:
        return f"<SnapshotDescriptor(version_id={self.version_id!r}, author={self.author!r})>"
