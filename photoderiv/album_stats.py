"""
AlbumStats - Statistics for a single album.
"""

from dataclasses import dataclass, asdict


@dataclass
class AlbumStats:
    """
    Statistics for a single album.

    Attributes:
        name: Album name
        status: One of STATUSES
        total_eligible: Source files accepted for processing
        skipped: Source directory entries that were not eligible
        processed: Files whose every derivative role was written
        errors: Files with at least one failed role
        bytes_generated: Total bytes of derivatives written
    """
    STATUSES = ('pending', 'source_missing', 'empty', 'processed', 'reset_failed', 'source_unreadable')
    FAILED_STATUSES = ('reset_failed', 'source_unreadable')

    name: str
    status: str = 'pending'
    total_eligible: int = 0
    skipped: int = 0
    processed: int = 0
    errors: int = 0
    bytes_generated: int = 0

    @property
    def failed(self) -> bool:
        return self.status in self.FAILED_STATUSES

    @property
    def completed_count(self) -> int:
        return self.processed + self.errors

    @property
    def is_complete(self) -> bool:
        return self.completed_count >= self.total_eligible

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'AlbumStats':
        """Create from dictionary."""
        return cls(**data)
