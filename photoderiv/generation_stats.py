"""
GenerationStats - Statistics for a pipeline run.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List

from .album_stats import AlbumStats


@dataclass
class GenerationStats:
    """
    Statistics for a pipeline run across all albums.

    Attributes:
        albums: Per-album statistics, keyed by album name
        start_time: Start timestamp
        end_time: Set when every submitted file has finished
        error_details: List of error messages
    """
    albums: Dict[str, AlbumStats] = field(default_factory=dict)
    start_time: float = field(default_factory=time.time)
    end_time: float = 0.0
    error_details: List[str] = field(default_factory=list)

    def album(self, name: str) -> AlbumStats:
        """Get or create stats for an album."""
        if name not in self.albums:
            self.albums[name] = AlbumStats(name=name)
        return self.albums[name]

    def finish(self) -> None:
        self.end_time = time.time()

    def _sum(self, attr: str) -> int:
        return sum(getattr(stats, attr) for stats in self.albums.values())

    @property
    def total_to_process(self) -> int:
        """Eligible source files across all albums."""
        return self._sum('total_eligible')

    @property
    def processed(self) -> int:
        return self._sum('processed')

    @property
    def skipped(self) -> int:
        return self._sum('skipped')

    @property
    def errors(self) -> int:
        return self._sum('errors')

    @property
    def bytes_generated(self) -> int:
        return self._sum('bytes_generated')

    @property
    def album_failures(self) -> int:
        """Albums that could not be reset or read."""
        return sum(1 for stats in self.albums.values() if stats.failed)

    @property
    def has_failures(self) -> bool:
        return self.errors > 0 or self.album_failures > 0

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        end = self.end_time or time.time()
        return end - self.start_time

    @property
    def rate_per_second(self) -> float:
        """Processing rate in source files per second."""
        if self.elapsed_seconds > 0:
            return self.processed / self.elapsed_seconds
        return 0.0

    @property
    def rate_per_minute(self) -> float:
        """Processing rate in source files per minute."""
        return self.rate_per_second * 60

    @property
    def completed_count(self) -> int:
        """Total completed (processed + errors)."""
        return self.processed + self.errors

    @property
    def remaining_count(self) -> int:
        """Remaining to process."""
        return self.total_to_process - self.completed_count
