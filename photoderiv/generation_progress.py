"""
GenerationProgress - Tracks and displays pipeline progress.
"""

import logging
from typing import Optional

from .album import DerivativeSet
from .album_stats import AlbumStats
from .generation_stats import GenerationStats


class GenerationProgress:
    """
    Tracks and displays generation progress with optional per-file output.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 100,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.

        Args:
            show_files: If True, print each file as it's processed
            log_interval: Log summary progress every N files (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0

    def on_album_start(self, album: str, total: int) -> None:
        """Called after an album's output trees are reset and its sources counted."""
        if self.show_files:
            print(f"\n=== Processing directory: {album} ({total} images) ===")
        else:
            self.logger.info(f"Processing directory: {album} ({total} images)")

    def on_album_skipped(self, album: str, reason: str) -> None:
        """Called when an album is skipped entirely."""
        if self.show_files:
            print(f"  [SKIP] {album} -> {reason}")
        else:
            self.logger.info(f"Skipping {album} - {reason}")

    def on_file_skipped(self, album: str, filename: str, reason: str) -> None:
        """Called when a source directory entry is not eligible."""
        if self.show_files:
            print(f"  [SKIP] [{album}] {filename} -> {reason}")
        else:
            self.logger.debug(f"[{album}] Skipping {filename} - {reason}")

    def on_file_processed(
        self,
        derivative_set: DerivativeSet,
        album_stats: AlbumStats,
        success: bool,
        error: Optional[str] = None
    ) -> None:
        """
        Called when every role of a source file has finished.

        Args:
            derivative_set: The rendered (or partially rendered) set
            album_stats: Stats of the album, already updated for this file
            success: Whether every role was written
            error: Error message (if failed)
        """
        counter = f"({album_stats.processed}/{album_stats.total_eligible})"
        if success:
            verb = 'Resized' if len(derivative_set.derivatives) == 1 else 'Processed'
            line = (
                f"[{derivative_set.album}] {verb} {derivative_set.source_filename} "
                f"to {derivative_set.describe()} {counter}"
            )
            if self.show_files:
                size_str = self._format_bytes(derivative_set.bytes_written)
                print(f"  [OK] {line} ({size_str})")
            else:
                self.logger.info(line)
        elif self.show_files:
            print(
                f"  [ERROR] [{derivative_set.album}] {derivative_set.source_filename} "
                f"-> {error or 'failed'}"
            )

    def on_dry_run(self, derivative_set: DerivativeSet) -> None:
        """Called in dry-run mode."""
        line = (
            f"[{derivative_set.album}] {derivative_set.source_filename} "
            f"-> would generate {derivative_set.describe()}"
        )
        if self.show_files:
            print(f"  [DRY RUN] {line}")
        else:
            self.logger.info(f"[DRY RUN] {line}")

    def on_progress_update(self, stats: GenerationStats) -> None:
        """
        Called after each completed file to report overall progress.

        Args:
            stats: Current generation statistics
        """
        total_done = stats.completed_count

        if not self.show_files and total_done - self.last_logged >= self.log_interval:
            self.last_logged = total_done
            self.logger.info(
                f"Progress: {stats.processed} generated, {stats.errors} errors "
                f"({stats.rate_per_minute:.1f}/min, {stats.remaining_count} left)"
            )

    @staticmethod
    def _format_bytes(bytes_val: Optional[int]) -> str:
        """Format bytes as human-readable string."""
        if bytes_val is None:
            return "unknown"
        for unit in ['B', 'KB', 'MB', 'GB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} TB"

    def __call__(self, stats: GenerationStats) -> None:
        """Allow use as callback for stats updates."""
        self.on_progress_update(stats)
