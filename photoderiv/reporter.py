"""
Reporter - Generates human-readable reports for pipeline runs.
"""

import logging
import sys
from typing import Dict, Optional, TextIO

from .generation_stats import GenerationStats


class Reporter:
    """
    Generates human-readable reports from run statistics and output trees.
    """

    STATUS_LABELS = {
        'pending': 'pending',
        'source_missing': 'no source',
        'empty': 'no images',
        'processed': 'ok',
        'reset_failed': 'RESET FAILED',
        'source_unreadable': 'UNREADABLE',
    }

    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.

        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)

    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)

    def _format_bytes(self, bytes_val: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} PB"

    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f} seconds"
        elif seconds < 3600:
            return f"{seconds / 60:.1f} minutes"
        else:
            return f"{seconds / 3600:.1f} hours"

    def report_summary(self, stats: GenerationStats, dry_run: bool = False) -> None:
        """Print a per-album summary of a run."""
        title = "DERIVATIVE GENERATION SUMMARY"
        if dry_run:
            title += " [DRY RUN]"

        self._print("=" * 70)
        self._print(title)
        self._print("=" * 70)
        self._print()

        self._print("Overall Statistics:")
        self._print(f"  Albums:               {len(stats.albums):,}")
        self._print(f"  Eligible Images:      {stats.total_to_process:,}")
        self._print(f"  Generated:            {stats.processed:,}")
        self._print(f"  Skipped Files:        {stats.skipped:,}")
        self._print(f"  Errors:               {stats.errors:,}")
        self._print(f"  Output Size:          {self._format_bytes(stats.bytes_generated)}")
        self._print(f"  Time:                 {self._format_duration(stats.elapsed_seconds)}")
        self._print()

        self._print("Albums:")
        self._print("-" * 70)
        self._print(f"{'Album':<24} {'Eligible':>10} {'Generated':>10} {'Errors':>8} {'Status':>14}")
        self._print("-" * 70)

        for name in sorted(stats.albums.keys()):
            album = stats.albums[name]
            status = self.STATUS_LABELS.get(album.status, album.status)
            self._print(
                f"{name:<24} {album.total_eligible:>10,} "
                f"{album.processed:>10,} {album.errors:>8,} {status:>14}"
            )

        self._print("-" * 70)
        self._print()

        if stats.error_details:
            self._print("Errors:")
            for error in stats.error_details:
                self._print(f"  {error}")
            self._print()

    def report_photo_counts(self, counts: Dict[str, int]) -> None:
        """Print the published photo count per album."""
        self._print("=" * 40)
        self._print("PUBLISHED PHOTOS")
        self._print("=" * 40)

        if not counts:
            self._print("No albums found.")
            self._print()
            return

        self._print(f"{'Album':<28} {'Photos':>10}")
        self._print("-" * 40)
        for name in sorted(counts.keys()):
            self._print(f"{name:<28} {counts[name]:>10,}")
        self._print("-" * 40)
        self._print(f"{'Total':<28} {sum(counts.values()):>10,}")
        self._print()
