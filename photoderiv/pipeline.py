"""
PipelineDriver - Regenerates derivatives for every album in one run.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Set

from .album import Album, DerivativeSet
from .album_discovery import AlbumDiscovery
from .album_stats import AlbumStats
from .derivative_generator import DerivativeGenerator
from .exceptions import OutputTreeError
from .formats import is_metadata_artifact
from .generation_progress import GenerationProgress
from .generation_stats import GenerationStats
from .output_tree import OutputTreeManager


def default_workers() -> int:
    return min(8, os.cpu_count() or 1)


class PipelineDriver:
    """
    Drives discovery, output reset and derivative generation for all albums.

    Identifiers are allocated on the calling thread; decoding and encoding
    run on a thread pool. Albums overlap freely, but run() does not return
    until every submitted file has finished.
    """

    def __init__(
        self,
        discovery: AlbumDiscovery,
        generator: DerivativeGenerator,
        tree_manager: Optional[OutputTreeManager] = None,
        workers: Optional[int] = None,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline driver.

        Args:
            discovery: Album discovery instance
            generator: Derivative generator instance
            tree_manager: Output tree manager (default: new instance)
            workers: Encoder threads (default: min(8, cpu count))
            dry_run: If True, don't reset directories or write derivatives
            logger: Optional logger instance
        """
        self.discovery = discovery
        self.generator = generator
        self.logger = logger or logging.getLogger(__name__)
        self.tree_manager = tree_manager or OutputTreeManager(self.logger)
        self.workers = workers or default_workers()
        self.dry_run = dry_run
        self.stats = GenerationStats()

    def run(self, progress: Optional[GenerationProgress] = None) -> GenerationStats:
        """
        Process every discovered album.

        Args:
            progress: Optional progress tracker

        Returns:
            GenerationStats with results
        """
        progress = progress or GenerationProgress(logger=self.logger)
        self.stats = GenerationStats()

        albums = self.discovery.discover()
        for name in self.discovery.missing_sources:
            self.stats.album(name).status = 'source_missing'

        mode_str = " [DRY RUN]" if self.dry_run else ""
        self.logger.info(
            f"Processing {len(albums)} album(s) with {self.workers} workers "
            f"({self.generator.mode.value} mode){mode_str}"
        )

        pending: Dict[Future, DerivativeSet] = {}
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            try:
                for album in albums:
                    self._schedule_album(album, executor, pending, progress)

                for future in as_completed(pending):
                    self._complete_file(future, pending[future], progress)
            except KeyboardInterrupt:
                self.logger.warning("Interrupted, cancelling queued renders")
                executor.shutdown(wait=False, cancel_futures=True)
                raise

        self.stats.finish()
        self.logger.info(
            f"All albums complete: {self.stats.processed} generated, "
            f"{self.stats.skipped} skipped, {self.stats.errors} errors "
            f"({self.stats.elapsed_seconds:.1f}s)"
        )
        return self.stats

    def list_sources(self, album: Album) -> List[str]:
        """Return the regular files in an album's source directory, sorted."""
        with os.scandir(album.source_dir) as entries:
            return sorted(entry.name for entry in entries if entry.is_file())

    def _schedule_album(
        self,
        album: Album,
        executor: ThreadPoolExecutor,
        pending: Dict[Future, DerivativeSet],
        progress: GenerationProgress
    ) -> None:
        """Reset an album's output trees and submit its eligible files."""
        album_stats = self.stats.album(album.name)

        if not self.dry_run:
            try:
                for output_dir in album.output_dirs.values():
                    self.tree_manager.reset(output_dir)
            except OutputTreeError as e:
                self._album_failed(album_stats, 'reset_failed', str(e))
                return

        try:
            filenames = self.list_sources(album)
        except OSError as e:
            self._album_failed(album_stats, 'source_unreadable', f"Error reading directory {album.name}: {e}")
            return

        eligible = []
        for filename in filenames:
            if self.generator.is_eligible(filename):
                eligible.append(filename)
            else:
                album_stats.skipped += 1
                progress.on_file_skipped(album.name, filename, self._skip_reason(filename))

        album_stats.total_eligible = len(eligible)
        if not eligible:
            album_stats.status = 'empty'
            progress.on_album_skipped(album.name, "no eligible images found")
            return

        album_stats.status = 'processed'
        progress.on_album_start(album.name, len(eligible))

        registry: Set[str] = set()
        for filename in eligible:
            try:
                derivative_set = self.generator.plan(filename, album, registry)
            except Exception as e:
                self._file_failed(album_stats, album.name, filename, e)
                continue

            if self.dry_run:
                album_stats.processed += 1
                progress.on_dry_run(derivative_set)
                continue

            future = executor.submit(self.generator.render, derivative_set)
            pending[future] = derivative_set

    def _complete_file(
        self,
        future: Future,
        derivative_set: DerivativeSet,
        progress: GenerationProgress
    ) -> None:
        """Account for a finished file. Runs on the driver thread."""
        album_stats = self.stats.album(derivative_set.album)
        album_stats.bytes_generated += derivative_set.bytes_written

        try:
            future.result()
        except Exception as e:
            self._file_failed(album_stats, derivative_set.album, derivative_set.source_filename, e)
            progress.on_file_processed(derivative_set, album_stats, success=False, error=str(e))
        else:
            album_stats.processed += 1
            progress.on_file_processed(derivative_set, album_stats, success=True)

        progress.on_progress_update(self.stats)

        if album_stats.is_complete:
            self.logger.debug(
                f"[{album_stats.name}] Finished: {album_stats.processed}/{album_stats.total_eligible} "
                f"generated, {album_stats.errors} errors"
            )

    def _file_failed(self, album_stats: AlbumStats, album: str, filename: str, error: Exception) -> None:
        error_msg = f"[{album}] Error resizing {filename}: {error}"
        self.logger.error(error_msg)
        album_stats.errors += 1
        self.stats.error_details.append(error_msg)

    def _album_failed(self, album_stats: AlbumStats, status: str, error_msg: str) -> None:
        self.logger.error(error_msg)
        album_stats.status = status
        self.stats.error_details.append(error_msg)

    def _skip_reason(self, filename: str) -> str:
        if is_metadata_artifact(filename):
            return "metadata file"
        allowed = ', '.join(sorted(ext for fmt in self.generator.mode.formats for ext in fmt.extensions))
        return f"not a supported image ({allowed})"
