"""
AlbumDiscovery - Enumerates albums and maps them to source and output directories.
"""

import logging
import os
from typing import List, Optional

from .album import Album
from .formats import OutputTree, PipelineMode, output_trees


class AlbumDiscovery:
    """
    Finds albums under the content root.

    Every subdirectory of the content root names an album. Its photos are
    expected in <images_root>/<name>-source; albums without that directory
    are skipped (their derivatives may already have been generated and the
    sources pruned).
    """

    SOURCE_SUFFIX = '-source'

    def __init__(
        self,
        content_root: str,
        images_root: str,
        public_images_root: Optional[str] = None,
        mode: PipelineMode = PipelineMode.EXTENDED,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize discovery.

        Args:
            content_root: Directory whose subdirectories name the albums
            images_root: Directory holding <album>-source and <album> trees
            public_images_root: Directory for public full-size trees (extended mode)
            mode: Pipeline mode, decides which output trees an album gets
            logger: Optional logger instance
        """
        self.content_root = content_root
        self.images_root = images_root
        self.public_images_root = public_images_root
        self.mode = mode
        self.logger = logger or logging.getLogger(__name__)
        self.missing_sources: List[str] = []

        if OutputTree.PUBLIC in output_trees(mode) and not public_images_root:
            raise ValueError(f"{mode.value} mode requires a public images root")

    def list_album_names(self) -> List[str]:
        """
        List subdirectory names of the content root.

        Raises:
            FileNotFoundError: If the content root does not exist
        """
        with os.scandir(self.content_root) as entries:
            names = [entry.name for entry in entries if entry.is_dir()]
        return sorted(names)

    def source_dir_for(self, name: str) -> str:
        return os.path.join(self.images_root, f"{name}{self.SOURCE_SUFFIX}")

    def build_album(self, name: str) -> Album:
        """Create an Album with the output directories for the configured mode."""
        roots = {
            OutputTree.IMAGES: self.images_root,
            OutputTree.PUBLIC: self.public_images_root,
        }
        return Album(
            name=name,
            source_dir=self.source_dir_for(name),
            output_dirs={
                tree: os.path.join(roots[tree], name)
                for tree in output_trees(self.mode)
            },
        )

    def discover(self) -> List[Album]:
        """
        Discover albums that have a source directory.

        Returns:
            Albums in name order
        """
        names = self.list_album_names()
        self.logger.info(f"Found directories to process: {', '.join(names) or '(none)'}")

        self.missing_sources = []
        albums = []
        for name in names:
            album = self.build_album(name)
            if not os.path.isdir(album.source_dir):
                self.logger.info(f"Skipping {name} - source directory not found: {album.source_dir}")
                self.missing_sources.append(name)
                continue
            albums.append(album)

        return albums
