"""
Gallery helpers - read an album's derivatives back by directory listing.

The site locates photos only by listing an album's output directory and
filtering by extension; there is no index file.
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

PUBLIC_EXTENSIONS = ('.webp',)


def list_album_derivatives(album_dir: str, extensions: Tuple[str, ...] = PUBLIC_EXTENSIONS) -> List[str]:
    """
    List derivative filenames in an album directory.

    Args:
        album_dir: Output directory of one album
        extensions: Extensions to keep, compared case-insensitively

    Returns:
        Sorted filenames; empty if the directory does not exist
    """
    suffixes = tuple(ext.lower() for ext in extensions)
    try:
        with os.scandir(album_dir) as entries:
            names = [
                entry.name for entry in entries
                if entry.is_file() and entry.name.lower().endswith(suffixes)
            ]
    except FileNotFoundError:
        return []
    return sorted(names)


def get_photo_count(
    images_root: str,
    album: str,
    extensions: Tuple[str, ...] = PUBLIC_EXTENSIONS
) -> int:
    """Count the full-size photos published for an album."""
    album_dir = os.path.join(images_root, album)
    try:
        return len(list_album_derivatives(album_dir, extensions))
    except OSError as e:
        logger.error(f"Error counting photos in {album_dir}: {e}")
        return 0


def count_albums(
    images_root: str,
    albums: Optional[List[str]] = None,
    extensions: Tuple[str, ...] = PUBLIC_EXTENSIONS
) -> Dict[str, int]:
    """
    Photo counts per album.

    Args:
        images_root: Directory holding one subdirectory per album
        albums: Albums to count (default: every subdirectory)
        extensions: Extensions that mark a full-size photo
    """
    if albums is None:
        try:
            with os.scandir(images_root) as entries:
                albums = sorted(entry.name for entry in entries if entry.is_dir())
        except FileNotFoundError:
            return {}
    return {album: get_photo_count(images_root, album, extensions) for album in albums}
