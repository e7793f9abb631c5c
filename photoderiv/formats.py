"""
Format policy - supported source formats and the renditions built from them.

Adding a source format or changing an output preset is a single edit to
RENDITIONS below.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

# Files that file managers drop next to photos
METADATA_ARTIFACTS = frozenset({'.ds_store', 'thumbs.db', 'desktop.ini'})
APPLEDOUBLE_PREFIX = '._'

FULL_TARGET_HEIGHT = 900
PREVIEW_TARGET_WIDTH = 610


class SourceFormat(Enum):
    """Source image formats the pipeline accepts, keyed by extension."""

    JPEG = ('.jpg', '.jpeg')
    PNG = ('.png',)

    @property
    def extensions(self) -> Tuple[str, ...]:
        return self.value

    @classmethod
    def from_filename(cls, filename: str) -> Optional['SourceFormat']:
        """Return the format for a filename, matching the extension case-insensitively."""
        ext = os.path.splitext(filename)[1].lower()
        for fmt in cls:
            if ext in fmt.extensions:
                return fmt
        return None


# Bytes a complete file of each format ends with
END_MARKERS = {
    SourceFormat.JPEG: b"\xff\xd9",
    SourceFormat.PNG: b"IEND",
}


class PipelineMode(Enum):
    """
    basic: one JPEG derivative per source, same extension, in the images tree.
    extended: a WebP full-size derivative in the public tree plus a JPEG
    preview in the images tree.
    """

    BASIC = 'basic'
    EXTENDED = 'extended'

    @property
    def formats(self) -> FrozenSet[SourceFormat]:
        return frozenset(fmt for mode, fmt in RENDITIONS if mode is self)


class Role(Enum):
    FULL = 'full'
    PREVIEW = 'preview'


class OutputTree(Enum):
    """Which output root a derivative is written under."""

    IMAGES = 'images'
    PUBLIC = 'public'


@dataclass(frozen=True)
class EncodingPreset:
    """
    Pillow encoder settings for one derivative.

    Attributes:
        format: Pillow format name ('JPEG' or 'WEBP')
        extension: Output extension, or None to keep the source's extension
        options: Keyword arguments passed to Image.save
    """
    format: str
    extension: Optional[str] = None
    options: Dict[str, object] = field(default_factory=dict)

    def output_extension(self, source_extension: str) -> str:
        return self.extension if self.extension is not None else source_extension


@dataclass(frozen=True)
class ResizeSpec:
    """
    Contain-fit resize bounding one axis.

    Attributes:
        axis: 'height' or 'width'
        target: Maximum size in pixels along axis
        enlarge: Whether images smaller than target are scaled up
    """
    axis: str
    target: int
    enlarge: bool = False

    def target_size(self, width: int, height: int) -> Tuple[int, int]:
        """Compute the output size for a source of the given dimensions."""
        current = height if self.axis == 'height' else width
        if current <= self.target and not self.enlarge:
            return width, height
        scale = self.target / current
        if self.axis == 'height':
            return max(1, round(width * scale)), self.target
        return self.target, max(1, round(height * scale))


@dataclass(frozen=True)
class RenditionSpec:
    """How to build one derivative role from a source image."""
    role: Role
    tree: OutputTree
    suffix: str
    resize: ResizeSpec
    preset: EncodingPreset

    def filename(self, identifier: str, source_extension: str) -> str:
        return f"{identifier}{self.suffix}{self.preset.output_extension(source_extension)}"


FULL_JPEG = EncodingPreset(
    format='JPEG',
    options={
        'quality': 92,
        'progressive': True,
        'optimize': True,
    },
)

FULL_WEBP = EncodingPreset(
    format='WEBP',
    extension='.webp',
    options={
        'quality': 100,
        'method': 6,
    },
)

PREVIEW_JPEG = EncodingPreset(
    format='JPEG',
    options={
        'quality': 80,
        'progressive': True,
        'optimize': True,
    },
)

FULL_RESIZE = ResizeSpec(axis='height', target=FULL_TARGET_HEIGHT)
PREVIEW_RESIZE = ResizeSpec(axis='width', target=PREVIEW_TARGET_WIDTH)

BASIC_FULL = RenditionSpec(Role.FULL, OutputTree.IMAGES, '', FULL_RESIZE, FULL_JPEG)
EXTENDED_FULL = RenditionSpec(Role.FULL, OutputTree.PUBLIC, '', FULL_RESIZE, FULL_WEBP)
EXTENDED_PREVIEW = RenditionSpec(Role.PREVIEW, OutputTree.IMAGES, '-preview', PREVIEW_RESIZE, PREVIEW_JPEG)

RENDITIONS: Dict[Tuple[PipelineMode, SourceFormat], Tuple[RenditionSpec, ...]] = {
    (PipelineMode.BASIC, SourceFormat.JPEG): (BASIC_FULL,),
    (PipelineMode.EXTENDED, SourceFormat.JPEG): (EXTENDED_FULL, EXTENDED_PREVIEW),
    (PipelineMode.EXTENDED, SourceFormat.PNG): (EXTENDED_FULL, EXTENDED_PREVIEW),
}


def is_metadata_artifact(filename: str) -> bool:
    """Check for .DS_Store-style files and AppleDouble companions."""
    return filename.lower() in METADATA_ARTIFACTS or filename.startswith(APPLEDOUBLE_PREFIX)


def renditions_for(mode: PipelineMode, fmt: SourceFormat) -> Tuple[RenditionSpec, ...]:
    """Return the renditions for a source format, or () if the mode does not accept it."""
    return RENDITIONS.get((mode, fmt), ())


def output_trees(mode: PipelineMode) -> Tuple[OutputTree, ...]:
    """Output trees a mode writes to, images tree first."""
    trees = {spec.tree for (m, _), specs in RENDITIONS.items() if m is mode for spec in specs}
    return tuple(tree for tree in OutputTree if tree in trees)
