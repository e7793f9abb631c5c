"""
DerivativeGenerator - Resizes and re-encodes source photos into derivatives.
"""

import logging
import os
from typing import Optional, Set

from PIL import Image, ImageFile, ImageOps

from .album import Album, Derivative, DerivativeSet
from .exceptions import DerivativeError
from .formats import (
    END_MARKERS,
    PipelineMode,
    RenditionSpec,
    SourceFormat,
    is_metadata_artifact,
    renditions_for,
)
from .hash_allocator import HashAllocator

# Decode damaged sources as far as their data goes
ImageFile.LOAD_TRUNCATED_IMAGES = True

TAIL_BYTES = 1024
SIXTEEN_BIT_MODES = ('I', 'I;16', 'I;16B', 'I;16L', 'I;16N')


class DerivativeGenerator:
    """
    Generates the derivative set for one source image using Pillow.

    Work is split in two so the caller controls threading:
        plan():   eligibility check and identifier allocation (cheap, must
                  run on the thread that owns the album's registry)
        render(): decode, orient, resize, encode and write every role
    """

    def __init__(
        self,
        mode: PipelineMode = PipelineMode.EXTENDED,
        allocator: Optional[HashAllocator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize derivative generator.

        Args:
            mode: basic (single JPEG) or extended (WebP full + JPEG preview)
            allocator: Identifier allocator (default: random naming)
            logger: Optional logger instance
        """
        self.mode = mode
        self.allocator = allocator or HashAllocator()
        self.logger = logger or logging.getLogger(__name__)

    def source_format(self, filename: str) -> Optional[SourceFormat]:
        """Return the source format if filename is eligible in this mode, else None."""
        if is_metadata_artifact(filename):
            return None
        fmt = SourceFormat.from_filename(filename)
        if fmt is None or fmt not in self.mode.formats:
            return None
        return fmt

    def is_eligible(self, filename: str) -> bool:
        return self.source_format(filename) is not None

    def plan(self, filename: str, album: Album, registry: Set[str]) -> DerivativeSet:
        """
        Allocate an identifier and lay out the output paths for a source file.

        Args:
            filename: Source filename within the album's source directory
            album: Album being processed
            registry: Identifiers already allocated for this album (mutated)

        Returns:
            DerivativeSet with unrendered derivatives

        Raises:
            ValueError: If the file is not eligible in this mode
        """
        fmt = self.source_format(filename)
        if fmt is None:
            raise ValueError(f"{filename} is not an eligible source image")

        source_path = album.source_path(filename)
        extension = os.path.splitext(filename)[1]
        identifier = self.allocator.allocate(registry, source_path)

        derivative_set = DerivativeSet(
            album=album.name,
            source_path=source_path,
            source_format=fmt,
            identifier=identifier,
        )
        for spec in renditions_for(self.mode, fmt):
            path = os.path.join(album.output_dir(spec.tree), spec.filename(identifier, extension))
            derivative_set.derivatives.append(Derivative(spec=spec, path=path))

        return derivative_set

    def render(self, derivative_set: DerivativeSet) -> DerivativeSet:
        """
        Write every derivative in the set.

        A failing role does not stop the others; failures are recorded on the
        derivative and reported together afterwards.

        Raises:
            DerivativeError: If the source cannot be read or any role failed
        """
        try:
            with Image.open(derivative_set.source_path) as img:
                img.load()
                oriented = ImageOps.exif_transpose(img)
            if self._is_truncated(derivative_set):
                self.logger.warning(
                    f"[{derivative_set.album}] {derivative_set.source_filename} is truncated, "
                    f"writing derivatives from partial data"
                )
        except Exception as e:
            for derivative in derivative_set.derivatives:
                derivative.error = str(e)
            raise DerivativeError(f"cannot read source: {e}", derivative_set) from e

        for derivative in derivative_set.derivatives:
            try:
                self._write_derivative(oriented, derivative)
            except Exception as e:
                derivative.error = str(e)
                self.logger.debug(
                    f"[{derivative_set.album}] {derivative.role.value} failed for "
                    f"{derivative_set.source_filename}: {e}"
                )

        if not derivative_set.succeeded:
            errors = '; '.join(f"{d.role.value}: {d.error}" for d in derivative_set.failed)
            raise DerivativeError(errors, derivative_set)

        return derivative_set

    def generate(self, filename: str, album: Album, registry: Set[str]) -> DerivativeSet:
        """Plan and render a source file in one call."""
        return self.render(self.plan(filename, album, registry))

    def _write_derivative(self, img: Image.Image, derivative: Derivative) -> None:
        spec = derivative.spec
        converted = self._convert_color_mode(img, spec.preset.format)
        resized = self._resize(converted, spec)

        resized.save(derivative.path, format=spec.preset.format, **spec.preset.options)

        derivative.dimensions = resized.size
        derivative.size = os.path.getsize(derivative.path)

    def _is_truncated(self, derivative_set: DerivativeSet) -> bool:
        """Return True if the source lacks its format's end marker."""
        marker = END_MARKERS[derivative_set.source_format]
        with open(derivative_set.source_path, 'rb') as f:
            f.seek(0, os.SEEK_END)
            f.seek(max(0, f.tell() - TAIL_BYTES))
            return marker not in f.read()

    def _resize(self, img: Image.Image, spec: RenditionSpec) -> Image.Image:
        """Contain-fit resize along the rendition's axis, never enlarging."""
        size = spec.resize.target_size(img.width, img.height)
        if size == img.size:
            return img
        return img.resize(size, Image.Resampling.LANCZOS)

    def _convert_color_mode(self, img: Image.Image, output_format: str) -> Image.Image:
        """Convert image to a color mode the output encoder accepts."""
        if img.mode in SIXTEEN_BIT_MODES:
            img = img.convert('I').point(lambda v: v * (1 / 256)).convert('L')

        if output_format == 'WEBP':
            if img.mode == 'P':
                return img.convert('RGBA')
            if img.mode not in ('RGB', 'RGBA'):
                return img.convert('RGBA' if 'A' in img.mode else 'RGB')
            return img

        if img.mode in ('RGBA', 'LA', 'P'):
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img
