"""
Album and DerivativeSet - records for one album and the derivatives of one photo.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .formats import OutputTree, RenditionSpec, Role, SourceFormat


@dataclass
class Album:
    """
    A named photo album and the directories it maps to.

    Attributes:
        name: Album directory name under the content root
        source_dir: Directory holding the source photos (<name>-source)
        output_dirs: Output directory per tree the album writes to
    """
    name: str
    source_dir: str
    output_dirs: Dict[OutputTree, str] = field(default_factory=dict)

    def output_dir(self, tree: OutputTree) -> str:
        return self.output_dirs[tree]

    def source_path(self, filename: str) -> str:
        return os.path.join(self.source_dir, filename)


@dataclass
class Derivative:
    """
    One resized, re-encoded copy of a source image.

    Attributes:
        spec: Rendition spec it was built from
        path: Output file path
        size: Bytes written (after rendering)
        dimensions: (width, height) written (after rendering)
        error: Error message if rendering failed
    """
    spec: RenditionSpec
    path: str
    size: Optional[int] = None
    dimensions: Optional[Tuple[int, int]] = None
    error: Optional[str] = None

    @property
    def role(self) -> Role:
        return self.spec.role

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.size is not None


@dataclass
class DerivativeSet:
    """
    The derivatives produced from a single source image.

    All members share one identifier, so the full and preview outputs of a
    photo have the same stem.
    """
    album: str
    source_path: str
    source_format: SourceFormat
    identifier: str
    derivatives: List[Derivative] = field(default_factory=list)

    @property
    def source_filename(self) -> str:
        return os.path.basename(self.source_path)

    @property
    def succeeded(self) -> bool:
        """True only when every role was written."""
        return bool(self.derivatives) and all(d.succeeded for d in self.derivatives)

    @property
    def failed(self) -> List[Derivative]:
        return [d for d in self.derivatives if not d.succeeded]

    @property
    def bytes_written(self) -> int:
        return sum(d.size or 0 for d in self.derivatives)

    def get(self, role: Role) -> Optional[Derivative]:
        for derivative in self.derivatives:
            if derivative.role is role:
                return derivative
        return None

    def describe(self) -> str:
        """Output filenames joined for log lines, e.g. 'x.webp and x-preview.jpg'."""
        return ' and '.join(d.filename for d in self.derivatives)
