"""
PipelineConfig - Directory layout and run options.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from .formats import PipelineMode
from .hash_allocator import HashAllocator


@dataclass
class PipelineConfig:
    """
    Configuration for a pipeline run.

    Relative roots are resolved against base_dir.

    Attributes:
        base_dir: Site root (default: current directory)
        content_root: Directory whose subdirectories name the albums
        images_root: Directory with <album>-source inputs and <album> outputs
        public_root: Public web root; full-size derivatives go to <public_root>/images
        mode: 'basic' or 'extended'
        naming: 'random' or 'content'
        workers: Encoder threads (None = min(8, cpu count))
    """
    base_dir: str = '.'
    content_root: str = os.path.join('src', 'content', 'photos')
    images_root: str = os.path.join('src', 'assets', 'images')
    public_root: str = 'public'
    mode: str = PipelineMode.EXTENDED.value
    naming: str = 'random'
    workers: Optional[int] = None

    ENV_PREFIX = 'PHOTODERIV_'
    PUBLIC_IMAGES_DIR = 'images'

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> 'PipelineConfig':
        """Create config from PHOTODERIV_* environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str, default):
            return env.get(f"{cls.ENV_PREFIX}{name}") or default

        workers = get('WORKERS', None)
        return cls(
            base_dir=get('BASE_DIR', defaults.base_dir),
            content_root=get('CONTENT_ROOT', defaults.content_root),
            images_root=get('IMAGES_ROOT', defaults.images_root),
            public_root=get('PUBLIC_ROOT', defaults.public_root),
            mode=get('MODE', defaults.mode),
            naming=get('NAMING', defaults.naming),
            workers=int(workers) if workers else None,
        )

    def _resolve(self, path: str) -> str:
        return os.path.join(self.base_dir, path)

    @property
    def content_dir(self) -> str:
        return self._resolve(self.content_root)

    @property
    def images_dir(self) -> str:
        return self._resolve(self.images_root)

    @property
    def public_images_dir(self) -> str:
        return os.path.join(self._resolve(self.public_root), self.PUBLIC_IMAGES_DIR)

    @property
    def pipeline_mode(self) -> PipelineMode:
        return PipelineMode(self.mode)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        modes = [m.value for m in PipelineMode]
        if self.mode not in modes:
            errors.append(f"Invalid mode '{self.mode}' (expected one of: {', '.join(modes)})")
        if self.naming not in HashAllocator.STRATEGIES:
            errors.append(
                f"Invalid naming '{self.naming}' "
                f"(expected one of: {', '.join(HashAllocator.STRATEGIES)})"
            )
        if self.workers is not None and self.workers < 1:
            errors.append("workers must be at least 1")
        if not os.path.isdir(self.content_dir):
            errors.append(f"Content root not found: {self.content_dir}")
        if not os.path.isdir(self.images_dir):
            errors.append(f"Images root not found: {self.images_dir}")

        return errors
