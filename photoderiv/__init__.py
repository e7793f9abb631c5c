"""
Photo derivative generation for album-based photo sites.

Every run fully regenerates each album's output trees:
    1. Discover albums under the content root that have a <album>-source directory
    2. Empty (or create) the album's output directories
    3. Resize and re-encode every eligible source photo under a fresh identifier
"""

__version__ = "1.0.0"

from .exceptions import PhotoderivError, OutputTreeError, DerivativeError
from .formats import PipelineMode, Role, SourceFormat
from .album import Album, Derivative, DerivativeSet
from .hash_allocator import HashAllocator
from .album_discovery import AlbumDiscovery
from .output_tree import OutputTreeManager
from .derivative_generator import DerivativeGenerator
from .album_stats import AlbumStats
from .generation_stats import GenerationStats
from .generation_progress import GenerationProgress
from .pipeline import PipelineDriver
from .pipeline_config import PipelineConfig
from .reporter import Reporter

__all__ = [
    "PhotoderivError",
    "OutputTreeError",
    "DerivativeError",
    "PipelineMode",
    "Role",
    "SourceFormat",
    "Album",
    "Derivative",
    "DerivativeSet",
    "HashAllocator",
    "AlbumDiscovery",
    "OutputTreeManager",
    "DerivativeGenerator",
    "AlbumStats",
    "GenerationStats",
    "GenerationProgress",
    "PipelineDriver",
    "PipelineConfig",
    "Reporter",
]
