"""
Exceptions raised by the derivative pipeline.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .album import DerivativeSet


class PhotoderivError(Exception):
    """Base class for pipeline errors."""


class OutputTreeError(PhotoderivError):
    """An output directory could not be created or emptied."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot reset output directory {path}: {reason}")


class DerivativeError(PhotoderivError):
    """
    One or more derivative roles failed for a source image.

    Attributes:
        derivative_set: The partially rendered set, with per-role errors
    """

    def __init__(self, message: str, derivative_set: Optional['DerivativeSet'] = None):
        super().__init__(message)
        self.derivative_set = derivative_set
