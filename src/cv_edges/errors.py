from __future__ import annotations


class CannyError(Exception):
    """Base class for edge detection failures."""


class InvalidArgument(CannyError, ValueError):
    """A caller broke a contract: even lengths, bad ratios, mismatched grids."""


class EmptyImage(CannyError, ValueError):
    """The image has zero height or zero width."""
