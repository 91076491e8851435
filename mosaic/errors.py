"""Exceptions raised by the painter."""

from __future__ import annotations


class MosaicError(Exception):
    """Base class for painter errors."""


class SiteLookupError(MosaicError):
    """A triangulation vertex has no matching site in the point cloud.

    Means the point and color sequences went out of step; the paint must stop.
    """

    def __init__(self, point: tuple[float, float]) -> None:
        super().__init__(f"Could not find site at {point!r}")
        self.point = point
