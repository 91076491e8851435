"""Voronoi mosaic paint engine."""

from mosaic.engine.registry import transform, Layer, get_registry
from mosaic.engine.context import PaintContext, PointCloud, Site
from mosaic.engine.config import PaintConfig
from mosaic.engine.pipeline import Pipeline, paint, register_transforms

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "PaintContext",
    "PointCloud",
    "Site",
    "PaintConfig",
    "Pipeline",
    "paint",
    "register_transforms",
]
