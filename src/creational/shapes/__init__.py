"""Shape payloads and the shared shape factory."""

from .models import Circle, Rectangle, Shape, Square, Triangle
from .provider import BUILTIN_SHAPES, create_shape_factory, get_shape_factory

__all__ = [
    "BUILTIN_SHAPES",
    "Circle",
    "Rectangle",
    "Shape",
    "Square",
    "Triangle",
    "create_shape_factory",
    "get_shape_factory",
]
