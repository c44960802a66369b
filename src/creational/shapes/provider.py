"""Shared shape factory.

The built-in shapes are seeded when the shared factory is first built.
Further shapes are added at runtime with ``register``; no dispatch code
changes.
"""

from loguru import logger

from creational.constants import SHAPE_CIRCLE, SHAPE_RECTANGLE, SHAPE_SQUARE
from creational.factory import Factory
from creational.registry import Constructor, TypeRegistry
from creational.settings import get_settings
from creational.singleton import singleton

from .models import Circle, Rectangle, Shape, Square

BUILTIN_SHAPES: dict[str, Constructor[Shape]] = {
    SHAPE_CIRCLE: Circle,
    SHAPE_RECTANGLE: Rectangle,
    SHAPE_SQUARE: Square,
}


def create_shape_factory(seed_builtins: bool = True) -> Factory[str, Shape]:
    """Build a new shape factory around its own registry.

    Args:
        seed_builtins: If True, register the built-in shapes

    Returns:
        A new, unshared factory
    """
    return Factory(TypeRegistry(name="shapes"), builtins=BUILTIN_SHAPES if seed_builtins else None)


@singleton
def get_shape_factory() -> Factory[str, Shape]:
    """Get the shared shape factory instance.

    Returns:
        The process-wide shape factory
    """
    settings = get_settings()
    logger.debug(f"Building shared shape factory (seed_builtin_shapes={settings.seed_builtin_shapes})")
    return create_shape_factory(seed_builtins=settings.seed_builtin_shapes)
