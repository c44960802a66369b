"""Global constants for the creational core.

Keys of the built-in shapes, kept here to avoid hardcoded strings.
"""

SHAPE_CIRCLE = "circle"
SHAPE_RECTANGLE = "rectangle"
SHAPE_SQUARE = "square"
