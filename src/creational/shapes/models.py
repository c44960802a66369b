"""Shape payload models produced by the shape factory."""

import math
from abc import abstractmethod

from pydantic import BaseModel, Field


class Shape(BaseModel):
    """Common capability of every producible shape."""

    @abstractmethod
    def area(self) -> float:
        """Return the area of the shape."""

    def describe(self) -> str:
        return f"{type(self).__name__.lower()} with area {self.area():.2f}"


class Circle(Shape):
    radius: float = Field(default=1.0, gt=0, description="Circle radius")

    def area(self) -> float:
        return math.pi * self.radius**2


class Rectangle(Shape):
    width: float = Field(default=1.0, gt=0, description="Rectangle width")
    height: float = Field(default=1.0, gt=0, description="Rectangle height")

    def area(self) -> float:
        return self.width * self.height


class Square(Shape):
    side: float = Field(default=1.0, gt=0, description="Side length")

    def area(self) -> float:
        return self.side**2


class Triangle(Shape):
    """Not part of the built-in set; registered by callers that need it."""

    base: float = Field(default=1.0, gt=0, description="Base length")
    height: float = Field(default=1.0, gt=0, description="Height over the base")

    def area(self) -> float:
        return 0.5 * self.base * self.height
