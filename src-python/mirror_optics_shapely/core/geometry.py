"""
Copyright 2026 mirror-optics-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from typing import Dict, List, Optional, Tuple
from shapely.geometry import Point as ShapelyPoint, LineString

from .constants import GEOMETRY_TOLERANCE


class Point:
    """
    A point in 2D space.

    The geometric space has the optical axis horizontal and positive
    heights pointing upward. Can be converted to a Shapely Point.
    """
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def is_close(self, other: 'Point', tol: float = GEOMETRY_TOLERANCE) -> bool:
        """Test whether two points coincide within an absolute tolerance."""
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"


class Line:
    """
    A line in 2D space, defined by two points.
    Can represent a line, ray, or segment depending on context.
    - As a line: p1 and p2 are two distinct points on the line.
    - As a ray: p1 is the starting point and p2 is another point on the ray.
    - As a segment: p1 and p2 are the two endpoints.
    """
    def __init__(self, p1: Point, p2: Point):
        self.p1 = p1
        self.p2 = p2

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])

    def __repr__(self) -> str:
        return f"Line(p1={self.p1}, p2={self.p2})"


class Circle:
    """
    A circle in 2D space, defined by a center point and a radius.
    """
    def __init__(self, c: Point, r: float):
        self.c = c
        self.r = r

    def __repr__(self) -> str:
        return f"Circle(c={self.c}, r={self.r})"


class Geometry:
    """
    Basic geometric figures and operations used by the ray construction.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        """
        Create a point.

        Args:
            x: The x-coordinate of the point.
            y: The y-coordinate of the point.

        Returns:
            Point object
        """
        return Point(x, y)

    @staticmethod
    def line(p1: Point, p2: Point) -> Line:
        """
        Create a line, which also represents a ray or a segment.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Line object
        """
        return Line(p1, p2)

    @staticmethod
    def circle(c: Point, r: float) -> Circle:
        """
        Create a circle.

        Args:
            c: The center point of the circle.
            r: The radius of the circle (absolute value is used).

        Returns:
            Circle object
        """
        return Circle(c, abs(r))

    @staticmethod
    def line_circle_intersections(l1: Line, c1: Circle) -> List[Point]:
        """
        Calculate the intersections of a line and a circle.

        The line is parametrized as P(t) = p1 + t * (p2 - p1) and the
        quadratic |P(t) - c|^2 = r^2 is solved for t.

        Args:
            l1: Line
            c1: Circle

        Returns:
            Empty list when the line misses the circle (or is degenerate),
            otherwise the two points [P(t+), P(t-)] with
            t+- = (-B +- sqrt(B^2 - 4AC)) / 2A. A tangent line yields two
            equal points.
        """
        dx = l1.p2.x - l1.p1.x
        dy = l1.p2.y - l1.p1.y
        ox = l1.p1.x - c1.c.x
        oy = l1.p1.y - c1.c.y

        a = dx * dx + dy * dy
        b = 2 * (dx * ox + dy * oy)
        c = ox * ox + oy * oy - c1.r * c1.r

        if a == 0:
            return []

        det = b * b - 4 * a * c
        if det < 0:
            return []

        sqrt_det = math.sqrt(det)
        t1 = (-b + sqrt_det) / (2 * a)
        t2 = (-b - sqrt_det) / (2 * a)

        return [
            Geometry.point(l1.p1.x + t1 * dx, l1.p1.y + t1 * dy),
            Geometry.point(l1.p1.x + t2 * dx, l1.p1.y + t2 * dy),
        ]

    @staticmethod
    def line_vertical_intersection(l1: Line, x: float) -> Optional[Point]:
        """
        Calculate where a line crosses the vertical line at the given x.

        Args:
            l1: Line
            x: Abscissa of the vertical line

        Returns:
            Intersection point, or None if the line is itself vertical
        """
        dx = l1.p2.x - l1.p1.x
        if dx == 0:
            return None
        y = l1.p1.y + (x - l1.p1.x) * (l1.p2.y - l1.p1.y) / dx
        return Geometry.point(x, y)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """
        Calculate the distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Distance between points
        """
        return math.sqrt(Geometry.distance_squared(p1, p2))

    @staticmethod
    def distance_squared(p1: Point, p2: Point) -> float:
        """
        Calculate the squared distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Squared distance between points
        """
        dx = p1.x - p2.x
        dy = p1.y - p2.y
        return dx * dx + dy * dy

    @staticmethod
    def angle_to(p1: Point, p2: Point) -> float:
        """
        Direction angle (radians, counter-clockwise from +x) from p1 to p2.
        """
        return math.atan2(p2.y - p1.y, p2.x - p1.x)

    @staticmethod
    def point_at_angle(origin: Point, angle: float, length: float) -> Point:
        """
        Point reached by travelling `length` from `origin` along `angle`.

        Args:
            origin: Starting point
            angle: Direction in radians
            length: Distance to travel

        Returns:
            End point
        """
        return Geometry.point(
            origin.x + length * math.cos(angle),
            origin.y + length * math.sin(angle)
        )


# Create a singleton instance for convenience
geometry = Geometry()
