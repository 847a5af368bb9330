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
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np

from .constants import MIRROR_HALF_EXTENT
from .geometry import geometry, Point, Circle


class MirrorKind(str, Enum):
    """Shape of the mirror. Values are the upper-case names used by callers."""
    PLANE = 'PLANE'
    CONCAVE = 'CONCAVE'
    CONVEX = 'CONVEX'

    @classmethod
    def from_value(cls, value: Union['MirrorKind', str]) -> 'MirrorKind':
        """
        Coerce a MirrorKind or a case-insensitive name into a MirrorKind.

        Raises:
            ValueError: If the value does not name a mirror kind.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(
                f"Invalid mirror type '{value}'. "
                f"Valid options: {tuple(k.value for k in cls)}"
            ) from None


@dataclass(frozen=True)
class MirrorSpec:
    """
    Mirror shape and focal length.

    Attributes:
        kind: PLANE, CONCAVE or CONVEX
        focal_length: Positive for concave, negative for convex. Unused for
            the plane mirror, where it is treated as infinite.
    """
    kind: MirrorKind
    focal_length: float

    @classmethod
    def plane(cls) -> 'MirrorSpec':
        return cls(MirrorKind.PLANE, math.inf)

    @classmethod
    def concave(cls, focal_length: float) -> 'MirrorSpec':
        return cls(MirrorKind.CONCAVE, focal_length)

    @classmethod
    def convex(cls, focal_length: float) -> 'MirrorSpec':
        return cls(MirrorKind.CONVEX, focal_length)

    @property
    def is_curved(self) -> bool:
        return self.kind is not MirrorKind.PLANE

    @property
    def curvature_radius(self) -> float:
        """Signed radius of curvature R = 2f (infinite for the plane mirror)."""
        if not self.is_curved:
            return math.inf
        return 2 * self.focal_length

    def validate(self) -> 'MirrorSpec':
        """
        Check that the focal length sign matches the mirror kind.

        Returns:
            self, so the call can be chained

        Raises:
            ValueError: For a non-positive concave focal length, a
                non-negative convex focal length, or a curved mirror whose
                focal length is not finite.
        """
        if self.is_curved and not math.isfinite(self.focal_length):
            raise ValueError(
                f"{self.kind.value.capitalize()} mirror focal length must be finite, "
                f"got {self.focal_length}"
            )
        if self.kind is MirrorKind.CONCAVE and not self.focal_length > 0:
            raise ValueError(
                f"Concave mirror needs a positive focal length, got {self.focal_length}"
            )
        if self.kind is MirrorKind.CONVEX and not self.focal_length < 0:
            raise ValueError(
                f"Convex mirror needs a negative focal length, got {self.focal_length}"
            )
        return self


@dataclass(frozen=True)
class ObjectSpec:
    """
    Object arrow standing on the optical axis in front of the mirror.

    Attributes:
        distance: Distance from the vertex along the axis, always positive
        height: Arrow height, positive upward
    """
    distance: float
    height: float

    def validate(self) -> 'ObjectSpec':
        if not self.distance > 0:
            raise ValueError(f"Object distance must be > 0, got {self.distance}")
        return self


class MirrorSurface:
    """
    Reflecting surface of a mirror placed at a vertex on the optical axis.

    The plane mirror is the vertical line x = vertex.x. A curved mirror is a
    circle of radius |R| (R = 2f) centered at C = (vertex.x - R, vertex.y),
    so the center lies in front of a concave mirror and behind a convex one.
    Only the part of the circle within MIRROR_HALF_EXTENT of the axis is
    drawn, but intersections are computed against the whole circle.

    Attributes:
        mirror (MirrorSpec): The mirror being modelled
        vertex (Point): Where the mirror crosses the optical axis
        radius (float): Signed radius of curvature (inf for plane)
        center (Point or None): Center of curvature (None for plane)
        half_extent (float): Half height of the drawn surface

    The radius defaults to 2f; callers may pass it explicitly.
    """

    def __init__(self, mirror: MirrorSpec, vertex: Point,
                 half_extent: float = MIRROR_HALF_EXTENT,
                 radius: Optional[float] = None) -> None:
        self.mirror = mirror
        self.vertex = vertex
        self.half_extent = half_extent
        self.radius = mirror.curvature_radius if radius is None else radius
        if mirror.is_curved:
            self.center = geometry.point(vertex.x - self.radius, vertex.y)
        else:
            self.center = None

    @property
    def is_plane(self) -> bool:
        return self.center is None

    @property
    def circle(self) -> Circle:
        """The full circle carrying the arc (curved mirrors only)."""
        if self.is_plane:
            raise ValueError("Plane mirror has no circle of curvature")
        return geometry.circle(self.center, self.radius)

    def get_intersection(self, p1: Point, p2: Point) -> Point:
        """
        Reflection point of the line through p1 and p2 on the mirror.

        For the plane mirror the line is interpolated to x = vertex.x. For a
        curved mirror the line/circle quadratic is solved and, of the two
        roots, the one whose x lies closest to the vertex is kept (the near
        side of the circle). When no intersection exists, the vertex is
        returned instead.

        Args:
            p1: Start of the line (usually the object tip)
            p2: Steering point the line passes through

        Returns:
            Point on the mirror surface, or the vertex as a fallback
        """
        line = geometry.line(p1, p2)

        if self.is_plane:
            hit = geometry.line_vertical_intersection(line, self.vertex.x)
            if hit is None:
                return geometry.point(self.vertex.x, self.vertex.y)
            return hit

        hits = geometry.line_circle_intersections(line, self.circle)
        if not hits:
            return geometry.point(self.vertex.x, self.vertex.y)

        first, second = hits
        if abs(first.x - self.vertex.x) < abs(second.x - self.vertex.x):
            return first
        return second

    def contains_point(self, point: Point, tol: float = 1e-6) -> bool:
        """
        Test whether a point lies on the mirror line or on its circle.
        """
        if self.is_plane:
            return abs(point.x - self.vertex.x) <= tol
        return abs(geometry.distance(point, self.center) - abs(self.radius)) <= tol

    def half_angle(self) -> float:
        """Half the angle subtended by the drawn arc at the center."""
        if self.is_plane:
            return 0.0
        return math.asin(min(1.0, self.half_extent / abs(self.radius)))

    def arc_angles(self) -> Tuple[float, float]:
        """
        Start and end angle of the drawn arc, measured at the center.

        The concave arc is centered on angle 0 (the vertex lies to the right
        of C); the convex arc is centered on angle pi.

        Raises:
            ValueError: For the plane mirror.
        """
        if self.is_plane:
            raise ValueError("Plane mirror has no arc")
        angle = self.half_angle()
        if self.radius > 0:
            return (-angle, angle)
        return (math.pi - angle, math.pi + angle)

    def within_drawn_extent(self, point: Point, tol: float = 1e-9) -> bool:
        """
        Test whether a point on the mirror falls within the drawn part.

        For the plane mirror this compares |y - vertex.y| with the half
        extent. For a curved mirror the angle of the point seen from C is
        compared with the arc span, measured from the arc's middle angle so
        the convex arc (centered on pi) does not wrap. Whether the point
        actually lies on the circle is checked by contains_point().
        """
        if self.is_plane:
            return abs(point.y - self.vertex.y) <= self.half_extent + tol
        start, end = self.arc_angles()
        middle = (start + end) / 2
        offset = geometry.angle_to(self.center, point) - middle
        offset = math.atan2(math.sin(offset), math.cos(offset))
        return abs(offset) <= self.half_angle() + tol

    def endpoints(self) -> Tuple[Point, Point]:
        """Lower and upper end of the drawn surface."""
        if self.is_plane:
            return (
                geometry.point(self.vertex.x, self.vertex.y - self.half_extent),
                geometry.point(self.vertex.x, self.vertex.y + self.half_extent),
            )
        start, end = self.arc_angles()
        r = abs(self.radius)
        p_start = geometry.point_at_angle(self.center, start, r)
        p_end = geometry.point_at_angle(self.center, end, r)
        if p_start.y <= p_end.y:
            return (p_start, p_end)
        return (p_end, p_start)

    def sample(self, n: int = 64) -> List[Point]:
        """
        Sample the drawn surface with n points, from bottom to top.
        """
        if self.is_plane:
            lower, upper = self.endpoints()
            ys = np.linspace(lower.y, upper.y, n)
            return [geometry.point(self.vertex.x, float(y)) for y in ys]

        start, end = self.arc_angles()
        r = abs(self.radius)
        angles = np.linspace(start, end, n)
        points = [
            geometry.point(self.center.x + r * float(np.cos(a)),
                           self.center.y + r * float(np.sin(a)))
            for a in angles
        ]
        if points[0].y > points[-1].y:
            points.reverse()
        return points

    def __repr__(self) -> str:
        return (f"MirrorSurface(kind={self.mirror.kind.value}, vertex={self.vertex}, "
                f"radius={self.radius})")

