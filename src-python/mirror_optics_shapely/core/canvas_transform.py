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

from .constants import (
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    VERTEX_CANVAS_OFFSET_X,
)
from .geometry import geometry, Point


class CanvasTransform:
    """
    Affine map from the geometric space (y up) to canvas pixels (y down).

        canvas_x = origin_x + scale * x
        canvas_y = origin_y - scale * y

    Attributes:
        origin_x (float): Canvas abscissa of the geometric origin
        origin_y (float): Canvas ordinate of the geometric origin
        scale (float): Pixels per geometric unit (must be non-zero)
    """

    def __init__(self, origin_x: float, origin_y: float, scale: float = 1.0) -> None:
        if scale == 0:
            raise ValueError("Canvas scale must be non-zero")
        self.origin_x = origin_x
        self.origin_y = origin_y
        self.scale = scale

    @classmethod
    def for_canvas(cls, width: float = DEFAULT_CANVAS_WIDTH,
                   height: float = DEFAULT_CANVAS_HEIGHT,
                   scale: float = 1.0) -> 'CanvasTransform':
        """
        Standard layout: the mirror vertex (geometric origin) sits on the
        horizontal center line, shifted left of the canvas center to leave
        room for virtual images behind the mirror.
        """
        return cls(width / 2 + VERTEX_CANVAS_OFFSET_X, height / 2, scale)

    def to_canvas(self, point: Point) -> Point:
        return geometry.point(
            self.origin_x + self.scale * point.x,
            self.origin_y - self.scale * point.y
        )

    def from_canvas(self, point: Point) -> Point:
        return geometry.point(
            (point.x - self.origin_x) / self.scale,
            (self.origin_y - point.y) / self.scale
        )

    def __repr__(self) -> str:
        return (f"CanvasTransform(origin_x={self.origin_x}, origin_y={self.origin_y}, "
                f"scale={self.scale})")
