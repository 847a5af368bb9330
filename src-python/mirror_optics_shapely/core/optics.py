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

"""
Paraxial mirror equation solver.

Sign convention: the object distance is positive in front of the mirror.
A positive image distance means the image is in front of the mirror (real),
a negative one means it is behind the mirror (virtual). The magnification
is signed; a negative magnification means the image is inverted.

None of the functions here raise for degenerate input. An object placed
exactly at the focal point yields the IMAGE_AT_INFINITY sentinel.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Union

from .constants import IMAGE_AT_INFINITY, DISPLAY_INFINITY_THRESHOLD
from .mirror import MirrorKind, MirrorSpec, ObjectSpec


@dataclass(frozen=True)
class ImageResult:
    """
    Image formed by a mirror.

    Attributes:
        distance: Signed image distance (positive = in front, real)
        height: Signed image height (negative = inverted)
        magnification: Signed lateral magnification
        is_real: True when the reflected rays actually converge
    """
    distance: float
    height: float
    magnification: float
    is_real: bool

    @property
    def is_at_infinity(self) -> bool:
        return math.isinf(self.distance)

    @property
    def is_inverted(self) -> bool:
        return self.magnification < 0

    @property
    def is_upright(self) -> bool:
        return self.magnification > 0

    @property
    def is_magnified(self) -> bool:
        return abs(self.magnification) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'imageDistance': self.distance,
            'imageHeight': self.height,
            'magnification': self.magnification,
            'isReal': self.is_real,
        }


def calculate_image_distance(object_distance: float, focal_length: float) -> float:
    """
    Image distance from the mirror equation 1/do + 1/di = 1/f.

    Args:
        object_distance: do
        focal_length: f

    Returns:
        di = do * f / (do - f), or IMAGE_AT_INFINITY when do == f
    """
    if object_distance == focal_length:
        return IMAGE_AT_INFINITY
    return (object_distance * focal_length) / (object_distance - focal_length)


def calculate_object_distance(image_distance: float, focal_length: float) -> float:
    """
    Object distance producing a given image distance (inverse solve).

    Args:
        image_distance: di
        focal_length: f

    Returns:
        do = di * f / (di - f), or IMAGE_AT_INFINITY when di == f
    """
    if image_distance == focal_length:
        return IMAGE_AT_INFINITY
    return (image_distance * focal_length) / (image_distance - focal_length)


def solve(mirror: MirrorSpec, obj: ObjectSpec) -> ImageResult:
    """
    Compute the image of an object in a mirror.

    Args:
        mirror: Mirror kind and focal length
        obj: Object distance and height

    Returns:
        ImageResult. For the plane mirror the image is virtual, upright,
        unmagnified and as far behind the mirror as the object is in front.
    """
    if mirror.kind is MirrorKind.PLANE:
        return ImageResult(
            distance=-obj.distance,
            height=obj.height,
            magnification=1.0,
            is_real=False,
        )

    di = calculate_image_distance(obj.distance, mirror.focal_length)
    magnification = -di / obj.distance
    # inf * 0 would be NaN for a flat object at F
    height = magnification * obj.height if obj.height else 0.0
    return ImageResult(
        distance=di,
        height=height,
        magnification=magnification,
        is_real=di > 0,
    )


def solve_object_distance(image_distance: float, focal_length: float) -> float:
    """Alias of calculate_object_distance kept next to solve()."""
    return calculate_object_distance(image_distance, focal_length)


def compute_image(mirror_type: Union[MirrorKind, str], focal_length: float,
                  object_distance: float, object_height: float) -> ImageResult:
    """
    Flat-argument entry point for callers holding loose parameters.

    Args:
        mirror_type: MirrorKind or one of 'PLANE', 'CONCAVE', 'CONVEX'
        focal_length: Signed focal length (ignored for the plane mirror)
        object_distance: Positive object distance
        object_height: Object height

    Returns:
        ImageResult
    """
    kind = MirrorKind.from_value(mirror_type)
    return solve(MirrorSpec(kind, focal_length), ObjectSpec(object_distance, object_height))


def compute_object_distance_from_image_distance(image_distance: float,
                                                focal_length: float) -> float:
    """
    Object distance for a requested image distance.

    The result is not clamped: a negative or very large value means the
    request cannot be satisfied and the caller should keep its prior state.
    """
    return calculate_object_distance(image_distance, focal_length)


def format_image_distance(image_distance: float,
                          threshold: float = DISPLAY_INFINITY_THRESHOLD) -> str:
    """
    Display string for an image distance: the infinity sign past the
    threshold, else the value rounded to a whole number.
    """
    if abs(image_distance) > threshold:
        return '∞'
    return f"{image_distance:.0f}"
