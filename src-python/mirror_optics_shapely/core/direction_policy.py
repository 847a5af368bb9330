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
Outgoing direction of each construction ray after reflection.

The object always stands to the left of the mirror, so every reflected ray
must travel leftward, back toward the observer side. Each (ray kind, mirror
kind) pair maps to one named rule applied to a raw angle computed by the ray
construction:

    PARALLEL / CONCAVE : raw = angle from reflection point toward F, kept
    PARALLEL / CONVEX  : same raw angle, reversed (F is virtual, behind)
    FOCAL    / curved  : reflected parallel to the axis, leftward
    CENTER   / curved  : raw = angle from C toward reflection point, flipped
                         when it points rightward
    PARALLEL / PLANE   : raw = incident angle, mirrored about the vertical
    VERTEX   / PLANE   : raw = incident angle, mirrored about the vertical
"""

import math
from typing import Callable, Dict, Tuple

from .mirror import MirrorKind
from .ray import RayKind


def _normalize_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    return math.atan2(math.sin(angle), math.cos(angle))


def _identity(raw_angle: float) -> float:
    return raw_angle


def _reverse(raw_angle: float) -> float:
    return raw_angle + math.pi


def _horizontal_left(raw_angle: float) -> float:
    return math.pi


def _force_left(raw_angle: float) -> float:
    if math.cos(raw_angle) > 0:
        return raw_angle + math.pi
    return raw_angle


def _mirror_vertical(raw_angle: float) -> float:
    return math.pi - raw_angle


DIRECTION_RULES: Dict[str, Callable[[float], float]] = {
    'identity': _identity,
    'reverse': _reverse,
    'horizontal_left': _horizontal_left,
    'force_left': _force_left,
    'mirror_vertical': _mirror_vertical,
}

DIRECTION_POLICY: Dict[Tuple[RayKind, MirrorKind], str] = {
    (RayKind.PARALLEL, MirrorKind.CONCAVE): 'identity',
    (RayKind.PARALLEL, MirrorKind.CONVEX): 'reverse',
    (RayKind.FOCAL, MirrorKind.CONCAVE): 'horizontal_left',
    (RayKind.FOCAL, MirrorKind.CONVEX): 'horizontal_left',
    (RayKind.CENTER, MirrorKind.CONCAVE): 'force_left',
    (RayKind.CENTER, MirrorKind.CONVEX): 'force_left',
    (RayKind.PARALLEL, MirrorKind.PLANE): 'mirror_vertical',
    (RayKind.VERTEX, MirrorKind.PLANE): 'mirror_vertical',
}


def resolve_outgoing_direction(ray_kind: RayKind, mirror_kind: MirrorKind,
                               raw_angle: float) -> float:
    """
    Outgoing direction of a reflected construction ray.

    Args:
        ray_kind: Which construction ray
        mirror_kind: Which mirror
        raw_angle: Angle (radians) computed by the construction for this
            ray; see the module docstring for what it measures per pair.

    Returns:
        Outgoing angle in (-pi, pi]

    Raises:
        ValueError: If the pair is not part of any construction (e.g. a
            CENTER ray on a plane mirror).
    """
    try:
        rule = DIRECTION_POLICY[(ray_kind, mirror_kind)]
    except KeyError:
        raise ValueError(
            f"No direction rule for {ray_kind.value} ray on {mirror_kind.value} mirror. "
            f"Valid pairs: {[(r.value, m.value) for r, m in DIRECTION_POLICY]}"
        ) from None
    return _normalize_angle(DIRECTION_RULES[rule](raw_angle))
