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

===============================================================================
Construction consistency queries
===============================================================================
Functions that inspect a finished ray construction: whether reflection
points lie on the mirror, whether they fall within the drawn part of the
mirror, how far each reflected ray passes from the image tip, and where the
reflected rays actually meet. They use Shapely for distances and numpy for
the least-squares convergence point, and never modify the construction.
===============================================================================
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, TYPE_CHECKING

import numpy as np
from shapely.geometry import LineString

from ..core.geometry import geometry, Point

if TYPE_CHECKING:
    from ..core.ray import Ray
    from ..core.ray_construction import RayConstruction
    from ..core.simulator import SimulationResult


# Half length of the finite stand-in for an infinite line
_LINE_REACH = 1e6


def _extended_line(p1: Point, p2: Point) -> LineString:
    """Long LineString through p1 and p2, standing in for the infinite line."""
    angle = geometry.angle_to(p1, p2)
    a = geometry.point_at_angle(p1, angle + math.pi, _LINE_REACH)
    b = geometry.point_at_angle(p1, angle, _LINE_REACH)
    return LineString([a.to_tuple(), b.to_tuple()])


def surface_residuals(construction: 'RayConstruction') -> Dict[str, float]:
    """
    Distance of each reflection point from the mirror surface.

    For curved mirrors this is | |P - C| - |R| |, for the plane mirror
    |P.x - vertex.x|.

    Returns:
        Mapping ray kind name -> residual
    """
    surface = construction.surface
    residuals = {}
    for ray in construction.rays:
        p = ray.reflection_point
        if surface.is_plane:
            residuals[ray.kind.value] = abs(p.x - surface.vertex.x)
        else:
            residuals[ray.kind.value] = abs(
                geometry.distance(p, surface.center) - abs(surface.radius)
            )
    return residuals


def reflection_points_on_surface(construction: 'RayConstruction', tol: float = 1e-6) -> bool:
    """True when every reflection point lies on the mirror within tol."""
    return all(r <= tol for r in surface_residuals(construction).values())


def rays_outside_drawn_mirror(construction: 'RayConstruction', tol: float = 1e-6) -> List[str]:
    """
    Ray kinds whose reflection point misses the drawn part of the mirror.

    Intersections are computed against the whole circle, so a steep ray
    can reflect on a part of the circle that is not drawn; such rays are
    reported here. A point off the mirror by more than tol counts as a
    miss too. The drawn extent is tested by angle (curved) or height
    (plane), not against a polyline of the arc.
    """
    surface = construction.surface
    missed = []
    for ray in construction.rays:
        p = ray.reflection_point
        if not surface.contains_point(p, tol) or not surface.within_drawn_extent(p):
            missed.append(ray.kind.value)
    return missed


def distance_to_image_tip(ray: 'Ray', image_tip: Point) -> float:
    """
    How far the line carrying the ray's reflected segment passes from the
    image tip. Zero means the ray is consistent with the drawn image.
    """
    line = _extended_line(ray.reflection_point, ray.outgoing_to)
    return line.distance(image_tip.to_shapely())


def image_tip_distances(construction: 'RayConstruction') -> Dict[str, float]:
    """distance_to_image_tip() for every ray, keyed by ray kind name."""
    return {
        ray.kind.value: distance_to_image_tip(ray, construction.image_tip)
        for ray in construction.rays
    }


def estimate_convergence_point(rays: List['Ray']) -> Optional[Point]:
    """
    Least-squares meeting point of the lines carrying the reflected rays.

    Each line through P with direction d contributes the equation
    n . X = n . P with n perpendicular to d.

    Args:
        rays: At least two rays

    Returns:
        The point minimizing the summed squared distances to the lines, or
        None with fewer than two rays or when all lines are parallel.
    """
    if len(rays) < 2:
        return None

    normals = []
    offsets = []
    for ray in rays:
        angle = ray.outgoing_angle
        n = np.array([-math.sin(angle), math.cos(angle)])
        p = np.array(ray.reflection_point.to_tuple())
        normals.append(n)
        offsets.append(float(n @ p))

    A = np.vstack(normals)
    b = np.array(offsets)
    solution, _, rank, _ = np.linalg.lstsq(A, b, rcond=None)
    if rank < 2:
        return None
    return geometry.point(float(solution[0]), float(solution[1]))


def describe_construction(result: 'SimulationResult') -> str:
    """
    Plain-text report of a simulation: solver values, drawn image tip and
    the per-ray consistency figures.
    """
    image = result.image
    construction = result.construction
    lines = [
        f"Scene: {result.scene_name}",
        f"Mirror: {result.mirror.kind.value}"
        + ("" if not result.mirror.is_curved else f" (f={result.mirror.focal_length})"),
        f"Object: distance={result.obj.distance}, height={result.obj.height}",
        f"Image: distance={image.distance:.4f}, height={image.height:.4f}, "
        f"magnification={image.magnification:.4f}, "
        f"{'real' if image.is_real else 'virtual'}",
        f"Drawn image tip: ({construction.image_tip.x:.4f}, {construction.image_tip.y:.4f})",
    ]
    residuals = surface_residuals(construction)
    tip_distances = image_tip_distances(construction)
    for ray in construction.rays:
        m = ray.reflection_point
        lines.append(
            f"  {ray.kind.value:8s} reflects at ({m.x:.4f}, {m.y:.4f}), "
            f"surface residual={residuals[ray.kind.value]:.2e}, "
            f"miss distance to tip={tip_distances[ray.kind.value]:.4f}"
        )
    missed = rays_outside_drawn_mirror(construction)
    if missed:
        lines.append(f"  Reflecting outside the drawn mirror: {', '.join(missed)}")
    return "\n".join(lines)
