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
from typing import List, Optional

from .constants import (
    PARALLEL_STEER_OFFSET,
    RAY_LENGTH,
    PLANE_RAY_LENGTH,
    MAX_DRAWN_IMAGE_DISTANCE,
)
from .direction_policy import resolve_outgoing_direction
from .geometry import geometry, Point
from .mirror import MirrorKind, MirrorSpec, MirrorSurface
from .optics import ImageResult
from .ray import Ray, RayKind


@dataclass
class RayConstruction:
    """
    Result of a ray construction.

    The image height has two sources. `reported_image_height` comes from
    the mirror equation and is the value to display. `drawn_image_tip_y`
    comes from the construction itself (for curved mirrors, the height at
    which the focal ray reflects) and is where the image arrow is drawn, so
    that it meets the drawn rays.

    Attributes:
        rays: Three rays for curved mirrors, two for the plane mirror
        image_tip: Drawn tip of the image arrow
        reported_image_height: Algebraic image height from the solver
        surface: The mirror surface the rays reflect on
        image: The solver result used for display decisions
    """
    rays: List[Ray]
    image_tip: Point
    reported_image_height: float
    surface: MirrorSurface
    image: ImageResult

    @property
    def drawn_image_tip_y(self) -> float:
        return self.image_tip.y

    @property
    def image_drawable(self) -> bool:
        """False when the image is too far away (or at infinity) to draw."""
        return abs(self.image.distance) < MAX_DRAWN_IMAGE_DISTANCE

    def get_ray(self, kind: RayKind) -> Optional[Ray]:
        for ray in self.rays:
            if ray.kind is kind:
                return ray
        return None


def _reflect(surface: MirrorSurface, kind: RayKind, object_tip: Point,
             reflection_point: Point, raw_angle: float, length: float,
             virtual_tip: Optional[Point]) -> Ray:
    angle = resolve_outgoing_direction(kind, surface.mirror.kind, raw_angle)
    return Ray(
        kind,
        object_tip,
        reflection_point,
        geometry.point_at_angle(reflection_point, angle, length),
        virtual_tip,
    )


def _construct_plane_rays(surface: MirrorSurface, object_tip: Point,
                          image_tip: Point) -> List[Ray]:
    vertex = surface.vertex

    # Horizontal ray: hits the mirror level with the tip
    m1 = surface.get_intersection(
        object_tip, geometry.point(vertex.x + PARALLEL_STEER_OFFSET, object_tip.y)
    )
    ray1 = _reflect(surface, RayKind.PARALLEL, object_tip, m1,
                    geometry.angle_to(object_tip, m1), PLANE_RAY_LENGTH,
                    geometry.point(image_tip.x, object_tip.y))

    # Ray aimed at the vertex
    m2 = surface.get_intersection(object_tip, vertex)
    ray2 = _reflect(surface, RayKind.VERTEX, object_tip, m2,
                    geometry.angle_to(object_tip, m2), PLANE_RAY_LENGTH,
                    geometry.point(image_tip.x, image_tip.y))

    return [ray1, ray2]


def _construct_curved_rays(surface: MirrorSurface, object_tip: Point,
                           focus_point: Point, center_point: Point,
                           image_tip: Point, is_real: bool) -> List[Ray]:
    vertex = surface.vertex

    def virtual_tip() -> Optional[Point]:
        if is_real:
            return None
        return geometry.point(image_tip.x, image_tip.y)

    # Parallel ray, reflected through (or away from) F
    m1 = surface.get_intersection(
        object_tip, geometry.point(vertex.x + PARALLEL_STEER_OFFSET, object_tip.y)
    )
    ray1 = _reflect(surface, RayKind.PARALLEL, object_tip, m1,
                    geometry.angle_to(m1, focus_point), RAY_LENGTH, virtual_tip())

    # Ray through F, reflected parallel to the axis
    m2 = surface.get_intersection(object_tip, focus_point)
    ray2 = _reflect(surface, RayKind.FOCAL, object_tip, m2,
                    geometry.angle_to(object_tip, m2), RAY_LENGTH, virtual_tip())

    # Ray through C, reflected back along itself
    m3 = surface.get_intersection(object_tip, center_point)
    ray3 = _reflect(surface, RayKind.CENTER, object_tip, m3,
                    geometry.angle_to(center_point, m3), RAY_LENGTH, virtual_tip())

    return [ray1, ray2, ray3]


def construct_rays(
    mirror: MirrorSpec,
    curvature_radius: float,
    object_point: Point,
    focus_point: Optional[Point],
    center_point: Optional[Point],
    image_anchor_x: float,
    vertex: Point,
    image: ImageResult,
    verbose: int = 0
) -> RayConstruction:
    """
    Build the construction rays of a mirror diagram.

    For a curved mirror three rays leave the object tip: parallel to the
    axis, through F and through C. Each is intersected with the circle of
    curvature and reflected according to the direction policy. For the
    plane mirror two rays are built, one horizontal and one aimed at the
    vertex, both reflected about the mirror line.

    The image tip is placed at `image_anchor_x`. Its height is the solver's
    image height for the plane mirror and the height of the focal ray's
    reflection point for curved mirrors. When the image is virtual, every
    ray receives a virtual extension ending at the image tip.

    Args:
        mirror: Mirror kind and focal length
        curvature_radius: Signed radius of curvature (2f; ignored for plane)
        object_point: Tip of the object arrow
        focus_point: Focal point F (None for the plane mirror)
        center_point: Center of curvature C (None for the plane mirror)
        image_anchor_x: Abscissa of the image arrow (vertex.x - di)
        vertex: Where the mirror crosses the optical axis
        image: Solver result, used for the virtual/real decision and the
            reported image height
        verbose: Verbosity level (default: 0)
            0 = silent
            1 = summary of the construction
            2 = every reflection point and outgoing direction

    Returns:
        RayConstruction
    """
    surface = MirrorSurface(mirror, vertex, radius=curvature_radius)

    if mirror.kind is MirrorKind.PLANE:
        image_tip = geometry.point(image_anchor_x, vertex.y + image.height)
        rays = _construct_plane_rays(surface, object_point, image_tip)
    else:
        focal_hit = surface.get_intersection(object_point, focus_point)
        image_tip = geometry.point(image_anchor_x, focal_hit.y)
        rays = _construct_curved_rays(surface, object_point, focus_point,
                                      center_point, image_tip, image.is_real)

    if verbose >= 1:
        print(f"### RAY CONSTRUCTION {mirror.kind.value} mirror, R={curvature_radius}")
        print(f"  image tip=({image_tip.x:.4f}, {image_tip.y:.4f}), "
              f"reported height={image.height:.4f}, real={image.is_real}")
    if verbose >= 2:
        for ray in rays:
            m = ray.reflection_point
            print(f"  {ray.kind.value}: reflects at ({m.x:.4f}, {m.y:.4f}), "
                  f"outgoing {math.degrees(ray.outgoing_angle):.2f} deg, "
                  f"virtual={ray.is_virtual}")

    return RayConstruction(
        rays=rays,
        image_tip=image_tip,
        reported_image_height=image.height,
        surface=surface,
        image=image,
    )
