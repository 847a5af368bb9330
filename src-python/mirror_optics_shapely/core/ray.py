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

from enum import Enum
from typing import Dict, List, Optional, Any, TYPE_CHECKING

from .geometry import geometry, Point, Line

if TYPE_CHECKING:
    from .canvas_transform import CanvasTransform


class RayKind(str, Enum):
    """
    The construction rays of a mirror diagram.

    PARALLEL: leaves the object tip parallel to the axis
    FOCAL: aimed at the focal point
    CENTER: aimed at the center of curvature
    VERTEX: aimed at the mirror vertex (plane mirror only)
    """
    PARALLEL = 'PARALLEL'
    FOCAL = 'FOCAL'
    CENTER = 'CENTER'
    VERTEX = 'VERTEX'


class Ray:
    """
    A construction ray of a mirror diagram.

    The ray is stored as three or four points: it leaves `incident_from`,
    reflects at `reflection_point` on the mirror and continues to
    `outgoing_to`. When the image is virtual, `virtual_extension_to` holds
    the apparent origin behind the mirror (the image tip), drawn dashed.

    Attributes:
        kind (RayKind): Which construction ray this is
        incident_from (Point): Object tip
        reflection_point (Point): Point on the mirror surface
        outgoing_to (Point): End of the reflected segment
        virtual_extension_to (Point or None): End of the virtual extension
    """

    def __init__(
        self,
        kind: RayKind,
        incident_from: Point,
        reflection_point: Point,
        outgoing_to: Point,
        virtual_extension_to: Optional[Point] = None
    ) -> None:
        self.kind: RayKind = kind
        self.incident_from: Point = incident_from
        self.reflection_point: Point = reflection_point
        self.outgoing_to: Point = outgoing_to
        self.virtual_extension_to: Optional[Point] = virtual_extension_to

    @property
    def is_virtual(self) -> bool:
        """True when the ray carries a virtual extension behind the mirror."""
        return self.virtual_extension_to is not None

    @property
    def outgoing_angle(self) -> float:
        """Direction of the reflected segment in radians."""
        return geometry.angle_to(self.reflection_point, self.outgoing_to)

    def incident_segment(self) -> Line:
        return geometry.line(self.incident_from, self.reflection_point)

    def reflected_segment(self) -> Line:
        return geometry.line(self.reflection_point, self.outgoing_to)

    def virtual_segment(self) -> Optional[Line]:
        if self.virtual_extension_to is None:
            return None
        return geometry.line(self.reflection_point, self.virtual_extension_to)

    def polylines(self) -> List[Line]:
        """
        Segments to rasterize: incident, reflected and, when present, the
        virtual extension.
        """
        segments = [self.incident_segment(), self.reflected_segment()]
        virtual = self.virtual_segment()
        if virtual is not None:
            segments.append(virtual)
        return segments

    def transformed(self, transform: 'CanvasTransform') -> 'Ray':
        """
        Copy of this ray with every point mapped through a canvas transform.
        """
        virtual = self.virtual_extension_to
        return Ray(
            self.kind,
            transform.to_canvas(self.incident_from),
            transform.to_canvas(self.reflection_point),
            transform.to_canvas(self.outgoing_to),
            transform.to_canvas(virtual) if virtual is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the ray as plain dictionaries."""
        return {
            'kind': self.kind.value,
            'incidentFrom': self.incident_from.to_dict(),
            'reflectionPoint': self.reflection_point.to_dict(),
            'outgoingTo': self.outgoing_to.to_dict(),
            'virtualExtensionTo': (
                self.virtual_extension_to.to_dict()
                if self.virtual_extension_to is not None else None
            ),
        }

    def __repr__(self) -> str:
        return (f"Ray(kind={self.kind.value}, incident_from={self.incident_from}, "
                f"reflection_point={self.reflection_point}, outgoing_to={self.outgoing_to}, "
                f"virtual_extension_to={self.virtual_extension_to})")
