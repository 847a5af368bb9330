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

from dataclasses import dataclass
from typing import List, Optional, Dict, Any, TYPE_CHECKING

from .canvas_transform import CanvasTransform
from .geometry import geometry, Point
from .mirror import MirrorSpec, ObjectSpec
from .optics import ImageResult, solve, format_image_distance
from .ray import Ray
from .ray_construction import RayConstruction, construct_rays

if TYPE_CHECKING:
    from .scene import Scene


@dataclass
class DiagramAnchors:
    """
    Points of the diagram derived from the parameters and the vertex.

    The object stands at x = vertex.x - do; F and C lie at vertex.x - f and
    vertex.x - 2f (in front of a concave mirror, behind a convex one); the
    image arrow stands at x = vertex.x - di.

    Attributes:
        vertex: Mirror vertex on the optical axis
        object_base: Foot of the object arrow
        object_tip: Tip of the object arrow
        focus: Focal point (None for the plane mirror)
        center: Center of curvature (None for the plane mirror)
        image_anchor_x: Abscissa of the image arrow
    """
    vertex: Point
    object_base: Point
    object_tip: Point
    focus: Optional[Point]
    center: Optional[Point]
    image_anchor_x: float

    @classmethod
    def derive(cls, mirror: MirrorSpec, obj: ObjectSpec, image: ImageResult,
               vertex: Point) -> 'DiagramAnchors':
        object_x = vertex.x - obj.distance
        focus = None
        center = None
        if mirror.is_curved:
            focus = geometry.point(vertex.x - mirror.focal_length, vertex.y)
            center = geometry.point(vertex.x - mirror.curvature_radius, vertex.y)
        return cls(
            vertex=vertex,
            object_base=geometry.point(object_x, vertex.y),
            object_tip=geometry.point(object_x, vertex.y + obj.height),
            focus=focus,
            center=center,
            image_anchor_x=vertex.x - image.distance,
        )


@dataclass
class SimulationResult:
    """
    Everything a view needs to draw one mirror diagram.

    Attributes:
        scene_name: Display name of the simulated scene
        mirror: Mirror snapshot
        obj: Object snapshot
        image: Solver result (authoritative for displayed numbers)
        anchors: Derived diagram points
        construction: Ray construction (authoritative for drawn geometry)
        transform: Map from geometric space to canvas pixels
    """
    scene_name: str
    mirror: MirrorSpec
    obj: ObjectSpec
    image: ImageResult
    anchors: DiagramAnchors
    construction: RayConstruction
    transform: CanvasTransform

    @property
    def rays(self) -> List[Ray]:
        return self.construction.rays

    def canvas_rays(self) -> List[Ray]:
        """Rays mapped to canvas pixels."""
        return [ray.transformed(self.transform) for ray in self.construction.rays]

    def canvas_polylines(self) -> List[Dict[str, Any]]:
        """
        Canvas-space segments per ray: 'incident', 'reflected' and
        'virtual' (None when the ray has no virtual extension).
        """
        polylines = []
        for ray in self.canvas_rays():
            virtual = ray.virtual_segment()
            polylines.append({
                'kind': ray.kind.value,
                'incident': [ray.incident_from.to_tuple(), ray.reflection_point.to_tuple()],
                'reflected': [ray.reflection_point.to_tuple(), ray.outgoing_to.to_tuple()],
                'virtual': (
                    [virtual.p1.to_tuple(), virtual.p2.to_tuple()]
                    if virtual is not None else None
                ),
            })
        return polylines

    def summary(self) -> Dict[str, Any]:
        """Display values: numbers from the solver, tip from the construction."""
        return {
            'scene': self.scene_name,
            'mirrorType': self.mirror.kind.value,
            'focalLength': self.mirror.focal_length,
            'objectDistance': self.obj.distance,
            'objectHeight': self.obj.height,
            'imageDistance': format_image_distance(self.image.distance),
            'magnification': f"{self.image.magnification:.2f}x",
            'imageType': 'REAL' if self.image.is_real else 'VIRTUAL',
            'reportedImageHeight': self.construction.reported_image_height,
            'drawnImageTipY': self.construction.drawn_image_tip_y,
        }


class Simulator:
    """
    Pipeline turning scene parameters into a drawable diagram.

    Each run takes a fresh snapshot of the scene, solves the mirror
    equation, derives the anchor points and builds the construction rays.
    Nothing is cached between runs.

    Attributes:
        scene (Scene): The scene providing the parameters
        transform (CanvasTransform): Geometric-to-canvas map
        verbose (int): Verbosity level (default: 0)
            0 = silent (no debug output)
            1 = show the image and construction summary
            2 = also show every reflection point
    """

    def __init__(self, scene: 'Scene', transform: Optional[CanvasTransform] = None,
                 verbose: int = 0) -> None:
        self.scene: 'Scene' = scene
        self.transform: CanvasTransform = transform or CanvasTransform.for_canvas()
        self.verbose: int = verbose

    def run(self) -> SimulationResult:
        """
        Run the pipeline once.

        Returns:
            SimulationResult
        """
        mirror = self.scene.mirror_spec
        obj = self.scene.object_spec
        image = solve(mirror, obj)

        if self.verbose >= 1:
            print(f"\n### SIMULATOR {self.scene.get_display_name()}")
            print(f"  mirror={mirror.kind.value} f={mirror.focal_length} "
                  f"do={obj.distance} h={obj.height}")
            print(f"  di={image.distance:.4f} m={image.magnification:.4f} "
                  f"height={image.height:.4f} real={image.is_real}")

        anchors = DiagramAnchors.derive(mirror, obj, image, self.scene.vertex)
        construction = construct_rays(
            mirror,
            mirror.curvature_radius,
            anchors.object_tip,
            anchors.focus,
            anchors.center,
            anchors.image_anchor_x,
            vertex=anchors.vertex,
            image=image,
            verbose=self.verbose,
        )

        return SimulationResult(
            scene_name=self.scene.get_display_name(),
            mirror=mirror,
            obj=obj,
            image=image,
            anchors=anchors,
            construction=construction,
            transform=self.transform,
        )
