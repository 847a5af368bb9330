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
from typing import Optional, TYPE_CHECKING

import svgwrite

from .canvas_transform import CanvasTransform
from .geometry import geometry
from .ray import RayKind

if TYPE_CHECKING:
    from .geometry import Point
    from .mirror import MirrorSurface
    from .ray import Ray
    from .simulator import SimulationResult


# Diagram palette
AXIS_COLOR = '#94a3b8'
MIRROR_COLOR = '#1e293b'
FOCUS_COLOR = '#ef4444'
CENTER_COLOR = '#3b82f6'
OBJECT_COLOR = '#10b981'
IMAGE_COLOR = '#f59e0b'
RAY_COLORS = {
    RayKind.PARALLEL: '#6366f1',
    RayKind.VERTEX: '#6366f1',
    RayKind.FOCAL: '#8b5cf6',
    RayKind.CENTER: '#ec4899',
}

AXIS_DASH = '5, 5'
VIRTUAL_IMAGE_DASH = '5, 5'
VIRTUAL_RAY_DASH = '2, 4'
VIRTUAL_IMAGE_OPACITY = 0.6
ARROW_HEAD_SIZE = 10


class SVGRenderer:
    """
    SVG renderer for mirror diagrams.

    The SVG is organized into four layers (bottom to top):
    - objects: mirror surface, object and image arrows, F and C markers
    - graphic annotations: optical axis
    - rays: construction rays and their virtual extensions
    - labels: text annotations

    Coordinate System:
        The renderer works directly in the geometric Y-up space. A vertical
        flip on every layer turns it into SVG's Y-down system, so the
        rendered picture matches what a canvas transform would produce.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        user_viewbox (tuple): Visible region (min_x, min_y, width, height), Y-up
        viewbox (tuple): The same region in SVG's Y-down convention
        metadata_level (str): 'none', 'standard' or 'full'
        dwg (svgwrite.Drawing): The SVG drawing object
    """

    def __init__(self, width=800, height=500, viewbox=None, metadata_level='full'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 500)
            viewbox (tuple or None): Y-up viewBox as (min_x, min_y, width, height).
                If None, the standard canvas layout is used (vertex left of
                the canvas center, axis on the horizontal center line).
            metadata_level (str): Controls how much simulation metadata to embed.
                - 'none': No metadata (smallest files)
                - 'standard': id + inkscape:label + class
                - 'full': All of 'standard' plus data-* attributes
        """
        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        if viewbox is None:
            viewbox = self.viewbox_for_transform(
                CanvasTransform.for_canvas(width, height), width, height
            )
        self.user_viewbox = viewbox

        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        # profile='full' enables data-* attributes; debug=False accepts the
        # inkscape namespace
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'

        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill='white'
        ))

        self.layer_objects = self._add_layer('layer-objects', 'Objects')
        self.layer_graphic_symb = self._add_layer('layer-graphic-symb', 'Graphic Annotations')
        self.layer_rays = self._add_layer('layer-rays', 'Rays')
        self.layer_labels = self._add_layer('layer-labels', 'Labels')

    @staticmethod
    def viewbox_for_transform(transform: CanvasTransform, width: float, height: float):
        """
        Y-up viewbox showing exactly the canvas area of a canvas transform.
        """
        return (
            -transform.origin_x / transform.scale,
            -(height - transform.origin_y) / transform.scale,
            width / transform.scale,
            height / transform.scale,
        )

    def _add_layer(self, layer_id: str, label: str):
        return self.dwg.add(self.dwg.g(
            id=layer_id,
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': label}
        ))

    def _normalize_coord(self, value):
        """Map -0.0 and values within 1e-10 of zero to 0.0."""
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _xy(self, point: 'Point'):
        return (self._normalize_coord(point.x), self._normalize_coord(point.y))

    def _is_finite(self, *points: 'Point') -> bool:
        return all(math.isfinite(p.x) and math.isfinite(p.y) for p in points)

    def _add_label(self, text_value, x, y, color, anchor='start'):
        # Text is flipped back so it reads upright inside a flipped layer
        text = self.dwg.text(
            text_value,
            insert=(self._normalize_coord(x), -self._normalize_coord(y)),
            fill=color,
            font_size='12px',
            font_family='sans-serif',
            text_anchor=anchor,
            transform='scale(1, -1)'
        )
        self.layer_labels.add(text)
        return text

    def draw_axis(self, y: float = 0.0) -> None:
        """Draw the optical axis across the whole viewbox as a dashed line."""
        min_x, _, vb_width, _ = self.user_viewbox
        line = self.dwg.line(
            start=(min_x, self._normalize_coord(y)),
            end=(min_x + vb_width, self._normalize_coord(y)),
            stroke=AXIS_COLOR,
            stroke_width=1,
            stroke_dasharray=AXIS_DASH,
            id='optical-axis'
        )
        self.layer_graphic_symb.add(line)

    def draw_mirror(self, surface: 'MirrorSurface', samples: int = 64) -> None:
        """
        Draw the mirror: a straight segment for the plane mirror, a sampled
        polyline of the drawn arc for curved mirrors.
        """
        if surface.is_plane:
            lower, upper = surface.endpoints()
            element = self.dwg.line(
                start=self._xy(lower), end=self._xy(upper),
                stroke=MIRROR_COLOR, stroke_width=4
            )
        else:
            element = self.dwg.polyline(
                points=[self._xy(p) for p in surface.sample(samples)],
                stroke=MIRROR_COLOR, stroke_width=4, fill='none'
            )
        if self.metadata_level != 'none':
            element['id'] = 'mirror'
            element['class'] = 'mirror'
            element['inkscape:label'] = f'{surface.mirror.kind.value.capitalize()} mirror'
        if self.metadata_level == 'full':
            element['data-kind'] = surface.mirror.kind.value
            element['data-radius'] = str(surface.radius)
        self.layer_objects.add(element)

    def draw_point(self, point: 'Point', color='black', radius=4, label=None) -> None:
        """Draw a marker dot with an optional label below it."""
        circle = self.dwg.circle(center=self._xy(point), r=radius, fill=color)
        if self.metadata_level != 'none' and label:
            circle['id'] = f'point-{label}'
            circle['class'] = 'point'
        self.layer_objects.add(circle)
        if label:
            self._add_label(label, point.x - 5, point.y - 20, color)

    def draw_arrow(self, base: 'Point', tip: 'Point', color='black', label=None,
                   dashed: bool = False, opacity: float = 1.0,
                   element_id: Optional[str] = None) -> bool:
        """
        Draw an upright or inverted arrow (object or image).

        Returns:
            False if the arrow could not be drawn (non-finite coordinates)
        """
        if not self._is_finite(base, tip):
            return False

        group = self.dwg.g()
        if element_id and self.metadata_level != 'none':
            group['id'] = element_id
            group['class'] = 'arrow'
            if label:
                group['inkscape:label'] = label

        line_kwargs = dict(
            start=self._xy(base), end=self._xy(tip),
            stroke=color, stroke_width=2, stroke_opacity=opacity
        )
        if dashed:
            line_kwargs['stroke_dasharray'] = VIRTUAL_IMAGE_DASH
        group.add(self.dwg.line(**line_kwargs))

        angle = math.atan2(tip.y - base.y, tip.x - base.x)
        head = [
            self._xy(tip),
            (tip.x - ARROW_HEAD_SIZE * math.cos(angle - math.pi / 6),
             tip.y - ARROW_HEAD_SIZE * math.sin(angle - math.pi / 6)),
            (tip.x - ARROW_HEAD_SIZE * math.cos(angle + math.pi / 6),
             tip.y - ARROW_HEAD_SIZE * math.sin(angle + math.pi / 6)),
        ]
        group.add(self.dwg.polygon(points=head, fill=color, fill_opacity=opacity))
        self.layer_objects.add(group)

        if label:
            self._add_label(label, tip.x - 20, tip.y + 10, color)
        return True

    def draw_ray(self, ray: 'Ray', color: Optional[str] = None, stroke_width: float = 1.5) -> bool:
        """
        Draw one construction ray: solid incident and reflected segments,
        plus the dashed virtual extension when the ray has one.

        Returns:
            False if the ray has non-finite coordinates and was skipped
        """
        points = [ray.incident_from, ray.reflection_point, ray.outgoing_to]
        if ray.virtual_extension_to is not None:
            points.append(ray.virtual_extension_to)
        if not self._is_finite(*points):
            return False

        color = color or RAY_COLORS.get(ray.kind, 'red')
        group = self.dwg.g()
        if self.metadata_level != 'none':
            group['id'] = f'ray-{ray.kind.value.lower()}'
            group['class'] = 'ray'
            group['inkscape:label'] = f'{ray.kind.value.capitalize()} ray'
        if self.metadata_level == 'full':
            group['data-kind'] = ray.kind.value
            group['data-virtual'] = 'true' if ray.is_virtual else 'false'

        for segment in (ray.incident_segment(), ray.reflected_segment()):
            group.add(self.dwg.line(
                start=self._xy(segment.p1), end=self._xy(segment.p2),
                stroke=color, stroke_width=stroke_width
            ))

        virtual = ray.virtual_segment()
        if virtual is not None:
            extension = self.dwg.line(
                start=self._xy(virtual.p1), end=self._xy(virtual.p2),
                stroke=color, stroke_width=stroke_width,
                stroke_dasharray=VIRTUAL_RAY_DASH
            )
            if self.metadata_level != 'none':
                extension['class'] = 'virtual-extension'
            group.add(extension)

        self.layer_rays.add(group)
        return True

    def draw_simulation(self, result: 'SimulationResult') -> None:
        """
        Draw a complete mirror diagram.

        The image arrow is skipped when the image is too far away (object
        at or near the focal point).
        """
        anchors = result.anchors
        construction = result.construction

        self.draw_axis(anchors.vertex.y)
        self.draw_mirror(construction.surface)

        if anchors.focus is not None:
            self.draw_point(anchors.focus, FOCUS_COLOR, label='F')
        if anchors.center is not None:
            self.draw_point(anchors.center, CENTER_COLOR, label='C')

        self.draw_arrow(anchors.object_base, anchors.object_tip, OBJECT_COLOR,
                        label='Object', element_id='object')

        if construction.image_drawable:
            image_base = geometry.point(anchors.image_anchor_x, anchors.vertex.y)
            real = result.image.is_real
            self.draw_arrow(
                image_base, construction.image_tip, IMAGE_COLOR,
                label='Real Image' if real else 'Virtual Image',
                dashed=not real,
                opacity=1.0 if real else VIRTUAL_IMAGE_OPACITY,
                element_id='image'
            )

        for ray in construction.rays:
            self.draw_ray(ray)

    def save(self, filename: str = None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (default: 'mirror.svg')
        """
        if filename is None:
            filename = "mirror.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()
