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

from .geometry import geometry, Point, Line, Circle, Geometry
from . import constants
from .mirror import MirrorKind, MirrorSpec, ObjectSpec, MirrorSurface
from .optics import (
    ImageResult,
    solve,
    solve_object_distance,
    calculate_image_distance,
    calculate_object_distance,
    compute_image,
    compute_object_distance_from_image_distance,
    format_image_distance,
)
from .ray import Ray, RayKind
from .direction_policy import resolve_outgoing_direction
from .ray_construction import RayConstruction, construct_rays
from .canvas_transform import CanvasTransform
from .scene import Scene
from .simulator import Simulator, SimulationResult, DiagramAnchors
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Line', 'Circle', 'Geometry',
    'constants',
    'MirrorKind', 'MirrorSpec', 'ObjectSpec', 'MirrorSurface',
    'ImageResult', 'solve', 'solve_object_distance',
    'calculate_image_distance', 'calculate_object_distance',
    'compute_image', 'compute_object_distance_from_image_distance',
    'format_image_distance',
    'Ray', 'RayKind',
    'resolve_outgoing_direction',
    'RayConstruction', 'construct_rays',
    'CanvasTransform',
    'Scene',
    'Simulator', 'SimulationResult', 'DiagramAnchors',
    'SVGRenderer'
]
