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

Mirror Optics Shapely
=====================

Image formation and ray diagrams for plane, concave and convex mirrors,
using Shapely for computational geometry.

Main modules:
- core: Mirror equation solver, ray construction, Scene, Simulator, SVG output
- analysis: Consistency queries over a constructed diagram
- examples: Example diagrams

Quick start:
    from mirror_optics_shapely.core.scene import Scene
    from mirror_optics_shapely.core.simulator import Simulator
    from mirror_optics_shapely.core.svg_renderer import SVGRenderer
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulator
from .core.ray import Ray
from .core.optics import compute_image

__all__ = [
    'Scene',
    'Simulator',
    'Ray',
    'compute_image',
    '__version__',
]
