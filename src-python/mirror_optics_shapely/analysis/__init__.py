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
Analysis Utilities
===============================================================================
Read-only queries over a constructed mirror diagram:

- Reflection points on the mirror surface (residuals)
- Reflection points outside the drawn part of the mirror
- How far each reflected ray passes from the drawn image tip
- Least-squares convergence point of the reflected rays
===============================================================================
"""


from .construction_checks import (
    surface_residuals,
    reflection_points_on_surface,
    rays_outside_drawn_mirror,
    distance_to_image_tip,
    image_tip_distances,
    estimate_convergence_point,
    describe_construction,
)

__all__ = [
    'surface_residuals',
    'reflection_points_on_surface',
    'rays_outside_drawn_mirror',
    'distance_to_image_tip',
    'image_tip_distances',
    'estimate_convergence_point',
    'describe_construction',
]
