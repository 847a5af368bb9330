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
Constants used throughout the mirror image simulation.

Collected here so that the solver, the ray construction, the scene and the
renderer share the same layout and display values without importing each
other.
"""

import math

# Signed sentinel for an image formed at infinity (object exactly at F)
IMAGE_AT_INFINITY = math.inf

# Tolerance used when comparing geometric quantities
GEOMETRY_TOLERANCE = 1e-9

# Half height of the drawn mirror (line or arc) around the vertex
MIRROR_HALF_EXTENT = 150

# Horizontal offset past the vertex used to steer the parallel ray
PARALLEL_STEER_OFFSET = 100

# Length of the outgoing (reflected) segment for curved mirrors
RAY_LENGTH = 1000

# Length of the outgoing segment for the plane mirror
PLANE_RAY_LENGTH = 500

# Images farther than this from the vertex are not drawn
MAX_DRAWN_IMAGE_DISTANCE = 2000

# Image distances beyond this are displayed as infinity
DISPLAY_INFINITY_THRESHOLD = 1000

# Inverse-design updates must produce 0 < object distance < this value
MAX_OBJECT_DISTANCE = 1000

# Focal length applied when switching to a curved mirror with the wrong sign
DEFAULT_CONCAVE_FOCAL_LENGTH = 100
DEFAULT_CONVEX_FOCAL_LENGTH = -100

# Default scene
DEFAULT_OBJECT_DISTANCE = 200
DEFAULT_OBJECT_HEIGHT = 50

# Default canvas size and the vertex offset from the canvas center
DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 500
VERTEX_CANVAS_OFFSET_X = -100
