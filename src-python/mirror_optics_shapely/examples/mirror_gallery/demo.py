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
Mirror Gallery Demo - The Classic Ray Diagrams

Renders one SVG per reference configuration:
- Concave mirror, object beyond C (real, inverted, reduced)
- Concave mirror, object at C (real, inverted, same size)
- Concave mirror, object inside F (virtual, upright, magnified)
- Convex mirror (virtual, upright, reduced)
- Plane mirror (virtual, upright, same size)

It also shows the inverse design step: asking for a given image distance
moves the object.

Expected behavior:
- Real images are drawn solid, virtual images dashed and faded
- Virtual images get dashed ray extensions behind the mirror
"""

import sys
import os
import json

# Add parent directories to path to import mirror_optics_shapely
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from mirror_optics_shapely.core.scene import Scene
from mirror_optics_shapely.core.simulator import Simulator
from mirror_optics_shapely.core.svg_renderer import SVGRenderer
from mirror_optics_shapely.analysis import describe_construction


CONFIGURATIONS = [
    ('concave_beyond_c', dict(mirror_type='CONCAVE', focal_length=100, object_distance=300)),
    ('concave_at_c', dict(mirror_type='CONCAVE', focal_length=100, object_distance=200)),
    ('concave_inside_f', dict(mirror_type='CONCAVE', focal_length=100, object_distance=50)),
    ('convex', dict(mirror_type='CONVEX', focal_length=-100, object_distance=200)),
    ('plane', dict(mirror_type='PLANE', object_distance=200)),
]


def main():
    """Render the gallery next to this script."""

    print("Mirror Gallery Demo")
    print("=" * 60)

    output_dir = os.path.dirname(__file__)
    summaries = {}

    for name, params in CONFIGURATIONS:
        scene = Scene(name=name, **params)
        result = Simulator(scene, verbose=1).run()

        print()
        print(describe_construction(result))

        renderer = SVGRenderer(width=800, height=500)
        renderer.draw_simulation(result)
        svg_file = os.path.join(output_dir, f'{name}.svg')
        renderer.save(svg_file)
        print(f"  SVG saved to: {svg_file}")

        summaries[name] = {
            'summary': result.summary(),
            'image': result.image.to_dict(),
            'rays': [ray.to_dict() for ray in result.rays],
            'canvasPolylines': result.canvas_polylines(),
        }

    # Inverse design: ask for an image 300 units in front of the mirror
    scene = Scene(name='inverse_design')
    print(f"\nInverse design from {scene}")
    if scene.apply_image_distance(300):
        print(f"  di=300 -> object moved to do={scene.object_distance:.2f}")
    if not scene.apply_image_distance(100):
        print(f"  di=f rejected, object stays at do={scene.object_distance:.2f}")

    json_file = os.path.join(output_dir, 'gallery.json')
    with open(json_file, 'w') as f:
        json.dump(summaries, f, indent=2, default=str)
    print(f"\nJSON data exported to: {json_file}")


if __name__ == "__main__":
    main()
