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
import uuid as uuid_module
from typing import Optional, Union

from .constants import (
    DEFAULT_CONCAVE_FOCAL_LENGTH,
    DEFAULT_CONVEX_FOCAL_LENGTH,
    DEFAULT_OBJECT_DISTANCE,
    DEFAULT_OBJECT_HEIGHT,
    MAX_OBJECT_DISTANCE,
)
from .geometry import geometry, Point
from .mirror import MirrorKind, MirrorSpec, ObjectSpec
from .optics import calculate_object_distance


class Scene:
    """
    Parameters of a single mirror diagram.

    The scene only stores and validates parameters; every derived quantity
    (image, rays) is recomputed by the Simulator from a snapshot of these
    values.

    Attributes:
        mirror_type (MirrorKind): PLANE, CONCAVE or CONVEX
        focal_length (float): Signed focal length (> 0 concave, < 0 convex).
            Kept, but unused, while the mirror is plane.
        object_distance (float): Distance of the object from the vertex (> 0)
        object_height (float): Height of the object arrow (> 0)
        vertex (Point): Position of the mirror vertex in geometric space
        name (str or None): Optional name for the scene (used in exports)
    """

    VALID_MIRROR_TYPES = tuple(kind.value for kind in MirrorKind)

    def __init__(self,
                 mirror_type: Union[MirrorKind, str] = MirrorKind.CONCAVE,
                 focal_length: Optional[float] = None,
                 object_distance: float = DEFAULT_OBJECT_DISTANCE,
                 object_height: float = DEFAULT_OBJECT_HEIGHT,
                 vertex: Optional[Point] = None,
                 name: Optional[str] = None):
        """
        Initialize a scene; arguments are validated by the property setters.
        Without a focal length, the default for the mirror type is used.
        """
        self._mirror_type = MirrorKind.from_value(mirror_type)
        self._focal_length = DEFAULT_CONCAVE_FOCAL_LENGTH
        self._object_distance = DEFAULT_OBJECT_DISTANCE
        self._object_height = DEFAULT_OBJECT_HEIGHT
        if focal_length is None:
            self.mirror_type = self._mirror_type
        else:
            self.focal_length = focal_length
        self.object_distance = object_distance
        self.object_height = object_height
        self.vertex = vertex if vertex is not None else geometry.point(0, 0)
        self.name = name
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def mirror_type(self) -> MirrorKind:
        return self._mirror_type

    @mirror_type.setter
    def mirror_type(self, value: Union[MirrorKind, str]):
        """
        Switch the mirror type.

        Switching to a curved mirror whose focal length has the wrong sign
        resets the focal length to the default for that mirror type, as does
        a focal length that is not finite.
        """
        kind = MirrorKind.from_value(value)
        self._mirror_type = kind
        if kind is not MirrorKind.PLANE and not math.isfinite(self._focal_length):
            self._focal_length = (DEFAULT_CONVEX_FOCAL_LENGTH if kind is MirrorKind.CONVEX
                                  else DEFAULT_CONCAVE_FOCAL_LENGTH)
        elif kind is MirrorKind.CONVEX and not self._focal_length < 0:
            self._focal_length = DEFAULT_CONVEX_FOCAL_LENGTH
        elif kind is MirrorKind.CONCAVE and not self._focal_length > 0:
            self._focal_length = DEFAULT_CONCAVE_FOCAL_LENGTH

    @property
    def focal_length(self) -> float:
        return self._focal_length

    @focal_length.setter
    def focal_length(self, value: float):
        if self._mirror_type is MirrorKind.PLANE:
            self._focal_length = value
            return
        MirrorSpec(self._mirror_type, value).validate()
        self._focal_length = value

    @property
    def object_distance(self) -> float:
        return self._object_distance

    @object_distance.setter
    def object_distance(self, value: float):
        ObjectSpec(value, self._object_height).validate()
        self._object_distance = value

    @property
    def object_height(self) -> float:
        return self._object_height

    @object_height.setter
    def object_height(self, value: float):
        if not value > 0:
            raise ValueError(f"Object height must be > 0, got {value}")
        self._object_height = value

    @property
    def mirror_spec(self) -> MirrorSpec:
        if self._mirror_type is MirrorKind.PLANE:
            return MirrorSpec.plane()
        return MirrorSpec(self._mirror_type, self._focal_length)

    @property
    def object_spec(self) -> ObjectSpec:
        return ObjectSpec(self._object_distance, self._object_height)

    def apply_image_distance(self, image_distance: float) -> bool:
        """
        Move the object so that the image lands at the requested distance.

        For the plane mirror the object distance becomes |di|. For curved
        mirrors the inverse mirror equation is used and the update is only
        accepted when the resulting object distance lies strictly between 0
        and MAX_OBJECT_DISTANCE; otherwise the scene is left unchanged.

        Args:
            image_distance: Requested signed image distance

        Returns:
            True if the object distance was updated
        """
        if self._mirror_type is MirrorKind.PLANE:
            if image_distance == 0:
                return False
            self._object_distance = abs(image_distance)
            return True

        new_distance = calculate_object_distance(image_distance, self._focal_length)
        if 0 < new_distance < MAX_OBJECT_DISTANCE:
            self._object_distance = new_distance
            return True
        return False

    def reset(self) -> None:
        """Restore the default concave mirror scene."""
        self._mirror_type = MirrorKind.CONCAVE
        self._focal_length = DEFAULT_CONCAVE_FOCAL_LENGTH
        self._object_distance = DEFAULT_OBJECT_DISTANCE

    @property
    def uuid(self) -> str:
        return self._uuid

    def get_display_name(self) -> str:
        """
        User-defined name if set, otherwise "Scene_" plus a short UUID.
        """
        if self.name:
            return self.name
        return f"Scene_{self._uuid[:8]}"

    def __repr__(self) -> str:
        return (f"Scene(mirror_type={self._mirror_type.value}, "
                f"focal_length={self._focal_length}, "
                f"object_distance={self._object_distance}, "
                f"object_height={self._object_height})")
