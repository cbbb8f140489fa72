"""Camera frustum projection matrices."""
from __future__ import annotations

import math

# Precision issues arise with higher far-clip values.
FAR_CLIP_MAX = 32767.0

Matrix = tuple[tuple[float, float, float, float], ...]

_IDENTITY: Matrix = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


def _clip_planes(near: float, far: float) -> tuple[float, float]:
    far = min(far, FAR_CLIP_MAX)
    if near <= 0.0:
        near = far / (FAR_CLIP_MAX * 10.0)
    return near, far


class Frustum:
    """Projection of a view; matrices are row-major tuples of four rows."""

    def __init__(self) -> None:
        self.view_to_clip_matrix: Matrix = _IDENTITY
        self.hfov = 0.0
        self.vfov = 0.0
        self.aspect_ratio = 0.0
        self.view_length = 0.0
        self.reversed_depth = False

    def set_perspective_projection_vfov(
        self, near: float, far: float, vfov: float, aspect: float, reverse_depth: bool
    ) -> None:
        """Perspective projection from a vertical field of view in radians."""
        ty = math.tan(vfov * 0.5)
        tx = ty * aspect
        self.set_perspective_projection(near, far, -tx, tx, ty, -ty, reverse_depth)

    def set_perspective_projection(
        self,
        near: float,
        far: float,
        left: float,
        right: float,
        top: float,
        bottom: float,
        reverse_depth: bool,
    ) -> None:
        near, far = _clip_planes(near, far)

        a22 = far / (far - near)
        a32 = (far * near) / (near - far)
        if reverse_depth:
            a22 = near / (near - far)
            a32 = (near * far) / (far - near)

        self.view_to_clip_matrix = (
            (2.0 / (right - left), 0.0, 0.0, 0.0),
            (0.0, 2.0 / (top - bottom), 0.0, 0.0),
            ((right + left) / (left - right), (top + bottom) / (bottom - top), a22, 1.0),
            (0.0, 0.0, a32, 0.0),
        )

        self.hfov = math.atan2(right, 1.0) - math.atan2(left, 1.0)
        self.vfov = math.atan2(bottom, 1.0) - math.atan2(top, 1.0)
        self.aspect_ratio = (right - left) / (bottom - top)
        self.view_length = far - near
        self.reversed_depth = reverse_depth

    def set_orthographic_projection(
        self,
        near: float,
        far: float,
        left: float,
        right: float,
        top: float,
        bottom: float,
        reverse_depth: bool,
    ) -> None:
        near, far = _clip_planes(near, far)

        a22 = 1.0 / (far - near)
        a32 = near / (near - far)
        if reverse_depth:
            a22 = 1.0 / (near - far)
            a32 = far / (far - near)

        self.view_to_clip_matrix = (
            (2.0 / (right - left), 0.0, 0.0, 0.0),
            (0.0, 2.0 / (top - bottom), 0.0, 0.0),
            (0.0, 0.0, a22, 0.0),
            ((right + left) / (left - right), (top + bottom) / (bottom - top), a32, 1.0),
        )

        self.hfov = 0.0
        self.vfov = 0.0
        self.aspect_ratio = (right - left) / (bottom - top)
        self.view_length = far - near
        self.reversed_depth = reverse_depth