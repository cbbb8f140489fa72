"""CPU versions of the shared shader helpers: G-buffer packing, depth and lighting."""
from __future__ import annotations

import math
from dataclasses import dataclass

Vec3 = tuple[float, float, float]
Vec4 = tuple[float, float, float, float]

_FULL_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class GBuffer:
    color: Vec4
    normal: Vec3
    depth: float


@dataclass(frozen=True)
class Light:
    world_pos: Vec3
    color: Vec3


def encode_gbuffer(gbuffer: GBuffer) -> tuple[Vec4, Vec4]:
    """The two render-target values that store ``gbuffer``."""
    nx, ny, nz = gbuffer.normal
    return tuple(gbuffer.color), (nx, ny, nz, gbuffer.depth)  # type: ignore[return-value]


def decode_gbuffer(encoded: tuple[Vec4, Vec4]) -> GBuffer:
    gbuf0, gbuf1 = encoded
    return GBuffer(color=tuple(gbuf0), normal=tuple(gbuf1[:3]), depth=gbuf1[3])  # type: ignore[arg-type]


def _mask(num_bits: int) -> int:
    return _FULL_MASK if num_bits == 32 else (1 << num_bits) - 1


def pack_unorm(value: float, shift: int, num_bits: int, dither: float) -> int:
    """Quantise ``value`` clamped to [0, 1] into ``num_bits`` bits at ``shift``."""
    mask = _mask(num_bits)
    saturated = min(max(value, 0.0), 1.0)
    return (int(saturated * float(mask) + dither) << shift) & _FULL_MASK


def unpack_unorm(encoded: int, shift: int, num_bits: int) -> float:
    mask = _mask(num_bits)
    return float((encoded >> shift) & mask) / float(mask)


def extract_near_far(c: float, d: float) -> tuple[float, float]:
    """Near and far planes from the projection's depth scale ``c`` and offset ``d``."""
    near = -d / c
    far = (c * near) / (c - 1.0)
    return near, far


def linearize_depth(depth: float, near: float, far: float) -> float:
    """View distance of a hardware depth value; ``near > far`` means reversed depth."""
    if near > far:
        return near * far / (far + depth * (near - far))
    return (near * far) / (far - depth * (far - near))


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _normalize(v: Vec3) -> Vec3:
    length = math.sqrt(_dot(v, v))
    return (v[0] / length, v[1] / length, v[2] / length)


def _scale(v: Vec3, s: float) -> Vec3:
    return (v[0] * s, v[1] * s, v[2] * s)


def blinn_phong(view_world_pos: Vec3, world_pos: Vec3, world_nrm: Vec3, light: Light) -> tuple[Vec3, Vec3]:
    """Diffuse and specular contributions of ``light`` at a surface point."""
    light_dir = _normalize(_sub(light.world_pos, world_pos))
    diffuse = _scale(light.color, max(_dot(light_dir, world_nrm), 0.0))

    view_dir = _normalize(_sub(view_world_pos, world_pos))
    halfway_dir = _normalize(_add(light_dir, view_dir))
    spec = max(_dot(world_nrm, halfway_dir), 0.0) ** 64.0
    specular = _scale(light.color, spec)
    return diffuse, specular