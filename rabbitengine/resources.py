"""Render resource kinds, formats and the basic texture description."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum

logger = logging.getLogger(__name__)

MAX_TEXTURE_SUBRESOURCE_COUNT = 8
MAX_COLOR_TARGETS = 8


class ResourceState(IntEnum):
    COMMON = 0
    VERTEX_AND_CONSTANT_BUFFER = 1
    INDEX_BUFFER = 2
    RENDER_TARGET = 3
    UNORDERED_ACCESS = 4
    DEPTH_WRITE = 5
    DEPTH_READ = 6
    NON_PIXEL_SHADER_RESOURCE = 7
    PIXEL_SHADER_RESOURCE = 8
    COPY_DEST = 9
    COPY_SOURCE = 10
    RAYTRACING_ACCELERATION_STRUCTURE = 11
    READ = 12
    ALL_SHADER_RESOURCE = 13
    PRESENT = 14


class RenderResourceFormat(Enum):
    UNKNOWN = 0

    R32G32B32A32_TYPELESS = 1
    R32G32B32A32_FLOAT = 2
    R16G16B16A16_FLOAT = 3
    R32G32_FLOAT = 4
    R8_UINT = 5
    R32_UINT = 6
    R8G8B8A8_TYPELESS = 7
    R8G8B8A8_UNORM = 8
    R8G8B8A8_SRGB = 9
    R11G11B10_FLOAT = 10
    R16G16_FLOAT = 11
    R16G16_UINT = 12
    R16_FLOAT = 13
    R16_UINT = 14
    R16_UNORM = 15
    R16_SNORM = 16
    R8_UNORM = 17
    R32_FLOAT = 18

    D32_FLOAT = 19
    D16_UNORM = 20


class RenderResourceType(IntEnum):
    """Resource kinds; the low bits hold the primitive type."""

    UNKNOWN = 0

    BUFFER = 1 << 0
    TEXTURE = 1 << 1

    LAST_PRIMITIVE_TYPE = TEXTURE

    STRUCTURED_BUFFER = (1 << 2) | BUFFER
    VERTEX_BUFFER = (1 << 3) | BUFFER
    INDEX_BUFFER = (1 << 4) | BUFFER
    TEXTURE_2D = (1 << 5) | TEXTURE


class TopologyType(Enum):
    TRIANGLE_LIST = 0
    TRIANGLE_STRIP = 1


class TextureColorSpace(Enum):
    LINEAR = 0
    SRGB = 1


F = RenderResourceFormat

_ELEMENT_SIZES: dict[RenderResourceFormat, int] = {
    F.R32G32B32A32_TYPELESS: 16,
    F.R32G32B32A32_FLOAT: 16,
    F.R32G32_FLOAT: 8,
    F.R16G16B16A16_FLOAT: 8,
    F.R32_UINT: 4,
    F.R8G8B8A8_TYPELESS: 4,
    F.R8G8B8A8_SRGB: 4,
    F.R8G8B8A8_UNORM: 4,
    F.R16G16_FLOAT: 4,
    F.R16G16_UINT: 4,
    F.R32_FLOAT: 4,
    F.D32_FLOAT: 4,
    F.R16_FLOAT: 2,
    F.R16_UINT: 2,
    F.R16_UNORM: 2,
    F.R16_SNORM: 2,
    F.D16_UNORM: 2,
    F.R8_UNORM: 1,
    F.R8_UINT: 1,
    F.UNKNOWN: 0,
}

_DEPTH_FORMATS = frozenset({F.D32_FLOAT, F.D16_UNORM})


def get_element_size_from_format(format: RenderResourceFormat) -> int:
    """Bytes per element of ``format``; 0 for unknown or unsupported formats."""
    size = _ELEMENT_SIZES.get(format)
    if size is None:
        logger.warning("Format not yet supported")
        return 0
    return size


def is_depth_format(format: RenderResourceFormat) -> bool:
    return format in _DEPTH_FORMATS


class RenderResource:
    """A GPU resource as seen by the engine."""

    def __init__(
        self,
        name: str,
        resource_type: RenderResourceType,
        format: RenderResourceFormat = RenderResourceFormat.UNKNOWN,
    ) -> None:
        self.name = name
        self.resource_type = resource_type
        self.format = format
        self.streaming = False

    @property
    def ready_to_render(self) -> bool:
        return self.streaming

    def primitive_type(self) -> RenderResourceType:
        """The primitive kind (buffer or texture) this resource belongs to."""
        last = int(RenderResourceType.LAST_PRIMITIVE_TYPE)
        mask = last + (last - 1)
        return RenderResourceType(int(self.resource_type) & mask)


class Texture2D(RenderResource):
    """A two-dimensional texture."""

    def __init__(
        self,
        name: str,
        format: RenderResourceFormat,
        width: int,
        height: int,
        is_render_target: bool = False,
        random_read_write_access: bool = False,
        color_space: TextureColorSpace = TextureColorSpace.LINEAR,
        data: bytes | None = None,
    ) -> None:
        super().__init__(name, RenderResourceType.TEXTURE_2D, format)
        self.width = width
        self.height = height
        self.allowed_render_target = is_render_target
        self.allowed_random_read_writes = random_read_write_access
        self.color_space = color_space
        self.data = data

    @property
    def allowed_depth_stencil(self) -> bool:
        return is_depth_format(self.format)

    def aspect_ratio(self) -> float:
        return self.width / self.height

    def __repr__(self) -> str:
        return (
            f"Texture2D(name={self.name!r}, format={self.format.name}, "
            f"width={self.width}, height={self.height})"
        )


@dataclass
class RenderTargetBundle:
    """Up to eight colour targets plus an optional depth-stencil target."""

    color_targets: list[Texture2D] = field(default_factory=list)
    depth_stencil_target: Texture2D | None = None

    def __post_init__(self) -> None:
        if len(self.color_targets) > MAX_COLOR_TARGETS:
            raise ValueError(f"at most {MAX_COLOR_TARGETS} color targets are allowed")

    @property
    def color_target_count(self) -> int:
        return len(self.color_targets)