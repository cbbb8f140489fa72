"""Render pass descriptions and the resource context shared between render graphs."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum, IntFlag

from .resources import RenderResourceFormat, Texture2D

logger = logging.getLogger(__name__)

MAX_INOUT_RESOURCES_PER_RENDERPASS = 8
MAX_WORKING_RESOURCES_PER_RENDERPASS = 8
MAX_GRAPHS = 64

ResourceID = int


class RenderPassType(Enum):
    NONE = 0
    GBUFFER = 1
    DEFERRED_LIGHTING = 2


class RenderTextureSize(IntEnum):
    """Size divider of a render texture, used as a right shift of the graph size."""

    FULL = 0
    HALF = 1


class RenderTextureFlag(IntFlag):
    NONE = 0
    CUSTOM_SIZED = 1 << 0
    UI_SIZED = 1 << 1
    UPSCALED_SIZED = 1 << 2
    ALLOW_RENDER_TARGET = 1 << 3
    ALLOW_RANDOM_READ_WRITES = 1 << 4
    DENY_ALIASING = 1 << 5
    CLEAR_BEFORE_GRAPH = 1 << 6


_SIZE_FLAGS = (
    RenderTextureFlag.CUSTOM_SIZED,
    RenderTextureFlag.UI_SIZED,
    RenderTextureFlag.UPSCALED_SIZED,
)


@dataclass
class RenderTextureDesc:
    """A render texture request; width and height are size dividers unless custom sized."""

    name: str
    format: RenderResourceFormat
    width: int = RenderTextureSize.FULL
    height: int = RenderTextureSize.FULL
    flags: int = RenderTextureFlag.NONE

    def is_aliasable_with(self, other: RenderTextureDesc) -> bool:
        if self.flags & RenderTextureFlag.DENY_ALIASING or other.flags & RenderTextureFlag.DENY_ALIASING:
            return False
        if any((self.flags & flag) != (other.flags & flag) for flag in _SIZE_FLAGS):
            return False
        return (
            self.format == other.format
            and self.width == other.width
            and self.height == other.height
        )

    def has_flag(self, flag: RenderTextureFlag) -> bool:
        return (self.flags & flag) != 0

    def combine_flags(self, other_flags: int) -> None:
        self.flags |= other_flags


@dataclass
class RenderTextureInputDesc:
    name: str
    depth_format: bool = False
    # Index of an output texture this input reads from and writes to, -1 for none.
    output_texture_index: int = -1


@dataclass
class RenderPassConfig:
    dependencies: list[RenderTextureInputDesc] = field(default_factory=list)
    working_textures: list[RenderTextureDesc] = field(default_factory=list)
    output_textures: list[RenderTextureDesc] = field(default_factory=list)
    async_compute_compatible: bool = False

    def __post_init__(self) -> None:
        if len(self.dependencies) > MAX_INOUT_RESOURCES_PER_RENDERPASS:
            raise ValueError("too many dependencies for a render pass")
        if len(self.working_textures) > MAX_WORKING_RESOURCES_PER_RENDERPASS:
            raise ValueError("too many working textures for a render pass")
        if len(self.output_textures) > MAX_INOUT_RESOURCES_PER_RENDERPASS:
            raise ValueError("too many output textures for a render pass")


@dataclass
class RenderGraphSize:
    size: tuple[float, float]
    upscaled_size: tuple[float, float]
    ui_size: tuple[float, float]


@dataclass
class _LinkedDesc:
    desc: RenderTextureDesc
    graphs: int
    ids: list[ResourceID]


def _biggest(sizes: list[RenderGraphSize]) -> RenderGraphSize:
    def largest(values: list[tuple[float, float]]) -> tuple[float, float]:
        return (max(v[0] for v in values), max(v[1] for v in values))

    return RenderGraphSize(
        size=largest([s.size for s in sizes]),
        upscaled_size=largest([s.upscaled_size for s in sizes]),
        ui_size=largest([s.ui_size for s in sizes]),
    )


class RenderGraphContext:
    """Holds the resources shared between render graphs, aliased where possible."""

    def __init__(self) -> None:
        self._resources: list[Texture2D] = []
        self._clears: list[bool] = []
        self._resource_pointers: list[int] = []
        self._graph_sizes: list[list[RenderGraphSize]] = []
        self._descriptions: list[RenderTextureDesc] = []
        self._graph_descriptions: list[list[ResourceID]] = []

    @property
    def resources(self) -> list[Texture2D]:
        return list(self._resources)

    def _pointer(self, resource_id: ResourceID) -> int:
        if resource_id < 0:
            raise ValueError("invalid render resource id")
        return self._resource_pointers[resource_id]

    def get_resource(self, resource_id: ResourceID) -> Texture2D:
        return self._resources[self._pointer(resource_id)]

    def requires_clear(self, resource_id: ResourceID) -> bool:
        return self._clears[self._pointer(resource_id)]

    def add_graph_size(self, graph_id: int, size: RenderGraphSize) -> None:
        if graph_id > len(self._graph_sizes):
            raise ValueError(f"graph {graph_id} skips earlier graphs")
        if graph_id == len(self._graph_sizes):
            self._graph_sizes.append([])
        self._graph_sizes[graph_id].append(size)

    def delete_sizes(self) -> None:
        self._graph_sizes.clear()

    def create_graph_resources(self) -> None:
        """Create the textures for all scheduled descriptions, sharing them across graphs."""
        if self._resources:
            logger.warning("Cannot create graph resources when there are already resources")
            return
        if not self._graph_sizes:
            logger.warning("Cannot create graph resources when there are not sizes registered yet")
            return

        aliased: list[_LinkedDesc] = []

        for graph_id, resource_ids in enumerate(self._graph_descriptions):
            if graph_id >= MAX_GRAPHS:
                raise RuntimeError(f"no more than {MAX_GRAPHS} render graphs are supported")
            if graph_id >= len(self._graph_sizes) or not self._graph_sizes[graph_id]:
                raise ValueError(f"no size registered for graph {graph_id}")

            biggest = _biggest(self._graph_sizes[graph_id])
            graph_bit = 1 << graph_id

            for resource_id in resource_ids:
                desc = replace(self._descriptions[resource_id])

                if not desc.has_flag(RenderTextureFlag.CUSTOM_SIZED):
                    width, height = biggest.size
                    if desc.has_flag(RenderTextureFlag.UI_SIZED):
                        width, height = biggest.ui_size
                    elif desc.has_flag(RenderTextureFlag.UPSCALED_SIZED):
                        width, height = biggest.upscaled_size
                    desc.width = int(width) >> desc.width
                    desc.height = int(height) >> desc.height
                    desc.combine_flags(RenderTextureFlag.CUSTOM_SIZED)

                match = next(
                    (
                        linked
                        for linked in aliased
                        if not linked.graphs & graph_bit and linked.desc.is_aliasable_with(desc)
                    ),
                    None,
                )
                if match is not None:
                    match.desc.combine_flags(desc.flags)
                    match.graphs |= graph_bit
                    match.ids.append(resource_id)
                else:
                    aliased.append(_LinkedDesc(desc=desc, graphs=graph_bit, ids=[resource_id]))

        self._resource_pointers = [0] * len(self._descriptions)

        for index, linked in enumerate(aliased):
            desc = linked.desc
            self._resources.append(
                Texture2D(
                    f"GraphResouce {index}",
                    desc.format,
                    desc.width,
                    desc.height,
                    is_render_target=desc.has_flag(RenderTextureFlag.ALLOW_RENDER_TARGET),
                    random_read_write_access=desc.has_flag(RenderTextureFlag.ALLOW_RANDOM_READ_WRITES),
                )
            )
            self._clears.append(desc.has_flag(RenderTextureFlag.CLEAR_BEFORE_GRAPH))
            for resource_id in linked.ids:
                if self._resource_pointers[resource_id] != 0:
                    raise RuntimeError("resource pointer is already assigned")
                self._resource_pointers[resource_id] = index

    def delete_graph_resources(self) -> None:
        self._resources.clear()
        self._clears.clear()
        self._resource_pointers = []

    def delete_graph_resource_descriptions(self) -> None:
        self._descriptions.clear()
        self._graph_descriptions.clear()

    def schedule_new_resource(self, desc: RenderTextureDesc, graph_id: int) -> ResourceID:
        """Register ``desc`` for ``graph_id`` and return its resource id."""
        if graph_id > len(self._graph_descriptions):
            raise ValueError(f"graph {graph_id} skips earlier graphs")
        if graph_id == len(self._graph_descriptions):
            self._graph_descriptions.append([])
        self._descriptions.append(desc)
        new_id = len(self._descriptions) - 1
        self._graph_descriptions[graph_id].append(new_id)
        return new_id

    def get_scheduled_resource(self, resource_id: ResourceID) -> RenderTextureDesc:
        if resource_id < 0 or resource_id >= len(self._descriptions):
            raise IndexError("invalid render texture description id")
        return self._descriptions[resource_id]

    def get_scheduled_graph_resources(self, graph_id: int) -> list[ResourceID]:
        if not self._graph_descriptions:
            return []
        if graph_id < 0 or graph_id >= len(self._graph_descriptions):
            raise IndexError("invalid render graph id")
        return list(self._graph_descriptions[graph_id])