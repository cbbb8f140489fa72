"""Discovery of shader entry points and the data the shader compiler records for them."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

SHADER_EXTENSION = ".hlsl"


class ShaderStage(IntEnum):
    UNKNOWN = 0
    VERTEX = 1
    PIXEL = 2
    COMPUTE = 3


class ShaderInputType(IntEnum):
    """Kinds of resources a compiled shader can bind."""

    CBUFFER = 0
    TBUFFER = 1
    TEXTURE = 2
    SAMPLER = 3
    UAV_RWTYPED = 4
    STRUCTURED = 5
    UAV_RWSTRUCTURED = 6
    BYTEADDRESS = 7
    UAV_RWBYTEADDRESS = 8
    UAV_APPEND_STRUCTURED = 9
    UAV_CONSUME_STRUCTURED = 10
    UAV_RWSTRUCTURED_WITH_COUNTER = 11
    RTACCELERATIONSTRUCTURE = 12
    UAV_FEEDBACKTEXTURE = 13


class ShaderEntryError(Exception):
    """Raised when a shader source or entry cannot be processed."""


@dataclass
class Shader:
    """A shader entry point together with its compiled output and binding masks."""

    entry_name: str
    stage: ShaderStage
    shader_blob: bytes = b""
    reflection: bytes = b""
    cbv_mask: int = 0
    srv_mask: int = 0
    uav_mask: int = 0
    sampler_mask: int = 0


_TARGETS = {
    ShaderStage.VERTEX: "vs_6_6",
    ShaderStage.PIXEL: "ps_6_6",
    ShaderStage.COMPUTE: "cs_6_6",
}

_SRV_TYPES = frozenset(
    {
        ShaderInputType.TBUFFER,
        ShaderInputType.TEXTURE,
        ShaderInputType.STRUCTURED,
        ShaderInputType.BYTEADDRESS,
        ShaderInputType.RTACCELERATIONSTRUCTURE,
    }
)

_UAV_TYPES = frozenset(
    {
        ShaderInputType.UAV_RWTYPED,
        ShaderInputType.UAV_RWSTRUCTURED,
        ShaderInputType.UAV_RWBYTEADDRESS,
        ShaderInputType.UAV_APPEND_STRUCTURED,
        ShaderInputType.UAV_CONSUME_STRUCTURED,
        ShaderInputType.UAV_RWSTRUCTURED_WITH_COUNTER,
        ShaderInputType.UAV_FEEDBACKTEXTURE,
    }
)


def get_shader_stages(source: str, stage: ShaderStage, prefix: str) -> list[Shader]:
    """Every entry whose name starts with ``prefix`` and runs up to the next ``(``."""
    entries: list[Shader] = []
    remaining = source
    while (position := remaining.find(prefix)) != -1:
        remaining = remaining[position:]
        end = remaining.find("(")
        if end == -1:
            raise ShaderEntryError("Could not find the end of the name")
        entries.append(Shader(entry_name=remaining[:end], stage=stage))
        remaining = remaining[end:]
    return entries


def find_shader_entries(source: str) -> list[Shader]:
    """Vertex, then pixel, then compute entries found in ``source``."""
    return [
        *get_shader_stages(source, ShaderStage.VERTEX, "VS_"),
        *get_shader_stages(source, ShaderStage.PIXEL, "PS_"),
        *get_shader_stages(source, ShaderStage.COMPUTE, "CS_"),
    ]


def shader_target(stage: ShaderStage) -> str:
    """The shader model target profile for ``stage``."""
    try:
        return _TARGETS[ShaderStage(stage)]
    except (KeyError, ValueError):
        raise ShaderEntryError(f"Could not detect the shader stage type: {stage!r}") from None


def compile_arguments(file_name: str, shader: Shader) -> list[str]:
    """The compiler command-line arguments for one entry of ``file_name``."""
    name = shader.entry_name
    return [
        str(file_name),
        "-E", name,
        "-T", shader_target(shader.stage),
        "-Zs",
        "-D", "SHADER=1",
        "-Fo", f"{name}.bin",
        "-Fd", f"{name}.pdb",
        "-Qstrip_reflect",
    ]


def compute_input_masks(shader: Shader, bindings: Iterable[tuple[int, int]]) -> Shader:
    """Return ``shader`` with binding masks built from ``(input_type, bind_point)`` pairs."""
    masks = {"cbv_mask": 0, "srv_mask": 0, "uav_mask": 0, "sampler_mask": 0}
    for index, (input_type, bind_point) in enumerate(bindings):
        try:
            kind = ShaderInputType(input_type)
        except ValueError:
            logger.warning("Bounded input resource %d is not valid", index)
            continue
        bit = 1 << bind_point
        if kind is ShaderInputType.CBUFFER:
            masks["cbv_mask"] |= bit
        elif kind is ShaderInputType.SAMPLER:
            masks["sampler_mask"] |= bit
        elif kind in _SRV_TYPES:
            masks["srv_mask"] |= bit
        elif kind in _UAV_TYPES:
            masks["uav_mask"] |= bit
    return replace(shader, **masks)


def retrieve_files(path: str | Path) -> list[Path]:
    """All shader source files below ``path``, searched recursively."""
    files: list[Path] = []
    for entry in sorted(Path(path).iterdir()):
        if entry.is_dir():
            files.extend(retrieve_files(entry))
        elif SHADER_EXTENSION in str(entry):
            files.append(entry)
    return files