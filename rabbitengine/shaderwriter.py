"""Writing compiled shaders to the shader binary and the generated define headers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .shaderentries import Shader

logger = logging.getLogger(__name__)

SHADER_BIN_NAME = "Shaders.bin"
CODEGEN_FOLDER = "codeGen"
DEFINES_FILE_NAME = "ShaderDefines.h"

SHADER_START = (
    "#pragma once\n"
    "#include <cstdint>\n"
    "// This file is automatically generated by the shader compiler, do not modify this file yourself!\n"
    "\n"
    "namespace RB::Graphics\n"
    "{\n"
)

D3D_SHADER_START = (
    "#pragma once\n"
    "#include <cstdint>\n"
    "// This file is automatically generated by the shader compiler, do not modify this file yourself!\n"
    "\n"
    "namespace RB::Graphics::D3D12\n"
    "{\n"
    '\tstatic const char* SHADER_OBJ_FILE_LOCATION = "Shaders.bin";\n'
    "\n"
    "\tstruct ShaderBlobLookup\n"
    "\t{\n"
    "\t\tuint64_t offsetInFile;\n"
    "\t\tuint64_t shaderBlobLength;\n"
    "\t\tuint64_t reflectionBlobLength;\n"
    "\t\tuint64_t cbvMask;\n"
    "\t\tuint64_t srvMask;\n"
    "\t\tuint64_t uavMask;\n"
    "\t\tuint64_t samplerMask;\n"
    "\t};\n"
    "\n"
    "\tstatic const uint32_t SHADER_ENTRIES = "
)


@dataclass(frozen=True)
class ShaderBlobLookup:
    """Where a shader lives in the binary file, and what it binds."""

    name: str
    offset_in_file: int
    shader_blob_length: int
    reflection_blob_length: int
    cbv_mask: int
    srv_mask: int
    uav_mask: int
    sampler_mask: int

    def fields(self) -> tuple[int, ...]:
        return (
            self.offset_in_file,
            self.shader_blob_length,
            self.reflection_blob_length,
            self.cbv_mask,
            self.srv_mask,
            self.uav_mask,
            self.sampler_mask,
        )


def build_lookup_table(shaders: Iterable[Shader]) -> list[ShaderBlobLookup]:
    """Lookup entries for shaders stored back to back, blob then reflection."""
    table: list[ShaderBlobLookup] = []
    offset = 0
    for shader in shaders:
        entry = ShaderBlobLookup(
            name=shader.entry_name,
            offset_in_file=offset,
            shader_blob_length=len(shader.shader_blob),
            reflection_blob_length=len(shader.reflection),
            cbv_mask=shader.cbv_mask,
            srv_mask=shader.srv_mask,
            uav_mask=shader.uav_mask,
            sampler_mask=shader.sampler_mask,
        )
        table.append(entry)
        offset += entry.shader_blob_length + entry.reflection_blob_length
    return table


def render_d3d_defines(table: list[ShaderBlobLookup]) -> str:
    """The API-specific header holding the shader lookup table."""
    rows = "".join("{" + ",".join(str(v) for v in entry.fields()) + "}," for entry in table)
    return (
        f"{D3D_SHADER_START}{len(table)};\n"
        "\tstatic const ShaderBlobLookup SHADER_LUT[] = {"
        f"{rows}}};\n}}"
    )


def render_defines(table: list[ShaderBlobLookup]) -> str:
    """The generic header mapping each entry name to its index."""
    lines = "".join(
        f"\tstatic const uint32_t {entry.name} = {index};\n" for index, entry in enumerate(table)
    )
    return f"{SHADER_START}{lines}}}"


def write_out_shaders(
    defines_folder: str | Path,
    d3d_defines_folder: str | Path,
    bin_folder: str | Path,
    shaders: list[Shader],
) -> None:
    """Write the shader binary and both generated headers."""
    bin_folder = Path(bin_folder)
    bin_folder.mkdir(exist_ok=True)

    with open(bin_folder / SHADER_BIN_NAME, "wb") as bin_file:
        for shader in shaders:
            bin_file.write(shader.shader_blob)
            bin_file.write(shader.reflection)

    table = build_lookup_table(shaders)

    d3d_dir = Path(d3d_defines_folder) / CODEGEN_FOLDER
    defines_dir = Path(defines_folder) / CODEGEN_FOLDER
    d3d_dir.mkdir(exist_ok=True)
    defines_dir.mkdir(exist_ok=True)

    d3d_file = d3d_dir / DEFINES_FILE_NAME
    logger.info("D3D defines output location: %s", d3d_file)
    d3d_file.write_bytes(render_d3d_defines(table).encode("ascii"))

    defines_file = defines_dir / DEFINES_FILE_NAME
    logger.info("Defines output location: %s", defines_file)
    defines_file.write_bytes(render_defines(table).encode("ascii"))