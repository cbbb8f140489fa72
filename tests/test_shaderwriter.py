import pytest

from rabbitengine.shaderentries import Shader, ShaderStage
from rabbitengine.shaderwriter import (
    D3D_SHADER_START,
    SHADER_START,
    build_lookup_table,
    render_d3d_defines,
    render_defines,
    write_out_shaders,
)


@pytest.fixture
def shaders():
    return [
        Shader("VS_Main", ShaderStage.VERTEX, b"abc", b"xy", cbv_mask=1),
        Shader("PS_Main", ShaderStage.PIXEL, b"defg", b"z", srv_mask=4, sampler_mask=2),
    ]


def test_lookup_offsets_are_contiguous(shaders):
    table = build_lookup_table(shaders)
    assert table[0].offset_in_file == 0
    assert table[1].offset_in_file == table[0].shader_blob_length + table[0].reflection_blob_length
    assert table[1].shader_blob_length == len(b"defg")
    assert table[1].srv_mask == 4
    assert [e.name for e in table] == ["VS_Main", "PS_Main"]


def test_render_defines(shaders):
    text = render_defines(build_lookup_table(shaders))
    assert text.startswith(SHADER_START)
    assert "\tstatic const uint32_t VS_Main = 0;\n" in text
    assert "\tstatic const uint32_t PS_Main = 1;\n" in text
    assert text.endswith("}")


def test_render_d3d_defines(shaders):
    table = build_lookup_table(shaders)
    text = render_d3d_defines(table)
    assert text.startswith(D3D_SHADER_START + "2;\n")
    assert "{0,3,2,1,0,0,0}," in text
    assert text.endswith("};\n}")


def test_render_empty_table():
    assert render_defines([]) == SHADER_START + "}"
    assert render_d3d_defines([]).startswith(D3D_SHADER_START + "0;")


def test_write_out_shaders(tmp_path, shaders):
    defines = tmp_path / "graphics"
    d3d = tmp_path / "d3d12"
    defines.mkdir()
    d3d.mkdir()
    bin_dir = tmp_path / "bin"

    write_out_shaders(defines, d3d, bin_dir, shaders)

    assert (bin_dir / "Shaders.bin").read_bytes() == b"abcxydefgz"
    table = build_lookup_table(shaders)
    assert (defines / "codeGen" / "ShaderDefines.h").read_text() == render_defines(table)
    assert (d3d / "codeGen" / "ShaderDefines.h").read_text() == render_d3d_defines(table)


def test_write_out_shaders_missing_parent(tmp_path, shaders):
    with pytest.raises(FileNotFoundError):
        write_out_shaders(tmp_path, tmp_path, tmp_path / "missing" / "bin", shaders)