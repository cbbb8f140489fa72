import pytest

from rabbitengine.frustum import Frustum
from rabbitengine.shadermath import (
    GBuffer,
    Light,
    blinn_phong,
    decode_gbuffer,
    encode_gbuffer,
    extract_near_far,
    linearize_depth,
    pack_unorm,
    unpack_unorm,
)


def test_gbuffer_round_trip():
    gbuf = GBuffer(color=(0.1, 0.2, 0.3, 1.0), normal=(0.0, 1.0, 0.0), depth=0.5)
    encoded = encode_gbuffer(gbuf)
    assert encoded[1] == (0.0, 1.0, 0.0, 0.5)
    assert decode_gbuffer(encoded) == gbuf


def test_pack_unorm_full_and_clamped():
    assert pack_unorm(1.0, 0, 8, 0.0) == 255
    assert pack_unorm(2.0, 0, 8, 0.0) == pack_unorm(1.0, 0, 8, 0.0)
    assert pack_unorm(-1.0, 0, 8, 0.0) == 0


@pytest.mark.parametrize("value", [0.0, 0.25, 0.5, 1.0])
def test_pack_unpack_round_trip(value):
    packed = pack_unorm(value, 8, 16, 0.5)
    assert unpack_unorm(packed, 8, 16) == pytest.approx(value, abs=1 / 65535)


def test_pack_32_bits():
    assert pack_unorm(1.0, 0, 32, 0.0) == 0xFFFFFFFF
    assert unpack_unorm(0xFFFFFFFF, 0, 32) == 1.0


def test_extract_near_far_from_projection():
    frustum = Frustum()
    frustum.set_perspective_projection(0.5, 200.0, -1.0, 1.0, 1.0, -1.0, False)
    matrix = frustum.view_to_clip_matrix
    near, far = extract_near_far(matrix[2][2], matrix[3][2])
    assert near == pytest.approx(0.5)
    assert far == pytest.approx(200.0)


def test_linearize_depth_endpoints():
    assert linearize_depth(0.0, 0.5, 200.0) == pytest.approx(0.5)
    assert linearize_depth(1.0, 0.5, 200.0) == pytest.approx(200.0)


def test_linearize_reversed_depth_endpoints():
    assert linearize_depth(0.0, 200.0, 0.5) == pytest.approx(200.0)
    assert linearize_depth(1.0, 200.0, 0.5) == pytest.approx(0.5)


def test_blinn_phong_head_on():
    light = Light(world_pos=(0.0, 5.0, 0.0), color=(1.0, 0.5, 0.25))
    diffuse, specular = blinn_phong((0.0, 3.0, 0.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), light)
    assert diffuse == pytest.approx(light.color)
    assert specular == pytest.approx(light.color)