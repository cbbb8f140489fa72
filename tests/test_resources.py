import pytest

from rabbitengine.resources import (
    RenderResource,
    RenderResourceFormat as F,
    RenderResourceType,
    RenderTargetBundle,
    Texture2D,
    get_element_size_from_format,
    is_depth_format,
)


@pytest.mark.parametrize(
    "fmt, size",
    [
        (F.R32G32B32A32_FLOAT, 16),
        (F.R16G16B16A16_FLOAT, 8),
        (F.R8G8B8A8_UNORM, 4),
        (F.D32_FLOAT, 4),
        (F.D16_UNORM, 2),
        (F.R8_UNORM, 1),
        (F.UNKNOWN, 0),
    ],
)
def test_element_sizes(fmt, size):
    assert get_element_size_from_format(fmt) == size


def test_unsupported_format_size_is_zero():
    assert get_element_size_from_format(F.R11G11B10_FLOAT) == 0


def test_depth_formats():
    depth = {fmt for fmt in F if is_depth_format(fmt)}
    assert depth == {F.D32_FLOAT, F.D16_UNORM}


@pytest.mark.parametrize(
    "kind, primitive",
    [
        (RenderResourceType.VERTEX_BUFFER, RenderResourceType.BUFFER),
        (RenderResourceType.INDEX_BUFFER, RenderResourceType.BUFFER),
        (RenderResourceType.STRUCTURED_BUFFER, RenderResourceType.BUFFER),
        (RenderResourceType.TEXTURE_2D, RenderResourceType.TEXTURE),
        (RenderResourceType.UNKNOWN, RenderResourceType.UNKNOWN),
    ],
)
def test_primitive_type(kind, primitive):
    assert RenderResource("r", kind).primitive_type() is primitive


def test_texture_properties():
    tex = Texture2D("t", F.R8G8B8A8_UNORM, 1920, 1080, is_render_target=True)
    assert tex.aspect_ratio() == pytest.approx(1920 / 1080)
    assert tex.primitive_type() is RenderResourceType.TEXTURE
    assert tex.allowed_render_target is True
    assert tex.allowed_random_read_writes is False
    assert tex.allowed_depth_stencil is False


def test_depth_texture_allows_depth_stencil():
    assert Texture2D("d", F.D32_FLOAT, 4, 4).allowed_depth_stencil is True


def test_streaming_flag_controls_ready():
    tex = Texture2D("t", F.R8_UNORM, 2, 2)
    assert tex.ready_to_render is False
    tex.streaming = True
    assert tex.ready_to_render is True


def test_bundle_counts_and_limit():
    targets = [Texture2D(f"c{i}", F.R8G8B8A8_UNORM, 2, 2) for i in range(3)]
    bundle = RenderTargetBundle(targets)
    assert bundle.color_target_count == len(targets)
    with pytest.raises(ValueError):
        RenderTargetBundle([Texture2D("c", F.R8_UNORM, 1, 1)] * 9)