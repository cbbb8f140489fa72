import pytest

from rabbitengine.rendergraph import (
    RenderGraphContext,
    RenderGraphSize,
    RenderPassConfig,
    RenderTextureDesc,
    RenderTextureFlag,
    RenderTextureInputDesc,
    RenderTextureSize,
)
from rabbitengine.resources import RenderResourceFormat


def _size(w, h):
    return RenderGraphSize(size=(w, h), upscaled_size=(w * 2, h * 2), ui_size=(w * 4, h * 4))


def _desc(name="tex", fmt=RenderResourceFormat.R8G8B8A8_UNORM, flags=RenderTextureFlag.NONE, size=RenderTextureSize.FULL):
    return RenderTextureDesc(name, fmt, size, size, flags)


def test_desc_flags():
    desc = _desc(flags=RenderTextureFlag.ALLOW_RENDER_TARGET)
    assert desc.has_flag(RenderTextureFlag.ALLOW_RENDER_TARGET)
    assert not desc.has_flag(RenderTextureFlag.DENY_ALIASING)
    desc.combine_flags(RenderTextureFlag.DENY_ALIASING)
    assert desc.has_flag(RenderTextureFlag.DENY_ALIASING)
    assert desc.has_flag(RenderTextureFlag.ALLOW_RENDER_TARGET)


def test_aliasing_rules():
    a = _desc()
    assert a.is_aliasable_with(_desc(name="other"))
    assert not a.is_aliasable_with(_desc(fmt=RenderResourceFormat.R32_FLOAT))
    assert not a.is_aliasable_with(_desc(size=RenderTextureSize.HALF))
    assert not a.is_aliasable_with(_desc(flags=RenderTextureFlag.UI_SIZED))
    assert not a.is_aliasable_with(_desc(flags=RenderTextureFlag.DENY_ALIASING))


def test_schedule_and_lookup():
    ctx = RenderGraphContext()
    assert ctx.get_scheduled_graph_resources(0) == []
    d0 = _desc("a")
    d1 = _desc("b")
    assert ctx.schedule_new_resource(d0, 0) == 0
    assert ctx.schedule_new_resource(d1, 1) == 1
    assert ctx.get_scheduled_resource(1) is d1
    assert ctx.get_scheduled_graph_resources(0) == [0]
    assert ctx.get_scheduled_graph_resources(1) == [1]


def test_invalid_lookups_raise():
    ctx = RenderGraphContext()
    ctx.schedule_new_resource(_desc(), 0)
    with pytest.raises(IndexError):
        ctx.get_scheduled_resource(-1)
    with pytest.raises(IndexError):
        ctx.get_scheduled_resource(5)
    with pytest.raises(IndexError):
        ctx.get_scheduled_graph_resources(3)
    with pytest.raises(ValueError):
        ctx.schedule_new_resource(_desc(), 4)
    with pytest.raises(ValueError):
        ctx.get_resource(-1)
    with pytest.raises(ValueError):
        ctx.requires_clear(-1)


def test_resources_aliased_between_graphs():
    ctx = RenderGraphContext()
    a = ctx.schedule_new_resource(_desc(), 0)
    b = ctx.schedule_new_resource(_desc(), 1)
    ctx.add_graph_size(0, _size(64, 32))
    ctx.add_graph_size(1, _size(64, 32))
    ctx.create_graph_resources()
    assert len(ctx.resources) == 1
    assert ctx.get_resource(a) is ctx.get_resource(b)


def test_same_graph_not_aliased():
    ctx = RenderGraphContext()
    a = ctx.schedule_new_resource(_desc(), 0)
    b = ctx.schedule_new_resource(_desc(), 0)
    ctx.add_graph_size(0, _size(64, 32))
    ctx.create_graph_resources()
    assert len(ctx.resources) == 2
    assert ctx.get_resource(a) is not ctx.get_resource(b)


def test_deny_aliasing_keeps_resources_apart():
    ctx = RenderGraphContext()
    a = ctx.schedule_new_resource(_desc(flags=RenderTextureFlag.DENY_ALIASING), 0)
    b = ctx.schedule_new_resource(_desc(), 1)
    ctx.add_graph_size(0, _size(64, 32))
    ctx.add_graph_size(1, _size(64, 32))
    ctx.create_graph_resources()
    assert len(ctx.resources) == 2
    assert ctx.get_resource(a) is not ctx.get_resource(b)


def test_sizes_use_largest_and_divider():
    ctx = RenderGraphContext()
    full = ctx.schedule_new_resource(_desc(), 0)
    half = ctx.schedule_new_resource(_desc(size=RenderTextureSize.HALF), 0)
    ctx.add_graph_size(0, _size(100, 50))
    ctx.add_graph_size(0, _size(80, 200))
    ctx.create_graph_resources()
    tex = ctx.get_resource(full)
    assert (tex.width, tex.height) == (100, 200)
    small = ctx.get_resource(half)
    assert (small.width, small.height) == (50, 100)


def test_ui_and_custom_sizes():
    ctx = RenderGraphContext()
    ui = ctx.schedule_new_resource(_desc(flags=RenderTextureFlag.UI_SIZED), 0)
    custom = ctx.schedule_new_resource(
        RenderTextureDesc("c", RenderResourceFormat.R32_FLOAT, 17, 9, RenderTextureFlag.CUSTOM_SIZED), 0
    )
    ctx.add_graph_size(0, _size(10, 20))
    ctx.create_graph_resources()
    assert (ctx.get_resource(ui).width, ctx.get_resource(ui).height) == (40, 80)
    assert (ctx.get_resource(custom).width, ctx.get_resource(custom).height) == (17, 9)


def test_clear_and_access_flags():
    ctx = RenderGraphContext()
    cleared = ctx.schedule_new_resource(
        _desc(flags=RenderTextureFlag.CLEAR_BEFORE_GRAPH | RenderTextureFlag.ALLOW_RENDER_TARGET), 0
    )
    plain = ctx.schedule_new_resource(_desc(fmt=RenderResourceFormat.R32_FLOAT), 0)
    ctx.add_graph_size(0, _size(8, 8))
    ctx.create_graph_resources()
    assert ctx.requires_clear(cleared) is True
    assert ctx.requires_clear(plain) is False
    assert ctx.get_resource(cleared).allowed_render_target is True
    assert ctx.get_resource(plain).allowed_render_target is False


def test_create_without_sizes_does_nothing():
    ctx = RenderGraphContext()
    ctx.schedule_new_resource(_desc(), 0)
    ctx.create_graph_resources()
    assert ctx.resources == []
    with pytest.raises(IndexError):
        ctx.get_resource(0)


def test_create_twice_keeps_existing_and_delete_resets():
    ctx = RenderGraphContext()
    rid = ctx.schedule_new_resource(_desc(), 0)
    ctx.add_graph_size(0, _size(8, 8))
    ctx.create_graph_resources()
    first = ctx.get_resource(rid)
    ctx.create_graph_resources()
    assert ctx.get_resource(rid) is first
    ctx.delete_graph_resources()
    assert ctx.resources == []
    ctx.delete_graph_resource_descriptions()
    assert ctx.get_scheduled_graph_resources(0) == []


def test_add_graph_size_rejects_gap():
    ctx = RenderGraphContext()
    with pytest.raises(ValueError):
        ctx.add_graph_size(2, _size(1, 1))


def test_pass_config_limits():
    config = RenderPassConfig(dependencies=[RenderTextureInputDesc("in")])
    assert config.dependencies[0].output_texture_index == -1
    with pytest.raises(ValueError):
        RenderPassConfig(output_textures=[_desc()] * 9)