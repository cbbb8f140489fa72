# rabbitengine

This package holds the core logic of a small game engine in plain Python. It has no
rendering backend. It covers the bookkeeping around one: events, layers, entities,
render-graph resource planning, projection matrices and shader build helpers.

## Modules

- `rabbitengine.input` defines the `KeyCode` and `MouseCode` integer enumerations.
- `rabbitengine.settings` defines `GraphicsSettings`, which has these methods:
  - `validate()` raises `ValueError` if a setting has no value.
  - `log()` writes the settings to the log and returns the lines it wrote.
  - `requires_new_resources(old_settings)`.
- `rabbitengine.events` covers events and their delivery:
  - `EventType` and the `EventCategory` flags.
  - The `Event` hierarchy, which has key, mouse, window and application events. Every event has a `name`, `is_in_category`, `clone`, `allow_overwrite` and `is_overwritable`.
  - `bind_event(event_type, func, event)` calls `func` when the type matches and returns whether it did.
  - `EventManager` passes each inserted event to every listener that listens to the event's category.
  - `EventListener` queues copies of events until `process_events()` runs:
    - It uses one queue, or two alternating queues when `double_queue=True`.
    - An event that `on_event` does not handle (returns `False` for) stays queued for the next round.
    - An overwritable event, such as `WindowResizeEvent` or `WindowFullscreenToggleEvent`, replaces a queued event of the same type for the same window.
    - The listener is a context manager, and `close()` detaches it from its manager.
- `rabbitengine.layers` covers application layers:
  - `ApplicationLayer` provides the `on_attach`, `on_detach`, `on_update` and `on_event` hooks.
  - `LayerStack` puts overlays before regular layers. `pop_layer` raises `ValueError` for a layer that is not on the stack.
- `rabbitengine.entity` covers scenes and their objects:
  - `Scene` creates and removes `GameObject`s. `remove_game_object` raises `ValueError` for an unknown object.
  - `GameObject` holds `ObjectComponent`s, grouped by each component class's `component_tag`.
  - `ComponentRegister` hands out numeric component ids.
- `rabbitengine.resources` covers render resources:
  - The `RenderResourceFormat`, `RenderResourceType`, `ResourceState`, `TopologyType` and `TextureColorSpace` enumerations.
  - `get_element_size_from_format` and `is_depth_format`.
  - `RenderResource`, whose `primitive_type()` returns its basic kind.
  - `Texture2D`.
  - `RenderTargetBundle`, which holds at most 8 color targets.
- `rabbitengine.rendergraph` covers render-graph planning:
  - `RenderTextureDesc` and `RenderTextureFlag`.
  - `RenderPassConfig`, `RenderGraphSize` and `RenderPassType`.
  - `RenderGraphContext`, which schedules texture descriptions per graph. `create_graph_resources()` sizes them from the largest registered graph size. It then shares one `Texture2D` between graphs whose descriptions can alias.
- `rabbitengine.frustum` provides `Frustum`, which builds perspective projection matrices (from planes or from a vertical FOV) and orthographic ones. Either kind can use reversed depth, and the far plane is clamped to `FAR_CLIP_MAX`.
- `rabbitengine.shaderentries` covers shader sources:
  - `find_shader_entries` finds `VS_`, `PS_` and `CS_` entry points in shader source.
  - `shader_target` and `compile_arguments` give the target profile and compiler arguments for an entry.
  - `compute_input_masks` builds the CBV, SRV, UAV and sampler masks from `(input_type, bind_point)` pairs.
  - `retrieve_files` finds `.hlsl` files recursively.
- `rabbitengine.shaderwriter` writes the compiled output:
  - `build_lookup_table`, `render_d3d_defines` and `render_defines`.
  - `write_out_shaders`, which writes `Shaders.bin` and a `codeGen/ShaderDefines.h` into each defines folder.
- `rabbitengine.shadermath` holds CPU versions of shader helpers:
  - G-buffer encoding and decoding.
  - `pack_unorm` and `unpack_unorm`.
  - `extract_near_far` and `linearize_depth`.
  - `blinn_phong`.

## Install

```
pip install .
```

## Examples

Events:

```python
from rabbitengine.events import EventCategory, EventListener, EventManager, KeyPressedEvent
from rabbitengine.input import KeyCode

manager = EventManager()

class Printer(EventListener):
    def on_event(self, event):
        print(event.name)
        return True

listener = Printer(EventCategory.KEYBOARD, manager=manager)
manager.insert_event(KeyPressedEvent(KeyCode.F11, False))
listener.process_events()  # prints "KeyPressed"
```

Entities:

```python
from rabbitengine.entity import ObjectComponent, Scene

class Health(ObjectComponent):
    def __init__(self, points):
        self.points = points

scene = Scene()
player = scene.create_game_object()
player.add_component(Health, 10)
print([c.points for c in scene.get_components_with_type_of(Health)])  # [10]
```

Shader entries:

```python
from rabbitengine.shaderentries import compile_arguments, find_shader_entries

for shader in find_shader_entries("float4 VS_Main(float3 p : POSITION) { ... }"):
    print(compile_arguments("Main.hlsl", shader))
```

## What it does not do

- It does not draw anything. It has no windows, no displays, no graphics-API renderer and no main application loop.
- `Texture2D` and the resources that `RenderGraphContext` creates are descriptions only. They hold no GPU memory.
- It does not compile shaders. `compile_arguments` only builds an argument list. The blobs, reflection data and bindings that `compute_input_masks` and `write_out_shaders` use must come from a shader compiler you provide.
- It does not load image or model assets.

## Tests

```
pip install .[test]
pytest
```