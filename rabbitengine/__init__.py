"""Game engine core: events, layers, entities, render-graph resources, frustums and shader helpers."""

__version__ = "0.0.1"

__all__ = [
    "input",
    "settings",
    "events",
    "layers",
    "entity",
    "resources",
    "rendergraph",
    "frustum",
    "shaderentries",
    "shaderwriter",
    "shadermath",
]