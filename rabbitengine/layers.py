"""Application layers and the stack that orders them."""
from __future__ import annotations

from typing import Iterator

from .events import Event


class ApplicationLayer:
    """A unit of application logic that receives updates and events.

    The base hooks keep simple bookkeeping: whether the layer is attached,
    how many frames it has seen, the time they covered and the events it
    received. Subclasses override the hooks to add their own behaviour.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.enabled = True
        self.attached = False
        self.frame_count = 0
        self.elapsed_time = 0.0
        self.events_received = 0

    def on_attach(self) -> None:
        """Called when the layer is added to the stack."""
        self.attached = True

    def on_detach(self) -> None:
        """Called when the layer is removed from the stack."""
        self.attached = False

    def on_update(self, delta_time: float) -> None:
        """Called once per frame before rendering."""
        self.frame_count += 1
        self.elapsed_time += delta_time

    def on_event(self, event: Event) -> bool:
        """Called for each event; return True if the layer handled it."""
        self.events_received += 1
        return False


class LayerStack:
    """Overlays first, then regular layers; the newest of each comes first."""

    def __init__(self) -> None:
        self._layers: list[ApplicationLayer] = []
        self._insert_index = 0

    def push_layer(self, layer: ApplicationLayer) -> None:
        self._layers.insert(self._insert_index, layer)

    def push_overlay(self, overlay: ApplicationLayer) -> None:
        self._layers.insert(0, overlay)
        self._insert_index += 1

    def pop_layer(self, layer: ApplicationLayer) -> None:
        """Remove ``layer``; raise ValueError if it is not on the stack."""
        position = self._find(layer, 0, self._insert_index)
        if position is not None:
            del self._layers[position]
            self._insert_index -= 1
            return

        position = self._find(layer, self._insert_index, len(self._layers))
        if position is not None:
            del self._layers[position]
            return

        raise ValueError(f"layer {layer.name!r} is not on the stack")

    def clear(self) -> None:
        self._layers.clear()
        self._insert_index = 0

    def __iter__(self) -> Iterator[ApplicationLayer]:
        return iter(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)

    def _find(self, layer: ApplicationLayer, start: int, stop: int) -> int | None:
        return next(
            (start + offset for offset, candidate in enumerate(self._layers[start:stop]) if candidate is layer),
            None,
        )