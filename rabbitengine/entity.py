"""Game objects, their components and the scene that owns them."""
from __future__ import annotations

import logging
from typing import Any, ClassVar, TypeVar

logger = logging.getLogger(__name__)

ComponentID = int

C = TypeVar("C", bound="ObjectComponent")


class ObjectComponent:
    """A piece of behaviour or data attached to a game object.

    Each component class is identified by its ``component_tag``, which
    defaults to the class name.
    """

    component_tag: ClassVar[str] = "ObjectComponent"
    game_object: GameObject | None = None
    enabled: bool = False
    update_count: int = 0

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "component_tag" not in cls.__dict__:
            cls.component_tag = cls.__name__

    def update(self) -> None:
        """Called once per scene update; counts the updates received."""
        self.update_count += 1

    def _attach(self, obj: GameObject) -> None:
        self.game_object = obj
        self.enabled = True


class ComponentRegister:
    """Hands out a stable numeric id for every component tag."""

    def __init__(self) -> None:
        self._ids: dict[str, ComponentID] = {}
        self._next_id: ComponentID = 0

    def register_component(self, component_type: type[ObjectComponent]) -> ComponentID:
        """Return the id of ``component_type``, assigning a new one if needed."""
        existing = self.get_component_id(component_type)
        if existing is not None:
            return existing
        new_id = self._next_id
        self._next_id += 1
        self._ids[component_type.component_tag] = new_id
        return new_id

    def get_component_id(self, component_type: type[ObjectComponent]) -> ComponentID | None:
        """Return the id of ``component_type`` or None if it is not registered."""
        return self._ids.get(component_type.component_tag)


class GameObject:
    """An object in the scene that holds components grouped by type."""

    def __init__(self, register: ComponentRegister) -> None:
        self._register = register
        self._components: dict[ComponentID, list[ObjectComponent]] = {}

    def update(self) -> None:
        for components in self._components.values():
            for component in components:
                component.update()

    def add_component(self, component_type: type[C], *args: Any, **kwargs: Any) -> C:
        """Create a component of ``component_type`` and attach it to this object."""
        component = component_type(*args, **kwargs)
        component_id = self._register.register_component(component_type)
        self._components.setdefault(component_id, []).append(component)
        component._attach(self)
        return component

    def get_component(self, component_type: type[C], index: int = 0) -> C | None:
        """Return the component of that type at ``index``.

        An index past the end gives the last component; None means the
        object has no component of that type.
        """
        component_id = self._register.get_component_id(component_type)
        if component_id is None:
            return None
        components = self._components.get(component_id)
        if not components:
            return None
        return components[min(index, len(components) - 1)]  # type: ignore[return-value]

    def components_of(self, component_id: ComponentID) -> list[ObjectComponent]:
        """All components with the given component id, in the order added."""
        return list(self._components.get(component_id, ()))


class Scene:
    """Owns the game objects and the component register they share."""

    def __init__(self) -> None:
        self._register = ComponentRegister()
        self._game_objects: list[GameObject] = []

    @property
    def component_register(self) -> ComponentRegister:
        return self._register

    @property
    def game_objects(self) -> list[GameObject]:
        return list(self._game_objects)

    def create_game_object(self) -> GameObject:
        obj = GameObject(self._register)
        self._game_objects.append(obj)
        return obj

    def remove_game_object(self, obj: GameObject) -> None:
        """Remove ``obj``; raise ValueError if it is not in the scene."""
        for position, candidate in enumerate(self._game_objects):
            if candidate is obj:
                del self._game_objects[position]
                return
        logger.warning("Could not find the game object to delete")
        raise ValueError("game object is not part of this scene")

    def update_scene(self) -> None:
        for obj in self._game_objects:
            obj.update()

    def get_components_with_type_of(self, component_type: type[C]) -> list[C]:
        """Every component of that type across all game objects."""
        component_id = self._register.get_component_id(component_type)
        if component_id is None:
            return []
        return [
            component  # type: ignore[misc]
            for obj in self._game_objects
            for component in obj.components_of(component_id)
        ]