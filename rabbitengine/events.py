"""Engine events, their categories and the queues that deliver them."""
from __future__ import annotations

import copy
import threading
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Any, Callable, ClassVar

from .input import KeyCode, MouseCode
from .settings import GraphicsSettings


class EventType(Enum):
    """Concrete kinds of events."""

    NONE = 0
    WINDOW_CREATED = 1
    WINDOW_CLOSE_REQUEST = 2
    WINDOW_CLOSE = 3
    WINDOW_RESIZE = 4
    WINDOW_FOCUS = 5
    WINDOW_LOST_FOCUS = 6
    WINDOW_MOVED = 7
    WINDOW_FULLSCREEN_TOGGLE = 8
    KEY_PRESSED = 9
    KEY_RELEASED = 10
    KEY_TYPED = 11
    MOUSE_BUTTON_PRESSED = 12
    MOUSE_BUTTON_RELEASED = 13
    MOUSE_MOVED = 14
    MOUSE_SCROLLED = 15
    GRAPHICS_SETTINGS_CHANGED = 16

    @property
    def label(self) -> str:
        """The display name of the event type, e.g. ``KeyPressed``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class EventCategory(IntFlag):
    """Bit flags grouping event types."""

    NONE = 0
    WINDOW = 1 << 0
    KEYBOARD = 1 << 1
    MOUSE = 1 << 2
    MOUSE_BUTTON = 1 << 3
    APPLICATION = 1 << 4

    INPUT = KEYBOARD | MOUSE | MOUSE_BUTTON
    ALL = WINDOW | INPUT | APPLICATION


class Event:
    """Base of every event; only classes with an event type can be created."""

    event_type: ClassVar[EventType]
    category: ClassVar[EventCategory]
    overwritable: ClassVar[bool] = False

    def __new__(cls, *args: Any, **kwargs: Any) -> Event:
        if getattr(cls, "event_type", None) is None or getattr(cls, "category", None) is None:
            raise TypeError(f"{cls.__name__} is an abstract event class")
        return super().__new__(cls)

    @property
    def name(self) -> str:
        return self.event_type.label

    def is_in_category(self, category: EventCategory) -> bool:
        return bool(self.category & category)

    def clone(self) -> Event:
        return copy.copy(self)

    def allow_overwrite(self) -> bool:
        """Whether a newer event may replace a queued one of the same type."""
        return self.overwritable

    def is_overwritable(self, other: Event) -> bool:
        """Whether this queued event may be replaced by ``other``."""
        return self.overwritable


@dataclass
class EmptyEvent(Event):
    event_type: ClassVar[EventType] = EventType.NONE
    category: ClassVar[EventCategory] = EventCategory.NONE


# Keyboard events


@dataclass
class KeyEvent(Event):
    key_code: KeyCode
    category: ClassVar[EventCategory] = EventCategory.KEYBOARD


@dataclass
class KeyPressedEvent(KeyEvent):
    is_repeat: bool
    event_type: ClassVar[EventType] = EventType.KEY_PRESSED


@dataclass
class KeyReleasedEvent(KeyEvent):
    event_type: ClassVar[EventType] = EventType.KEY_RELEASED


@dataclass
class KeyTypedEvent(KeyEvent):
    event_type: ClassVar[EventType] = EventType.KEY_TYPED


# Mouse events


class MouseEvent(Event):
    """Base of all mouse events."""


@dataclass
class MouseMovedEvent(MouseEvent):
    mouse_x: float
    mouse_y: float
    event_type: ClassVar[EventType] = EventType.MOUSE_MOVED
    category: ClassVar[EventCategory] = EventCategory.MOUSE


@dataclass
class MouseScrolledEvent(MouseEvent):
    offset_x: float
    offset_y: float
    event_type: ClassVar[EventType] = EventType.MOUSE_SCROLLED
    category: ClassVar[EventCategory] = EventCategory.MOUSE


@dataclass
class MouseButtonEvent(MouseEvent):
    mouse_button: MouseCode
    category: ClassVar[EventCategory] = EventCategory.MOUSE | EventCategory.MOUSE_BUTTON


@dataclass
class MouseButtonPressedEvent(MouseButtonEvent):
    event_type: ClassVar[EventType] = EventType.MOUSE_BUTTON_PRESSED


@dataclass
class MouseButtonReleasedEvent(MouseButtonEvent):
    event_type: ClassVar[EventType] = EventType.MOUSE_BUTTON_RELEASED


# Window events


@dataclass
class WindowEvent(Event):
    window_handle: Any
    category: ClassVar[EventCategory] = EventCategory.WINDOW


@dataclass
class WindowCreatedEvent(WindowEvent):
    event_type: ClassVar[EventType] = EventType.WINDOW_CREATED


@dataclass
class WindowResizeEvent(WindowEvent):
    width: int
    height: int
    is_window_already_resized: bool = False
    event_type: ClassVar[EventType] = EventType.WINDOW_RESIZE
    overwritable: ClassVar[bool] = True

    def is_overwritable(self, other: Event) -> bool:
        return isinstance(other, WindowEvent) and other.window_handle == self.window_handle


@dataclass
class WindowCloseEvent(WindowEvent):
    event_type: ClassVar[EventType] = EventType.WINDOW_CLOSE


@dataclass
class WindowCloseRequestEvent(WindowEvent):
    event_type: ClassVar[EventType] = EventType.WINDOW_CLOSE_REQUEST


@dataclass
class WindowOnFocusEvent(WindowEvent):
    event_type: ClassVar[EventType] = EventType.WINDOW_FOCUS


@dataclass
class WindowLostFocusEvent(WindowEvent):
    event_type: ClassVar[EventType] = EventType.WINDOW_LOST_FOCUS


@dataclass
class WindowFullscreenToggleEvent(WindowEvent):
    event_type: ClassVar[EventType] = EventType.WINDOW_FULLSCREEN_TOGGLE
    overwritable: ClassVar[bool] = True

    def is_overwritable(self, other: Event) -> bool:
        return isinstance(other, WindowEvent) and other.window_handle == self.window_handle


# Application events


class ApplicationEvent(Event):
    """Base of events raised by the application itself."""

    category: ClassVar[EventCategory] = EventCategory.APPLICATION


@dataclass
class GraphicsSettingsChangedEvent(ApplicationEvent):
    new_settings: GraphicsSettings
    old_settings: GraphicsSettings
    event_type: ClassVar[EventType] = EventType.GRAPHICS_SETTINGS_CHANGED


def bind_event(event_type: type[Event], func: Callable[[Any], Any], event: Event) -> bool:
    """Call ``func`` with ``event`` if it is of ``event_type``; report whether it was."""
    if event.event_type is event_type.event_type:
        func(event)
        return True
    return False


class EventManager:
    """Hands inserted events to every listener registered for their category."""

    def __init__(self) -> None:
        self._listeners: list[EventListener] = []

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        self._listeners = [other for other in self._listeners if other is not listener]

    def insert_event(self, event: Event) -> None:
        for listener in list(self._listeners):
            if listener.listens_to_category(event.category):
                listener.add_event(event)


class EventListener:
    """Queues events of chosen categories until ``process_events`` handles them.

    With ``double_queue`` the listener alternates between two queues, so events
    can keep arriving while a slow handler works through the previous batch.
    """

    def __init__(
        self,
        category: EventCategory | int,
        double_queue: bool = False,
        manager: EventManager | None = None,
        handler: Callable[[Event], bool] | None = None,
    ) -> None:
        self.category = EventCategory(category)
        self.double_queue = double_queue
        self._handler = handler
        self._manager = manager
        self._queue_cycle = False
        self._queues: tuple[list[Event], list[Event]] = ([], [])
        self._lock = threading.RLock()
        if manager is not None:
            manager.add_listener(self)

    def __enter__(self) -> EventListener:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def listens_to_category(self, category: EventCategory | int) -> bool:
        return bool(self.category & category)

    def add_event(self, event: Event) -> None:
        """Queue a copy of ``event``, replacing an overwritable queued one."""
        with self._lock:
            if self.double_queue and self._queue_cycle:
                queue = self._queues[1]
            else:
                queue = self._queues[0]

            if event.allow_overwrite():
                for position, other in enumerate(queue):
                    if other.event_type is event.event_type and other.is_overwritable(event):
                        del queue[position]
                        break

            queue.append(event.clone())

    def process_events(self) -> None:
        """Handle queued events; those not handled stay for the next call."""
        if self.double_queue:
            with self._lock:
                self._queue_cycle = not self._queue_cycle
                queue = self._queues[0] if self._queue_cycle else self._queues[1]
            self._drain(queue)
        else:
            with self._lock:
                self._drain(self._queues[0])

    def on_event(self, event: Event) -> bool:
        """Handle one event; return False to keep it for the next round."""
        if self._handler is None:
            return True
        return bool(self._handler(event))

    def close(self) -> None:
        """Stop receiving events from the manager."""
        if self._manager is not None:
            self._manager.remove_listener(self)
            self._manager = None

    def _drain(self, queue: list[Event]) -> None:
        pending = queue[:]
        del queue[:]
        kept = [event for event in pending if not self.on_event(event)]
        queue[:0] = kept