"""
Drag-and-drop protocol.

A drag carries one thing across views: the project id, written to the
gesture's DataTransfer under the text/plain format. The receiving lane
re-resolves the project through the store; nothing else travels.

Drop zone lifecycle:
  idle → hovering (compatible payload) → dropped → idle
                                       → idle (drag left)
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol, runtime_checkable

from .surface import Element

logger = logging.getLogger(__name__)

PAYLOAD_FORMAT = "text/plain"


class DataTransfer:
    """Per-gesture transfer channel between drag source and drop target."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self.effect_allowed = "uninitialized"
        self.drop_effect = "none"

    @property
    def types(self) -> List[str]:
        """Declared formats, in the order they were set."""
        return list(self._data)

    def set_data(self, fmt: str, data: str) -> None:
        self._data[fmt] = str(data)

    def get_data(self, fmt: str) -> str:
        return self._data.get(fmt, "")

    def clear_data(self) -> None:
        self._data.clear()


@dataclass
class Event:
    """A dispatched UI event. Handlers may cancel its default action."""
    target: Optional[Element] = None
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass
class DragEvent(Event):
    data_transfer: DataTransfer = field(default_factory=DataTransfer)


@dataclass(frozen=True)
class DragPayload:
    """The only message a drag carries: a format tag and a project id."""
    format: str
    project_id: str

    @classmethod
    def for_project(cls, project_id: str) -> "DragPayload":
        return cls(format=PAYLOAD_FORMAT, project_id=project_id)

    @staticmethod
    def accepts(transfer: Optional[DataTransfer]) -> bool:
        """Whether the transfer declares the payload format first."""
        return bool(transfer and transfer.types and transfer.types[0] == PAYLOAD_FORMAT)

    @classmethod
    def from_transfer(cls, transfer: Optional[DataTransfer]) -> Optional["DragPayload"]:
        """Read a payload, or None when the format tag or data is wrong."""
        if not cls.accepts(transfer):
            return None
        project_id = transfer.get_data(PAYLOAD_FORMAT).strip()
        if not project_id:
            return None
        return cls(format=PAYLOAD_FORMAT, project_id=project_id)

    def write(self, transfer: DataTransfer) -> None:
        transfer.set_data(self.format, self.project_id)
        transfer.effect_allowed = "move"


@runtime_checkable
class Draggable(Protocol):
    """Something a drag can start from."""

    def on_drag_start(self, event: DragEvent) -> None: ...

    def on_drag_end(self, event: DragEvent) -> None: ...


@runtime_checkable
class DropTarget(Protocol):
    """Something a drag can be released onto."""

    def on_drag_over(self, event: DragEvent) -> None: ...

    def on_drop(self, event: DragEvent) -> None: ...

    def on_drag_leave(self, event: DragEvent) -> None: ...


class DropZoneState(Enum):
    IDLE = "idle"
    HOVERING = "hovering"


def bind_draggable(element: Element, source: Draggable) -> None:
    element.add_event_listener("dragstart", source.on_drag_start)
    element.add_event_listener("dragend", source.on_drag_end)


def bind_drop_target(element: Element, target: DropTarget) -> None:
    element.add_event_listener("dragover", target.on_drag_over)
    element.add_event_listener("dragleave", target.on_drag_leave)
    element.add_event_listener("drop", target.on_drop)


def deliver_transfer(target: Element, transfer: DataTransfer) -> bool:
    """
    Hover a transfer over a target element and release it there.

    The drop is only delivered if some dragover handler accepted it by
    preventing the default action; otherwise the drag leaves. Returns
    True when a drop event was dispatched.
    """
    over = DragEvent(data_transfer=transfer)
    target.dispatch("dragover", over)
    if not over.default_prevented:
        target.dispatch("dragleave", DragEvent(data_transfer=transfer))
        logger.debug(f"Drop on {target!r} rejected: types={transfer.types}")
        return False
    drop = DragEvent(data_transfer=transfer)
    target.dispatch("drop", drop)
    return True


def drag_and_drop(
    source: Element,
    target: Element,
    transfer: Optional[DataTransfer] = None,
) -> bool:
    """Play one whole gesture: dragstart, dragover, drop or dragleave, dragend."""
    transfer = transfer if transfer is not None else DataTransfer()
    source.dispatch("dragstart", DragEvent(data_transfer=transfer))
    try:
        return deliver_transfer(target, transfer)
    finally:
        source.dispatch("dragend", DragEvent(data_transfer=transfer))
