"""Tests for the drag transfer channel, payloads and the gesture helper."""
from projectboard.dnd import (
    PAYLOAD_FORMAT,
    DataTransfer,
    DragEvent,
    DragPayload,
    Draggable,
    DropTarget,
    bind_draggable,
    bind_drop_target,
    drag_and_drop,
)
from projectboard.schema import ProjectStatus
from projectboard.surface import Element


class RecordingTarget:
    """Drop target that accepts anything and records the hooks it saw."""

    def __init__(self, accept=True):
        self.accept = accept
        self.calls = []

    def on_drag_over(self, event):
        self.calls.append("dragover")
        if self.accept:
            event.prevent_default()

    def on_drop(self, event):
        self.calls.append(("drop", event.data_transfer.get_data(PAYLOAD_FORMAT)))

    def on_drag_leave(self, event):
        self.calls.append("dragleave")


class RecordingSource:
    def __init__(self, project_id):
        self.project_id = project_id
        self.calls = []

    def on_drag_start(self, event):
        self.calls.append("dragstart")
        DragPayload.for_project(self.project_id).write(event.data_transfer)

    def on_drag_end(self, event):
        self.calls.append("dragend")


class TestDataTransfer:

    def test_types_keep_insertion_order(self):
        t = DataTransfer()
        t.set_data("text/uri-list", "http://x")
        t.set_data(PAYLOAD_FORMAT, "p1")
        assert t.types == ["text/uri-list", PAYLOAD_FORMAT]

    def test_missing_format_reads_empty(self):
        assert DataTransfer().get_data(PAYLOAD_FORMAT) == ""


class TestDragPayload:

    def test_write_publishes_id_and_move_effect(self):
        t = DataTransfer()
        DragPayload.for_project("p1").write(t)
        assert t.get_data(PAYLOAD_FORMAT) == "p1"
        assert t.effect_allowed == "move"

    def test_round_trip(self):
        t = DataTransfer()
        DragPayload.for_project("p1").write(t)
        assert DragPayload.from_transfer(t) == DragPayload(PAYLOAD_FORMAT, "p1")

    def test_wrong_format_is_rejected(self):
        t = DataTransfer()
        t.set_data("text/html", "p1")
        assert DragPayload.from_transfer(t) is None
        assert not DragPayload.accepts(t)

    def test_payload_format_must_come_first(self):
        t = DataTransfer()
        t.set_data("text/html", "<b>p1</b>")
        t.set_data(PAYLOAD_FORMAT, "p1")
        assert DragPayload.from_transfer(t) is None

    def test_empty_id_is_rejected(self):
        t = DataTransfer()
        t.set_data(PAYLOAD_FORMAT, "   ")
        assert DragPayload.from_transfer(t) is None

    def test_no_transfer(self):
        assert DragPayload.from_transfer(None) is None


class TestGesture:

    def test_accepted_drop(self):
        source_el, target_el = Element("li"), Element("section")
        source, target = RecordingSource("p1"), RecordingTarget()
        bind_draggable(source_el, source)
        bind_drop_target(target_el, target)

        assert drag_and_drop(source_el, target_el) is True
        assert source.calls == ["dragstart", "dragend"]
        assert target.calls == ["dragover", ("drop", "p1")]

    def test_refused_drop_leaves(self):
        source_el, target_el = Element("li"), Element("section")
        source, target = RecordingSource("p1"), RecordingTarget(accept=False)
        bind_draggable(source_el, source)
        bind_drop_target(target_el, target)

        assert drag_and_drop(source_el, target_el) is False
        assert target.calls == ["dragover", "dragleave"]
        assert source.calls == ["dragstart", "dragend"]

    def test_capabilities_are_protocols(self, board):
        project = board.state.add_project("X", "12345", 2)
        item = board.lane(ProjectStatus.ACTIVE).items[0]
        lane = board.lane(ProjectStatus.ACTIVE)

        assert item.project.id == project.id
        assert isinstance(item, Draggable)
        assert isinstance(lane, DropTarget)
        assert not isinstance(item, DropTarget)
        assert isinstance(RecordingTarget(), DropTarget)

    def test_drag_event_defaults(self):
        event = DragEvent()
        assert event.data_transfer.types == []
        assert not event.default_prevented
