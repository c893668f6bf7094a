"""Tests for the in-memory rendering surface."""
import pytest

from projectboard.dnd import Event
from projectboard.surface import (
    Element,
    MAX_ALERTS,
    MemorySurface,
    Mount,
    UnknownElementError,
    UnknownTemplateError,
)


def test_instantiate_returns_independent_copies(surface):
    a = surface.instantiate("single-project")
    b = surface.instantiate("single-project")
    a.query("h2").text = "changed"
    assert b.query("h2").text == ""
    assert surface.templates["single-project"].query("h2").text == ""


def test_unknown_template(surface):
    with pytest.raises(UnknownTemplateError):
        surface.instantiate("nope")


def test_unknown_element(surface):
    with pytest.raises(UnknownElementError):
        surface.get_element("nope")


def test_mount_inserts_at_start_or_end(surface):
    Mount(surface, "project-list", "app", at_start=False, element_id="first")
    Mount(surface, "project-list", "app", at_start=False, element_id="second")
    Mount(surface, "project-input", "app", at_start=True, element_id="form")

    assert [c.id for c in surface.root.children] == ["form", "first", "second"]
    assert surface.get_element("second").parent is surface.root


def test_clear_children_detaches(surface):
    host = surface.root
    child = Element("p")
    surface.insert_adjacent(host, child, at_start=False)
    surface.clear_children(host)
    assert host.children == []
    assert child.parent is None


def test_alert_is_recorded(surface):
    surface.alert("Invalid input, please try again.")
    assert list(surface.alerts) == ["Invalid input, please try again."]


def test_events_bubble_to_ancestors():
    outer = Element("section")
    inner = Element("li")
    outer.append(inner)
    seen = []
    inner.add_event_listener("drop", lambda e: seen.append("inner"))
    outer.add_event_listener("drop", lambda e: seen.append("outer"))

    event = Event()
    inner.dispatch("drop", event)

    assert seen == ["inner", "outer"]
    assert event.target is inner


def test_stop_propagation():
    outer = Element("section")
    inner = Element("li")
    outer.append(inner)
    seen = []
    inner.add_event_listener("drop", lambda e: e.stop_propagation())
    outer.add_event_listener("drop", lambda e: seen.append("outer"))

    inner.dispatch("drop", Event())
    assert seen == []


def test_to_html_escapes_text():
    surface = MemorySurface()
    card = Element("li", id="p1", text="<script>", attrs={"draggable": "true"})
    surface.insert_adjacent(surface.root, card, at_start=False)

    rendered = surface.to_html()
    assert '<div id="app">' in rendered
    assert '<li id="p1" draggable="true">&lt;script&gt;</li>' in rendered


def test_to_html_renders_field_values():
    field = Element("input", id="title", attrs={"type": "text"})
    field.value = 'say "hi"'
    assert field.to_html() == '<input id="title" type="text" value="say &quot;hi&quot;">'


def test_alerts_keep_only_the_most_recent():
    surface = MemorySurface()
    for n in range(MAX_ALERTS + 5):
        surface.alert(f"alert {n}")
    assert len(surface.alerts) == MAX_ALERTS
    assert surface.alerts[0] == "alert 5"
    assert surface.alerts[-1] == f"alert {MAX_ALERTS + 4}"


def test_mount_accepts_host_element(surface, monkeypatch):
    """Passing the host element skips the id lookup"""
    host = surface.root
    monkeypatch.setattr(surface, "get_element", lambda _: pytest.fail("looked up host by id"))
    mount = Mount(surface, "single-project", host, at_start=False, element_id="p1")
    assert mount.element.parent is host
