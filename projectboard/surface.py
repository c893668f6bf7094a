"""
Rendering surface: a small element tree the views draw into.

The views only ever use the narrow RenderSurface contract:
instantiate a named template, look an element up by id, insert an element
next to a host, clear a container, and raise a user-facing alert.
MemorySurface is the in-process implementation; the HTTP server renders
it to HTML.
"""
import html
import logging
from collections import deque
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol, Union

logger = logging.getLogger(__name__)

HOST_ID = "app"
MAX_ALERTS = 100

VOID_TAGS = {"input", "br", "hr", "img"}


class UnknownTemplateError(KeyError):
    """Raised when a template id is not registered on the surface."""
    pass


class UnknownElementError(KeyError):
    """Raised when no element with the requested id is attached."""
    pass


EventHandler = Callable[[Any], None]


class Element:
    """One node of the rendered tree."""

    def __init__(
        self,
        tag: str,
        id: str = "",
        text: str = "",
        classes: Optional[List[str]] = None,
        attrs: Optional[Dict[str, str]] = None,
        children: Optional[List["Element"]] = None,
    ):
        self.tag = tag
        self.id = id
        self.text = text
        self.value = ""
        self.classes = set(classes or [])
        self.attrs = dict(attrs or {})
        self.parent: Optional[Element] = None
        self.children: List[Element] = []
        self._listeners: Dict[str, List[EventHandler]] = {}
        for child in children or []:
            self.append(child)

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident}>"

    # ── Tree ──

    def append(self, child: "Element", at_start: bool = False) -> None:
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        if at_start:
            self.children.insert(0, child)
        else:
            self.children.append(child)

    def remove_children(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    def iter(self) -> Iterator["Element"]:
        """Depth-first walk including self."""
        yield self
        for child in self.children:
            yield from child.iter()

    def query(self, selector: str) -> Optional["Element"]:
        """First descendant matching '#id', '.class' or a tag name."""
        for node in self.iter():
            if node is self:
                continue
            if selector.startswith("#") and node.id == selector[1:]:
                return node
            if selector.startswith(".") and selector[1:] in node.classes:
                return node
            if node.tag == selector:
                return node
        return None

    def clone(self) -> "Element":
        """Deep copy of the subtree, detached and without listeners."""
        copy = Element(
            self.tag,
            id=self.id,
            text=self.text,
            classes=list(self.classes),
            attrs=self.attrs,
            children=[c.clone() for c in self.children],
        )
        copy.value = self.value
        return copy

    # ── Events ──

    def add_event_listener(self, event_type: str, handler: EventHandler) -> None:
        self._listeners.setdefault(event_type, []).append(handler)

    def dispatch(self, event_type: str, event: Any) -> None:
        """Deliver an event here, then bubble it up through the ancestors."""
        if getattr(event, "target", None) is None and hasattr(event, "target"):
            event.target = self
        node: Optional[Element] = self
        while node is not None:
            for handler in list(node._listeners.get(event_type, [])):
                handler(event)
            if getattr(event, "propagation_stopped", False):
                return
            node = node.parent

    # ── Output ──

    def to_html(self, indent: int = 0) -> str:
        pad = "  " * indent
        attrs = {}
        if self.id:
            attrs["id"] = self.id
        if self.classes:
            attrs["class"] = " ".join(sorted(self.classes))
        attrs.update(self.attrs)
        if self.tag == "input" and self.value:
            attrs["value"] = self.value
        rendered = "".join(
            f' {name}="{html.escape(str(val), quote=True)}"' for name, val in attrs.items()
        )
        if self.tag in VOID_TAGS:
            return f"{pad}<{self.tag}{rendered}>"
        body = html.escape(self.value if self.tag == "textarea" else self.text)
        if not self.children:
            return f"{pad}<{self.tag}{rendered}>{body}</{self.tag}>"
        inner = "\n".join(child.to_html(indent + 1) for child in self.children)
        return f"{pad}<{self.tag}{rendered}>{body}\n{inner}\n{pad}</{self.tag}>"


class RenderSurface(Protocol):
    """What views need from whatever draws them."""

    def instantiate(self, template_id: str) -> Element: ...

    def get_element(self, element_id: str) -> Element: ...

    def insert_adjacent(self, host: Element, element: Element, at_start: bool) -> None: ...

    def clear_children(self, container: Element) -> None: ...

    def alert(self, message: str) -> None: ...


def default_templates() -> Dict[str, Element]:
    """The three templates the board is built from."""

    def field(label: str, control: Element) -> Element:
        return Element(
            "div",
            classes=["form-control"],
            children=[Element("label", text=label, attrs={"for": control.id}), control],
        )

    project_input = Element(
        "form",
        children=[
            field("Title", Element("input", id="title", attrs={"type": "text"})),
            field("Description", Element("textarea", id="description", attrs={"rows": "3"})),
            field(
                "People",
                Element(
                    "input",
                    id="people",
                    attrs={"type": "number", "step": "1", "min": "1", "max": "5"},
                ),
            ),
            Element("button", text="ADD PROJECT", attrs={"type": "submit"}),
        ],
    )
    project_list = Element(
        "section",
        classes=["projects"],
        children=[Element("header", children=[Element("h2")]), Element("ul")],
    )
    single_project = Element(
        "li",
        attrs={"draggable": "true"},
        children=[Element("h2"), Element("h3"), Element("p")],
    )
    return {
        "project-input": project_input,
        "project-list": project_list,
        "single-project": single_project,
    }


class MemorySurface:
    """RenderSurface backed by an in-memory Element tree."""

    def __init__(self, templates: Optional[Dict[str, Element]] = None, host_id: str = HOST_ID):
        self.templates = templates if templates is not None else default_templates()
        self.root = Element("div", id=host_id)
        self.alerts: deque = deque(maxlen=MAX_ALERTS)  # most recent last

    def instantiate(self, template_id: str) -> Element:
        try:
            template = self.templates[template_id]
        except KeyError:
            raise UnknownTemplateError(template_id) from None
        return template.clone()

    def find(self, element_id: str) -> Optional[Element]:
        for node in self.root.iter():
            if node.id == element_id:
                return node
        return None

    def get_element(self, element_id: str) -> Element:
        node = self.find(element_id)
        if node is None:
            raise UnknownElementError(element_id)
        return node

    def insert_adjacent(self, host: Element, element: Element, at_start: bool) -> None:
        host.append(element, at_start=at_start)

    def clear_children(self, container: Element) -> None:
        container.remove_children()

    def alert(self, message: str) -> None:
        logger.warning(f"Alert: {message}")
        self.alerts.append(message)

    def to_html(self) -> str:
        return self.root.to_html()


class Mount:
    """
    Construct an element from a template and attach it to a host.

    Views compose a Mount instead of inheriting a rendering base class.
    """

    def __init__(
        self,
        surface: RenderSurface,
        template_id: str,
        host: Union[str, Element],
        at_start: bool,
        element_id: Optional[str] = None,
    ):
        self.surface = surface
        self.host = host if isinstance(host, Element) else surface.get_element(host)
        self.element = surface.instantiate(template_id)
        if element_id:
            self.element.id = element_id
        surface.insert_adjacent(self.host, self.element, at_start)

    def query(self, selector: str) -> Element:
        node = self.element.query(selector)
        if node is None:
            raise UnknownElementError(selector)
        return node
