"""
Board views: project cards, the two status lanes, and the input form.

Views never touch a Project's fields beyond reading them; every change
goes through ProjectState, and every lane redraws itself from the
snapshot it is notified with.
"""
import logging
from typing import List, Optional, Tuple, Union

from .config import BoardConfig
from .dnd import (
    DragEvent,
    DragPayload,
    DropZoneState,
    Event,
    bind_draggable,
    bind_drop_target,
)
from .schema import Project, ProjectStatus, Snapshot
from .state import ProjectState
from .surface import HOST_ID, Element, Mount, RenderSurface
from .validation import ValidationError, parse_people, project_rules, validate_all

logger = logging.getLogger(__name__)

DROPPABLE_CLASS = "droppable"


class ProjectItem:
    """One rendered project card. Draggable."""

    def __init__(self, surface: RenderSurface, host: Union[str, Element], project: Project):
        self.project = project
        self.mount = Mount(surface, "single-project", host, at_start=False, element_id=project.id)
        self.element = self.mount.element
        self._render_content()
        bind_draggable(self.element, self)

    def on_drag_start(self, event: DragEvent) -> None:
        DragPayload.for_project(self.project.id).write(event.data_transfer)

    def on_drag_end(self, event: DragEvent) -> None:
        logger.debug(f"drag end: {self.project.id}")

    def _render_content(self) -> None:
        self.mount.query("h2").text = self.project.title
        self.mount.query("h3").text = f"{self.project.persons} assigned"
        self.mount.query("p").text = self.project.description


class ProjectList:
    """
    One status lane. Listens to the store and accepts drops.

    Every notification replaces all of the lane's cards; there is no
    incremental diffing.
    """

    def __init__(self, surface: RenderSurface, state: ProjectState, status: ProjectStatus):
        self.surface = surface
        self.state = state
        self.status = ProjectStatus.from_str(status)
        self.assigned_projects: Snapshot = ()
        self.items: List[ProjectItem] = []
        self.zone_state = DropZoneState.IDLE

        lane = self.status.value
        self.mount = Mount(surface, "project-list", HOST_ID, at_start=False, element_id=f"{lane}-projects")
        self.element = self.mount.element
        self.list_element = self.mount.query("ul")
        self.list_element.id = f"{lane}-projects-list"
        self.mount.query("h2").text = f"{lane.upper()} PROJECTS"

        state.add_listener(self._on_projects_changed)
        bind_drop_target(self.element, self)

    @property
    def rendered_ids(self) -> Tuple[str, ...]:
        return tuple(child.id for child in self.list_element.children)

    @property
    def droppable(self) -> bool:
        return DROPPABLE_CLASS in self.list_element.classes

    # ── Listener ──

    def _on_projects_changed(self, projects: Snapshot) -> None:
        self.assigned_projects = projects
        self.render_projects()

    def render_projects(self) -> None:
        self.surface.clear_children(self.list_element)
        self.items = []
        for project in self.assigned_projects:
            if project.status != self.status:
                continue
            self.items.append(ProjectItem(self.surface, self.list_element, project))

    # ── Drop target ──

    def on_drag_over(self, event: DragEvent) -> None:
        if not DragPayload.accepts(event.data_transfer):
            return
        event.prevent_default()
        self.list_element.classes.add(DROPPABLE_CLASS)
        self.zone_state = DropZoneState.HOVERING

    def on_drop(self, event: DragEvent) -> None:
        payload = DragPayload.from_transfer(event.data_transfer)
        if payload is None:
            logger.debug(f"Ignoring drop on {self.status.value} lane: types={event.data_transfer.types}")
            return
        event.prevent_default()
        event.data_transfer.drop_effect = "move"
        self._reset_zone()
        self.state.move_project(payload.project_id, self.status)

    def on_drag_leave(self, event: DragEvent) -> None:
        self._reset_zone()

    def _reset_zone(self) -> None:
        self.list_element.classes.discard(DROPPABLE_CLASS)
        self.zone_state = DropZoneState.IDLE


class ProjectInput:
    """The creation form. Adds a project only when every field validates."""

    def __init__(
        self,
        surface: RenderSurface,
        state: ProjectState,
        config: Optional[BoardConfig] = None,
    ):
        self.surface = surface
        self.state = state
        self.config = config or BoardConfig()
        self.mount = Mount(surface, "project-input", HOST_ID, at_start=True, element_id="user-input")
        self.element = self.mount.element
        self.title_input: Element = self.mount.query("#title")
        self.description_input: Element = self.mount.query("#description")
        self.people_input: Element = self.mount.query("#people")
        self.element.add_event_listener("submit", self._on_submit)

    def fill(self, title="", description="", people="") -> None:
        """Set the raw field values, as a user typing into the form would."""
        self.title_input.value = "" if title is None else str(title)
        self.description_input.value = "" if description is None else str(description)
        self.people_input.value = "" if people is None else str(people)

    def submit(self) -> Optional[Project]:
        """
        Validate the fields and add the project.

        On failure the user is alerted, nothing changes and the fields keep
        their values. Returns the new project, or None.
        """
        try:
            title, description, people = self._gather_inputs()
        except ValidationError as e:
            logger.info(f"Rejected project input: invalid {', '.join(e.fields)}")
            self.surface.alert(str(e))
            return None
        project = self.state.add_project(title, description, people)
        self._clear_inputs()
        return project

    def _on_submit(self, event: Event) -> None:
        event.prevent_default()
        self.submit()

    def _gather_inputs(self) -> Tuple[str, str, int]:
        title = self.title_input.value
        description = self.description_input.value
        people = parse_people(self.people_input.value)
        cfg = self.config
        validate_all(
            project_rules(
                title,
                description,
                people,
                description_min_length=cfg.description_min_length,
                description_max_length=cfg.description_max_length,
                people_min=cfg.people_min,
                people_max=cfg.people_max,
            )
        )
        return title.strip(), description.strip(), people

    def _clear_inputs(self) -> None:
        self.title_input.value = ""
        self.description_input.value = ""
        self.people_input.value = ""
