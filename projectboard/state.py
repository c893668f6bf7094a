"""
Project state: the single in-memory source of truth for all projects.

Create one ProjectState per process and hand it to every view that needs
it. Listeners are called synchronously, in registration order, with a
snapshot of the whole sequence after each mutation.
"""
import logging
from typing import Callable, Dict, List, Optional, Union

from .schema import Project, ProjectStatus, Snapshot, make_project_id

logger = logging.getLogger(__name__)

Listener = Callable[[Snapshot], None]


class ProjectState:
    """Owns the ordered project sequence and the listener registry."""

    def __init__(self, id_factory: Callable[[], str] = make_project_id):
        self._projects: List[Project] = []
        self._listeners: List[Listener] = []
        self._id_factory = id_factory

    # ── Queries ──

    @property
    def projects(self) -> Snapshot:
        """Current snapshot (the same shape listeners receive)."""
        return tuple(self._projects)

    def get(self, project_id: str) -> Optional[Project]:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def counts(self) -> Dict[str, int]:
        stats = {"total": len(self._projects)}
        for status in ProjectStatus:
            stats[status.value] = sum(1 for p in self._projects if p.status == status)
        return stats

    # ── Subscription ──

    def add_listener(self, listener: Listener) -> None:
        """
        Register a callback for every future mutation.

        The listener is not replayed against the current state.
        """
        self._listeners.append(listener)

    # ── Mutation ──

    def add_project(self, title: str, description: str, people: int) -> Project:
        """
        Append a new active project and notify listeners.

        Callers validate first; this never fails.
        """
        project = Project(
            id=self._fresh_id(),
            title=title,
            description=description,
            people=people,
            status=ProjectStatus.ACTIVE,
        )
        self._projects.append(project)
        logger.info(f"Added project {project.id}: {project.title!r}")
        self._notify()
        return project

    def move_project(self, project_id: str, new_status: Union[ProjectStatus, str]) -> bool:
        """
        Move a project to another lane.

        Unknown ids are ignored. Moving to the current status is a no-op and
        does not notify. Returns True when the status actually changed.
        """
        status = ProjectStatus.from_str(new_status)
        for index, project in enumerate(self._projects):
            if project.id != project_id:
                continue
            if project.status == status:
                logger.debug(f"Project {project_id} already {status.value}")
                return False
            self._projects[index] = project.with_status(status)
            logger.info(
                f"Moved project {project_id}: {project.status.value} → {status.value}"
            )
            self._notify()
            return True

        logger.debug(f"Ignoring move of unknown project id {project_id!r}")
        return False

    # ── Internals ──

    def _fresh_id(self) -> str:
        taken = {p.id for p in self._projects}
        project_id = self._id_factory()
        while project_id in taken:
            project_id = self._id_factory()
        return project_id

    def _notify(self) -> None:
        """Call every listener with its own snapshot, in registration order."""
        for listener in self._listeners:
            try:
                listener(tuple(self._projects))
            except Exception:
                logger.exception(f"Listener {listener!r} failed")
