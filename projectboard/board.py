"""
Board bootstrap: one store, one input form, two lanes.

The store is created here once and injected into every view, so all of
them observe and mutate the same projects.
"""
import logging
from typing import Dict, Optional

from .config import BoardConfig
from .dnd import DataTransfer, deliver_transfer, drag_and_drop
from .schema import ProjectStatus
from .state import ProjectState
from .surface import MemorySurface
from .views import ProjectInput, ProjectList

logger = logging.getLogger(__name__)


class Board:
    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        surface: Optional[MemorySurface] = None,
        state: Optional[ProjectState] = None,
    ):
        self.config = config or BoardConfig()
        self.surface = surface if surface is not None else MemorySurface()
        self.state = state if state is not None else ProjectState()
        self.project_input = ProjectInput(self.surface, self.state, self.config)
        self.lanes: Dict[ProjectStatus, ProjectList] = {
            status: ProjectList(self.surface, self.state, status)
            for status in (ProjectStatus.ACTIVE, ProjectStatus.FINISHED)
        }
        logger.info("Board ready")

    def lane(self, status) -> ProjectList:
        return self.lanes[ProjectStatus.from_str(status)]

    def drop_transfer(self, status, transfer: DataTransfer) -> bool:
        """Release an externally built transfer (e.g. relayed from a browser) on a lane."""
        return deliver_transfer(self.lane(status).element, transfer)

    def drag_project(self, project_id: str, status) -> bool:
        """
        Drag a rendered card onto a lane.

        Returns False when no card with that id is on the board.
        """
        source = self.surface.find(project_id)
        if source is None:
            logger.debug(f"No card rendered for {project_id!r}")
            return False
        return drag_and_drop(source, self.lane(status).element)

    def lane_contents(self) -> Dict[str, list]:
        return {status.value: list(lane.rendered_ids) for status, lane in self.lanes.items()}
