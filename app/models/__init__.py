from .developer import Developer
from .project import Project
from .agency import Agency
from .agent import Agent
from .action_type import ActionType
from .action_event import ActionEvent

__all__ = [
    "Developer",
    "Project",
    "Agency",
    "Agent",
    "ActionType",
    "ActionEvent",
]
