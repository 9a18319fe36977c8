"""Page path grammar.

Valid page paths look like ``/view/FrontPage``: one operation keyword and one
alphanumeric title, nothing else. The title class is the only check between a
URL and a filesystem path, so it must stay alphanumeric-only; allowing "/" or
"." would let a path escape the pages directory.
"""

import re
from dataclasses import dataclass
from enum import Enum

from plainwiki.core.types import PageTitle


class Operation(str, Enum):
    """Page operations reachable through a validated path."""

    VIEW = "view"
    EDIT = "edit"
    SAVE = "save"


@dataclass(frozen=True)
class Route:
    """Result of a successful path validation."""

    operation: Operation
    title: PageTitle

    @property
    def path(self) -> str:
        return f"/{self.operation.value}/{self.title}"


class Router:
    """Validates request paths against the page path grammar.

    Built once at startup and shared by all handlers.
    """

    def __init__(self) -> None:
        operations = "|".join(op.value for op in Operation)
        self._pattern = re.compile(rf"/({operations})/([a-zA-Z0-9]+)")

    def validate(self, path: str) -> Route | None:
        """Match a path against the grammar.

        Args:
            path: Request path (e.g., "/view/FrontPage")

        Returns:
            Route with operation and title, or None if the path does not match
        """
        match = self._pattern.fullmatch(path)
        if match is None:
            return None
        return Route(operation=Operation(match.group(1)), title=PageTitle(match.group(2)))

    def url_for(self, operation: Operation, title: PageTitle) -> str:
        """Build the path for an operation on a title."""
        return Route(operation=operation, title=title).path
