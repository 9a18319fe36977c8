"""File-based page storage.

Storage structure:
    pages/
    ├── FrontPage.txt      # Raw page body
    └── Another.txt

One file per title. Titles reaching this module have already been validated
by the router, so they never contain path separators.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from plainwiki.core.types import PageTitle

logger = logging.getLogger(__name__)

PAGE_EXTENSION = ".txt"
PAGE_FILE_MODE = 0o600


class PageNotFoundError(Exception):
    """Raised when no stored page exists for a title."""

    def __init__(self, title: str) -> None:
        super().__init__(f"Page not found: {title}")
        self.title = title


@dataclass
class Page:
    """A named plain-text document."""

    title: PageTitle
    body: bytes = b""

    @property
    def text(self) -> str:
        """Body decoded for display; undecodable bytes are replaced."""
        return self.body.decode("utf-8", errors="replace")


@dataclass
class IndexPage:
    """Index view listing stored page titles."""

    title: str
    titles: list[str] = field(default_factory=list)


class PageStore:
    """Reads and writes pages as files in a single directory.

    No locking is done: concurrent saves of one title race and the last
    writer wins.
    """

    def __init__(self, pages_dir: Path) -> None:
        """Initialize store with directory path.

        Args:
            pages_dir: Directory holding one file per page
        """
        self._pages_dir = pages_dir

    @property
    def pages_dir(self) -> Path:
        """Directory holding page files."""
        return self._pages_dir

    def path_for(self, title: PageTitle) -> Path:
        """Return the storage location for a title."""
        return self._pages_dir / f"{title}{PAGE_EXTENSION}"

    def save(self, page: Page) -> None:
        """Write a page, replacing any existing content.

        The file is created owner read/write only when absent.

        Args:
            page: Page to store

        Raises:
            OSError: If the file cannot be written
        """
        path = self.path_for(page.title)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PAGE_FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            f.write(page.body)
        logger.debug(f"Saved page {page.title} ({len(page.body)} bytes)")

    def load(self, title: PageTitle) -> Page:
        """Read a stored page.

        Args:
            title: Validated page title

        Returns:
            Page with the stored body

        Raises:
            PageNotFoundError: If no file exists for the title
            OSError: If the file exists but cannot be read
        """
        try:
            body = self.path_for(title).read_bytes()
        except FileNotFoundError as e:
            raise PageNotFoundError(title) from e
        return Page(title=title, body=body)

    def list_titles(self) -> list[str]:
        """List titles of all stored pages.

        Each directory entry is cut at its first ".", so a file named
        "a.b.txt" is listed as "a". Results are in name order.

        Returns:
            Titles derived from the directory entries

        Raises:
            OSError: If the pages directory cannot be read
        """
        names = sorted(os.listdir(self._pages_dir))
        return [name.split(".", 1)[0] for name in names]
