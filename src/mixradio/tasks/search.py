"""Task that shows MixRadio search results."""

from typing import Optional

from ..models.types import Artist
from .base import Launcher, TaskBase


class MusicSearchTask(TaskBase):
    """Shows search results for a term, falling back to an artist mix on the web."""

    def __init__(self, search_terms: Optional[str] = None, launcher: Optional[Launcher] = None) -> None:
        super().__init__(launcher)
        self.search_terms = search_terms

    def show(self) -> None:
        """
        Raises:
            ValueError: If no search terms are set
        """
        if not self.search_terms:
            raise ValueError("Please set the search terms before calling show()")

        self.launch(
            f"nokia-music://search/anything/?term={self.search_terms}",
            Artist.WEB_PLAY_URI_BY_NAME.format(self._strip_ampersands(self.search_terms)),
        )
