"""Task that shows gigs in MixRadio."""

from typing import Optional

from .base import Launcher, TaskBase
from .launch import WEB_URI


class ShowGigsTask(TaskBase):
    """Shows gigs, optionally filtered by search terms such as an artist or city."""

    def __init__(self, search_terms: Optional[str] = None, launcher: Optional[Launcher] = None) -> None:
        super().__init__(launcher)
        self.search_terms = search_terms

    def show(self) -> None:
        if self.search_terms:
            self.launch(f"nokia-music://search/gigs/?term={self.search_terms}", WEB_URI)
        else:
            self.launch("nokia-music://show/gigs/", WEB_URI)
