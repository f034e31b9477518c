"""Task that shows a MixRadio artist page."""

from typing import Optional

from ..models.types import Artist
from .base import Launcher, TaskBase


class ShowArtistTask(TaskBase):
    """Shows an artist by id, or searches for one by name."""

    def __init__(
        self,
        artist_id: Optional[str] = None,
        artist_name: Optional[str] = None,
        launcher: Optional[Launcher] = None,
    ) -> None:
        super().__init__(launcher)
        self.artist_id = artist_id
        self.artist_name = artist_name

    def show(self) -> None:
        """
        Raises:
            ValueError: If neither an artist id nor a name is set
        """
        if self.artist_id:
            self.launch(
                Artist.APP_TO_APP_SHOW_URI.format(self.artist_id),
                Artist.WEB_SHOW_URI.format(self.artist_id),
            )
        elif self.artist_name:
            self.launch(
                f"nokia-music://show/artist/?name={self._strip_ampersands(self.artist_name)}",
                f"http://www.mixrad.io/search/{self.artist_name}",
            )
        else:
            raise ValueError("Please set an artist id or name before calling show()")
