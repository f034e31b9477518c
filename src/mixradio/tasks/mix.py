"""Task that plays a MixRadio mix."""

from typing import Optional

from ..models.types import Artist, Mix
from .base import Launcher, TaskBase


class PlayMixTask(TaskBase):
    """
    Plays a mix, either by mix id or as an artist mix.

    A mix id takes precedence over an artist name.
    """

    def __init__(
        self,
        mix_id: Optional[str] = None,
        artist_name: Optional[str] = None,
        launcher: Optional[Launcher] = None,
    ) -> None:
        super().__init__(launcher)
        self.mix_id = mix_id
        self.artist_name = artist_name

    def show(self) -> None:
        """
        Raises:
            ValueError: If neither a mix id nor an artist name is set
        """
        if self.mix_id:
            self.launch(
                Mix.APP_TO_APP_PLAY_URI.format(self.mix_id),
                Mix.WEB_PLAY_URI.format(self.mix_id),
            )
        elif self.artist_name:
            name = self._strip_ampersands(self.artist_name)
            self.launch(
                Artist.APP_TO_APP_PLAY_URI_BY_NAME.format(name),
                Artist.WEB_PLAY_URI_BY_NAME.format(name),
            )
        else:
            raise ValueError("Please set a mix id or artist name before calling show()")
