"""Task that opens MixRadio."""

from .base import TaskBase

APP_URI = "nokia-music://"
WEB_URI = "http://www.mixrad.io/"


class LaunchTask(TaskBase):
    """Shows MixRadio."""

    def show(self) -> None:
        self.launch(APP_URI, WEB_URI)
