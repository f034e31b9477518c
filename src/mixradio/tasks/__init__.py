"""Deep-link tasks that open MixRadio content."""

from .artist import ShowArtistTask
from .base import BrowserLauncher, Launcher, TaskBase
from .gigs import ShowGigsTask
from .launch import LaunchTask
from .mix import PlayMixTask
from .product import ShowProductTask
from .search import MusicSearchTask

__all__ = [
    "BrowserLauncher",
    "LaunchTask",
    "Launcher",
    "MusicSearchTask",
    "PlayMixTask",
    "ShowArtistTask",
    "ShowGigsTask",
    "ShowProductTask",
    "TaskBase",
]
