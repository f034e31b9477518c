"""Base class for tasks that open MixRadio deep links."""

from __future__ import annotations

import logging
import webbrowser
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Launcher(Protocol):
    """Opens a URI on the current platform."""

    def launch(self, app_uri: str, web_uri: str) -> None:
        ...


class BrowserLauncher:
    """
    Launcher using the system URI handlers.

    Tries the app-to-app URI first and falls back to the web URI when no
    handler for the app scheme is registered.
    """

    def launch(self, app_uri: str, web_uri: str) -> None:
        try:
            if webbrowser.open(app_uri):
                return
        except webbrowser.Error as e:
            logger.debug(f"No handler for {app_uri}: {e}")
        logger.debug(f"Falling back to {web_uri}")
        webbrowser.open(web_uri)


class TaskBase:
    """Shared launching behavior for the show/play tasks."""

    def __init__(self, launcher: Optional[Launcher] = None) -> None:
        self.launcher: Launcher = launcher or BrowserLauncher()

    def launch(self, app_uri: str, web_uri: str) -> None:
        logger.debug(f"Launching {app_uri} (web fallback {web_uri})")
        self.launcher.launch(app_uri, web_uri)

    @staticmethod
    def _strip_ampersands(value: str) -> str:
        return value.replace("&", "")
