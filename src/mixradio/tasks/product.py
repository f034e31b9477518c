"""Task that shows a MixRadio product page."""

from typing import Optional

from ..models.types import Product
from .base import Launcher, TaskBase


class ShowProductTask(TaskBase):
    """Shows an album, single or track."""

    def __init__(
        self,
        product_id: Optional[str] = None,
        app_id: Optional[str] = None,
        launcher: Optional[Launcher] = None,
    ) -> None:
        super().__init__(launcher)
        self.product_id = product_id
        # Accepted for callers passing their app id; not sent to the app yet
        self.app_id = app_id

    def show(self) -> None:
        """
        Raises:
            ValueError: If no product id is set
        """
        if not self.product_id:
            raise ValueError("Please set a product id before calling show()")

        self.launch(
            Product.APP_TO_APP_SHOW_URI.format(self.product_id),
            Product.WEB_SHOW_URI.format(self.product_id),
        )
