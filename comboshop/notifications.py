"""User feedback messages and the toast surface they are shown on."""

from __future__ import annotations

from typing import Protocol

from textual.app import App

INCOMPLETE_TITLE = "Select all items"
INCOMPLETE_MESSAGE = "Choose a spirit, an energy drink and {slots} ice units to build your combo."
COMBO_ADDED_TITLE = "Combo added!"
COMBO_ADDED_MESSAGE = "Combo with {percent}% off was added to the cart."
OUT_OF_STOCK_TITLE = "Insufficient stock"
OUT_OF_STOCK_MESSAGE = "{name} is out of stock or the cart already holds all available units."
ITEM_ADDED_TITLE = "Added to cart"
ITEM_ADDED_MESSAGE = "{name} was added."


class Notifier(Protocol):
    def success(self, title: str, message: str) -> None: ...

    def error(self, title: str, message: str) -> None: ...


class ToastNotifier:
    """Fire-and-forget toasts through Textual's notification area."""

    def __init__(self, app: App) -> None:
        self.app = app

    def success(self, title: str, message: str) -> None:
        self.app.notify(message, title=title, severity="information")

    def error(self, title: str, message: str) -> None:
        self.app.notify(message, title=title, severity="error")
