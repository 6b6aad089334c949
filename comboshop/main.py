"""Entry point for the comboshop Textual app."""

from __future__ import annotations

from comboshop.logging_setup import configure_logging
from comboshop.shop_app import ComboShopApp


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    ComboShopApp().run()


if __name__ == "__main__":
    main()
