"""Entry point for running classcal as a module.

Usage: python -m classcal
"""

import sys
import logging


def main():
    """Main entry point for the desktop application."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger("classcal")

    from PyQt6.QtWidgets import QApplication
    from classcal.config.constants import APP_NAME
    from classcal.config.settings import CALENDAR_CONFIG, load_calendar_config
    from classcal.exceptions.errors import ConfigLoadError
    from classcal.storage.config_loader import load_default_registry
    from classcal.ui.main_window import ScheduleWindow
    from classcal.utils.paths import get_user_config_dir

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    # A configuration failure leaves the window up with generation disabled
    config = CALENDAR_CONFIG
    registry = None
    load_error = None
    try:
        config = load_calendar_config(get_user_config_dir() / ".env")
        registry = load_default_registry()
    except ConfigLoadError as e:
        logger.error("%s", e)
        load_error = e

    window = ScheduleWindow(registry=registry, config=config, load_error=load_error)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
