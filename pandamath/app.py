"""Application entry point and setup for Panda Math Practice."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from pandamath.core.achievements import AchievementStore
from pandamath.core.session import DrillSession
from pandamath.core.settings import Settings, SettingsError
from pandamath.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def load_settings() -> Settings:
    """Read the user's config file, falling back to defaults if it is unusable."""
    try:
        return Settings.load()
    except SettingsError as e:
        logging.warning(f"Using default settings: {e}")
        return Settings()


def run() -> None:
    """Initialize the application, load achievements, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Panda Math Practice")
    app.setApplicationDisplayName("Panda Math Practice")

    settings = load_settings()
    store = AchievementStore(settings.achievements_file)
    session = DrillSession(store, settings)

    window = MainWindow(session=session, store=store)
    window.resize(560, 860)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
