"""Entry point for the Simple Pendulum application.

Supports two modes:
- Numerical: sphere driven by the integrated equation of motion
- Approximation: sphere driven by the closed-form approximation

For headless batch runs use batch.py instead.
"""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from app_window import AppWindow


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    app = QApplication(sys.argv)
    window = AppWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
