"""入口：打开宠物列表窗口。"""
import sys

from PyQt6.QtWidgets import QApplication

from pet_weight import __version__
from pet_weight.config import LOG_FILE, ensure_dirs
from pet_weight.log import setup_logger
from pet_weight.tracker.service import PetTracker
from pet_weight.ui.pet_list import PetListWindow


def main() -> None:
    ensure_dirs()
    log = setup_logger(log_file=LOG_FILE)
    app = QApplication(sys.argv)
    app.setApplicationName("Pet Weight Tracker")
    app.setApplicationVersion(__version__)

    tracker = PetTracker()
    window = PetListWindow(tracker)
    window.show()
    log.info("pet weight tracker %s started", __version__)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
