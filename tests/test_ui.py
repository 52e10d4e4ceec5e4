"""列表窗口与详情窗口的登记关系测试（离屏运行）。"""
import os
import tempfile
from datetime import date
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pet_weight.tracker.service import PetTracker
from pet_weight.tracker.store import PetRepository
from pet_weight.tracker.units import WeightUnit
from pet_weight.ui.pet_list import PetListWindow


def _app() -> QApplication:
    return QApplication.instance() or QApplication([])


def test_closed_detail_window_is_forgotten() -> None:
    app = _app()
    with tempfile.TemporaryDirectory() as tmp:
        tracker = PetTracker(PetRepository.at(Path(tmp)))
        pet = tracker.create_pet("Max", date(2025, 1, 1), "Dog", 20, WeightUnit.KILOGRAMS)
        window = PetListWindow(tracker)
        window.show()

        window._open_item(window._list.item(0))
        detail = window._details[pet.id]
        assert detail.isVisible()

        detail.close()
        app.processEvents()
        assert pet.id not in window._details

        # 再次打开得到新窗口
        window._open_item(window._list.item(0))
        assert window._details[pet.id] is not detail
        window.close()
        assert window._details == {}
