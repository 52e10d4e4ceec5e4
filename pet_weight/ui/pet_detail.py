"""宠物详情：基本信息、默认单位、趋势图、历史记录（新的在前）。"""
from typing import Callable, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pet_weight.config import DETAIL_HEIGHT, DETAIL_WIDTH
from pet_weight.tracker.display import format_day, format_long_day, species_icon
from pet_weight.tracker.models import Pet
from pet_weight.tracker.service import PetTracker
from pet_weight.tracker.units import WeightUnit
from pet_weight.ui.chart import WeightChartWidget
from pet_weight.ui.weight_dialog import WeightEntryDialog

EMPTY_HISTORY = "No weight entries yet. Add your first weight entry to start tracking!"


class PetDetailWindow(QWidget):
    """订阅 PetTracker 变更，每次变更后从仓库重新加载该宠物并刷新。"""
    closed = pyqtSignal(str)  # 宠物 ID，供列表窗口移除登记

    def __init__(self, tracker: PetTracker, pet: Pet, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._tracker = tracker
        self._pet = pet
        self._unsubscribe: Callable[[], None] = tracker.subscribe(self._reload)
        self.setup_ui()
        self._refresh()

    def setup_ui(self) -> None:
        self.setMinimumSize(DETAIL_WIDTH, DETAIL_HEIGHT)
        layout = QVBoxLayout(self)

        card = QFrame()
        card.setFrameShape(QFrame.Shape.StyledPanel)
        card_layout = QVBoxLayout(card)
        header = QHBoxLayout()
        info = QVBoxLayout()
        self._species = QLabel()
        self._species.setStyleSheet("color: gray;")
        info.addWidget(self._species)
        self._name = QLabel()
        self._name.setStyleSheet("font-size: 20px; font-weight: bold;")
        info.addWidget(self._name)
        self._born = QLabel()
        info.addWidget(self._born)
        self._age = QLabel()
        self._age.setStyleSheet("color: gray;")
        info.addWidget(self._age)
        header.addLayout(info)
        header.addStretch()
        self._icon = QLabel()
        self._icon.setStyleSheet("font-size: 40px;")
        header.addWidget(self._icon)
        card_layout.addLayout(header)

        current = QHBoxLayout()
        self._current = QLabel()
        self._current.setStyleSheet("font-weight: bold;")
        current.addWidget(self._current)
        current.addStretch()
        self._updated = QLabel()
        self._updated.setStyleSheet("color: gray;")
        current.addWidget(self._updated)
        card_layout.addLayout(current)

        unit_row = QHBoxLayout()
        unit_row.addWidget(QLabel("Preferred Unit"))
        unit_row.addStretch()
        self._unit = QComboBox()
        for unit in WeightUnit:
            self._unit.addItem(unit.display_name, unit.value)
        self._unit.currentIndexChanged.connect(self._on_unit_changed)
        unit_row.addWidget(self._unit)
        card_layout.addLayout(unit_row)
        layout.addWidget(card)

        layout.addWidget(QLabel("Weight Chart"))
        self._chart = WeightChartWidget()
        layout.addWidget(self._chart)

        layout.addWidget(QLabel("Weight History"))
        self._list = QListWidget()
        self._list.itemDoubleClicked.connect(self._edit_item)
        layout.addWidget(self._list)
        self._empty = QLabel(EMPTY_HISTORY)
        self._empty.setWordWrap(True)
        self._empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty.setStyleSheet("color: gray;")
        layout.addWidget(self._empty)

        buttons = QHBoxLayout()
        btn_add = QPushButton("Add Weight")
        btn_add.clicked.connect(self._add_weight)
        buttons.addWidget(btn_add)
        btn_edit = QPushButton("Edit")
        btn_edit.clicked.connect(lambda: self._edit_item(self._list.currentItem()))
        buttons.addWidget(btn_edit)
        layout.addLayout(buttons)

    def _reload(self) -> None:
        pet = self._tracker.get_pet(self._pet.id)
        if pet is None:
            # 宠物已被删除
            self.close()
            return
        self._pet = pet
        self._refresh()

    def _refresh(self) -> None:
        pet = self._pet
        self.setWindowTitle(pet.name)
        self._species.setText(pet.species)
        self._name.setText(pet.name)
        self._born.setText(f"Born {format_long_day(pet.birthday)}")
        self._age.setText(pet.age_string)
        self._icon.setText(species_icon(pet.species))

        latest = pet.latest_entry
        self._current.setVisible(latest is not None)
        self._updated.setVisible(latest is not None)
        if latest:
            self._current.setText(f"Current Weight: {latest.display_weight}")
            self._updated.setText(f"Last Updated: {format_day(latest.date)}")

        self._unit.blockSignals(True)
        self._unit.setCurrentIndex(self._unit.findData(pet.preferred_unit.value))
        self._unit.blockSignals(False)

        entries = pet.sorted_entries
        self._chart.set_entries(entries, pet.preferred_unit)
        self._list.clear()
        for entry in reversed(entries):
            text = f"{format_day(entry.date)}    {entry.display_weight}"
            if entry.notes:
                text += f"\n{entry.notes.splitlines()[0]}"
            item = QListWidgetItem(text)
            item.setData(Qt.ItemDataRole.UserRole, entry.id)
            self._list.addItem(item)
        has_entries = bool(entries)
        self._chart.setVisible(has_entries)
        self._list.setVisible(has_entries)
        self._empty.setVisible(not has_entries)

    def _on_unit_changed(self) -> None:
        unit = WeightUnit(self._unit.currentData())
        if unit != self._pet.preferred_unit:
            self._tracker.set_preferred_unit(self._pet, unit)

    def _add_weight(self) -> None:
        WeightEntryDialog(self._tracker, self._pet, parent=self).exec()

    def _edit_item(self, item: Optional[QListWidgetItem]) -> None:
        if item is None:
            return
        entry_id = item.data(Qt.ItemDataRole.UserRole)
        entry = next((e for e in self._pet.weight_entries if e.id == entry_id), None)
        if entry is not None:
            WeightEntryDialog(self._tracker, self._pet, entry, parent=self).exec()

    def closeEvent(self, event) -> None:
        self._unsubscribe()
        super().closeEvent(event)
        self.closed.emit(self._pet.id)
