"""体重记录对话框：新增或编辑一条记录；编辑时可删除。"""
from datetime import datetime
from typing import Optional

from PyQt6.QtCore import QDate
from PyQt6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pet_weight.tracker.errors import InvalidInputError
from pet_weight.tracker.models import Pet, WeightEntry
from pet_weight.tracker.service import PetTracker
from pet_weight.tracker.units import WeightUnit, compare
from pet_weight.tracker.validation import parse_weight

DELETE_CONFIRM = "Are you sure you want to delete this weight entry? This action cannot be undone."


class WeightEntryDialog(QDialog):
    """entry 为 None 时新增记录（默认单位取宠物偏好），否则编辑该记录。"""

    def __init__(
        self,
        tracker: PetTracker,
        pet: Pet,
        entry: Optional[WeightEntry] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._tracker = tracker
        self._pet = pet
        self._entry = entry
        self.setup_ui()

    def setup_ui(self) -> None:
        editing = self._entry is not None
        self.setWindowTitle("Edit Weight" if editing else "Add Weight")
        self.setMinimumWidth(360)
        layout = QVBoxLayout(self)

        form = QFormLayout()
        self._date = QDateEdit()
        self._date.setCalendarPopup(True)
        form.addRow("Date:", self._date)

        weight_row = QHBoxLayout()
        self._weight = QLineEdit()
        self._weight.setPlaceholderText("Weight")
        weight_row.addWidget(self._weight)
        self._unit = QComboBox()
        for unit in WeightUnit:
            self._unit.addItem(unit.symbol, unit.value)
        weight_row.addWidget(self._unit)
        form.addRow("Weight:", weight_row)

        self._notes = QPlainTextEdit()
        self._notes.setPlaceholderText("Add notes about this weight entry")
        self._notes.setFixedHeight(72)
        form.addRow("Notes:", self._notes)
        layout.addLayout(form)

        if editing:
            self._date.setDate(QDate(self._entry.date.year, self._entry.date.month, self._entry.date.day))
            self._weight.setText(f"{self._entry.weight:.1f}")
            self._unit.setCurrentIndex(self._unit.findData(self._entry.unit.value))
            self._notes.setPlainText(self._entry.notes)
        else:
            self._date.setDate(QDate.currentDate())
            self._unit.setCurrentIndex(self._unit.findData(self._pet.preferred_unit.value))

        # 与上一条记录的对比，仅新增时显示
        self._comparison = QLabel()
        self._comparison.setStyleSheet("color: gray;")
        self._comparison.setVisible(False)
        layout.addWidget(self._comparison)
        if not editing:
            self._weight.textChanged.connect(self._update_comparison)
            self._unit.currentIndexChanged.connect(self._update_comparison)
            self._date.dateChanged.connect(self._update_comparison)
            self._update_comparison()

        buttons = QHBoxLayout()
        if editing:
            btn_delete = QPushButton("Delete Entry")
            btn_delete.setStyleSheet("color: red;")
            btn_delete.clicked.connect(self._delete)
            buttons.addWidget(btn_delete)
        btn_cancel = QPushButton("Cancel")
        btn_cancel.clicked.connect(self.reject)
        buttons.addWidget(btn_cancel)
        btn_save = QPushButton("Save")
        btn_save.setDefault(True)
        btn_save.clicked.connect(self._save)
        buttons.addWidget(btn_save)
        layout.addLayout(buttons)

    def _selected_datetime(self) -> datetime:
        """选中的日期 + 当前时刻（编辑时保留原记录的时刻）。"""
        day = self._date.date().toPyDate()
        moment = self._entry.date.time() if self._entry else datetime.now().time()
        return datetime.combine(day, moment)

    def _update_comparison(self) -> None:
        previous = self._pet.latest_entry
        if previous is None or self._selected_datetime() <= previous.date:
            self._comparison.setVisible(False)
            return
        try:
            current = parse_weight(self._weight.text())
        except InvalidInputError:
            current = 0.0
        unit = WeightUnit(self._unit.currentData())
        change = compare(current, unit, previous.weight, previous.unit)
        self._comparison.setText(f"Change from last entry: {change.describe(unit)}")
        self._comparison.setVisible(True)

    def _save(self) -> None:
        kwargs = dict(
            date=self._selected_datetime(),
            weight=self._weight.text(),
            unit=self._unit.currentData(),
            notes=self._notes.toPlainText(),
        )
        try:
            if self._entry is None:
                self._entry = self._tracker.add_weight_entry(self._pet, **kwargs)
            else:
                self._tracker.edit_weight_entry(self._entry, **kwargs)
        except InvalidInputError as e:
            QMessageBox.warning(self, "Error", str(e))
            return
        self.accept()

    def _delete(self) -> None:
        answer = QMessageBox.question(
            self,
            "Delete Entry",
            DELETE_CONFIRM,
            QMessageBox.StandardButton.Cancel | QMessageBox.StandardButton.Yes,
            QMessageBox.StandardButton.Cancel,
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        self._tracker.delete_weight_entry(self._entry, self._pet)
        self.accept()

    def entry(self) -> Optional[WeightEntry]:
        return self._entry
