"""新增宠物对话框：名字、生日、物种、初始体重与单位。"""
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
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pet_weight.config import COMMON_SPECIES, DEFAULT_UNIT, OTHER_SPECIES
from pet_weight.tracker.errors import InvalidInputError
from pet_weight.tracker.models import Pet
from pet_weight.tracker.service import PetTracker
from pet_weight.tracker.units import WeightUnit


class AddPetDialog(QDialog):
    """填写宠物信息与初始体重；保存成功后 pet() 返回新宠物。"""

    def __init__(self, tracker: PetTracker, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._tracker = tracker
        self._pet: Optional[Pet] = None
        self.setup_ui()

    def setup_ui(self) -> None:
        self.setWindowTitle("Add New Pet")
        self.setFixedSize(360, 300)
        layout = QVBoxLayout(self)

        form = QFormLayout()
        self._name = QLineEdit()
        self._name.setPlaceholderText("Name")
        form.addRow("Name:", self._name)

        self._birthday = QDateEdit(QDate.currentDate())
        self._birthday.setCalendarPopup(True)
        self._birthday.setMaximumDate(QDate.currentDate())
        form.addRow("Birthday:", self._birthday)

        self._species = QComboBox()
        self._species.addItem("Select Species", "")
        for species in COMMON_SPECIES:
            self._species.addItem(species, species)
        self._species.currentIndexChanged.connect(self._on_species_changed)
        form.addRow("Species:", self._species)

        self._other_species = QLineEdit()
        self._other_species.setPlaceholderText("Specify Species")
        self._other_species.setVisible(False)
        form.addRow("", self._other_species)

        weight_row = QHBoxLayout()
        self._weight = QLineEdit()
        self._weight.setPlaceholderText("Weight")
        weight_row.addWidget(self._weight)
        self._unit = QComboBox()
        for unit in WeightUnit:
            self._unit.addItem(unit.symbol, unit.value)
        self._unit.setCurrentIndex(self._unit.findData(DEFAULT_UNIT))
        weight_row.addWidget(self._unit)
        form.addRow("Initial weight:", weight_row)
        layout.addLayout(form)

        hint = QLabel("You can change the preferred unit for this pet later in their detail view.")
        hint.setWordWrap(True)
        hint.setStyleSheet("color: gray; font-size: 11px;")
        layout.addWidget(hint)

        buttons = QHBoxLayout()
        btn_cancel = QPushButton("Cancel")
        btn_cancel.clicked.connect(self.reject)
        buttons.addWidget(btn_cancel)
        btn_save = QPushButton("Save")
        btn_save.setDefault(True)
        btn_save.clicked.connect(self._save)
        buttons.addWidget(btn_save)
        layout.addLayout(buttons)

    def _on_species_changed(self) -> None:
        self._other_species.setVisible(self._species.currentData() == OTHER_SPECIES)

    def _selected_species(self) -> str:
        species = self._species.currentData() or ""
        if species == OTHER_SPECIES:
            # Other 未填写具体物种时保留 Other
            return self._other_species.text().strip() or OTHER_SPECIES
        return species

    def _save(self) -> None:
        try:
            self._pet = self._tracker.create_pet(
                name=self._name.text(),
                birthday=self._birthday.date().toPyDate(),
                species=self._selected_species(),
                initial_weight=self._weight.text(),
                unit=self._unit.currentData(),
            )
        except InvalidInputError as e:
            QMessageBox.warning(self, "Error", str(e))
            return
        self.accept()

    def pet(self) -> Optional[Pet]:
        return self._pet
