"""宠物列表主窗口：按名字排序，新增 / 删除 / 打开详情。"""
from typing import Dict, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pet_weight.config import WINDOW_HEIGHT, WINDOW_WIDTH
from pet_weight.tracker.display import pet_summary
from pet_weight.tracker.models import Pet
from pet_weight.tracker.service import PetTracker
from pet_weight.ui.add_pet import AddPetDialog
from pet_weight.ui.pet_detail import PetDetailWindow


class PetListWindow(QWidget):
    """我的宠物。数据变更后由 PetTracker 回调刷新列表。"""

    def __init__(self, tracker: PetTracker, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._tracker = tracker
        self._pets: List[Pet] = []
        # 已打开的详情窗口，按宠物 ID
        self._details: Dict[str, PetDetailWindow] = {}
        self._unsubscribe = tracker.subscribe(self._refresh)
        self.setup_ui()
        self._refresh()

    def setup_ui(self) -> None:
        self.setWindowTitle("My Pets")
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)
        layout = QVBoxLayout(self)

        title = QLabel("🐾 My Pets")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(title)

        self._list = QListWidget()
        self._list.itemDoubleClicked.connect(self._open_item)
        layout.addWidget(self._list)

        self._empty = QLabel("No pets yet. Add your first pet to start tracking their weight.")
        self._empty.setWordWrap(True)
        self._empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty.setStyleSheet("color: gray;")
        layout.addWidget(self._empty)

        buttons = QHBoxLayout()
        btn_add = QPushButton("Add Pet")
        btn_add.clicked.connect(self._add_pet)
        buttons.addWidget(btn_add)
        btn_open = QPushButton("Open")
        btn_open.clicked.connect(lambda: self._open_item(self._list.currentItem()))
        buttons.addWidget(btn_open)
        btn_delete = QPushButton("Delete Pet")
        btn_delete.clicked.connect(self._delete_pet)
        buttons.addWidget(btn_delete)
        layout.addLayout(buttons)

    def _refresh(self) -> None:
        self._pets = self._tracker.pets(sort_by="name")
        self._list.clear()
        for pet in self._pets:
            item = QListWidgetItem(pet_summary(pet))
            item.setData(Qt.ItemDataRole.UserRole, pet.id)
            self._list.addItem(item)
        self._list.setVisible(bool(self._pets))
        self._empty.setVisible(not self._pets)

    def _pet_for(self, item: Optional[QListWidgetItem]) -> Optional[Pet]:
        if item is None:
            return None
        pet_id = item.data(Qt.ItemDataRole.UserRole)
        return next((p for p in self._pets if p.id == pet_id), None)

    def _add_pet(self) -> None:
        AddPetDialog(self._tracker, self).exec()

    def _open_item(self, item: Optional[QListWidgetItem]) -> None:
        pet = self._pet_for(item)
        if pet is None:
            return
        window = self._details.get(pet.id)
        if window is None or not window.isVisible():
            window = PetDetailWindow(self._tracker, pet)
            window.closed.connect(self._forget_detail)
            self._details[pet.id] = window
        window.show()
        window.raise_()

    def _forget_detail(self, pet_id: str) -> None:
        self._details.pop(pet_id, None)

    def _delete_pet(self) -> None:
        pet = self._pet_for(self._list.currentItem())
        if pet is None:
            return
        answer = QMessageBox.question(
            self,
            "Delete Pet",
            f"Delete {pet.name} and all of their weight entries? This action cannot be undone.",
            QMessageBox.StandardButton.Cancel | QMessageBox.StandardButton.Yes,
            QMessageBox.StandardButton.Cancel,
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        self._details.pop(pet.id, None)
        self._tracker.delete_pet(pet)

    def closeEvent(self, event) -> None:
        self._unsubscribe()
        for window in list(self._details.values()):
            window.close()
        super().closeEvent(event)
