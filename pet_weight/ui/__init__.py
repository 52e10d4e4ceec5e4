"""宠物列表、详情、表单与趋势图界面。"""
from pet_weight.ui.add_pet import AddPetDialog
from pet_weight.ui.chart import WeightChartWidget
from pet_weight.ui.pet_detail import PetDetailWindow
from pet_weight.ui.pet_list import PetListWindow
from pet_weight.ui.weight_dialog import WeightEntryDialog

__all__ = [
    "AddPetDialog",
    "WeightChartWidget",
    "PetDetailWindow",
    "PetListWindow",
    "WeightEntryDialog",
]
