"""体重记录全局配置与路径。"""
from pathlib import Path

# 项目根目录（pet_weight 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：宠物档案、体重记录
DATA_DIR = ROOT_DIR / "data"
PETS_DIR = DATA_DIR / "pets"
ENTRIES_DIR = DATA_DIR / "entries"
LOG_FILE = DATA_DIR / "pet_weight.log"

# 窗口默认
WINDOW_WIDTH = 420
WINDOW_HEIGHT = 560
DETAIL_WIDTH = 480
DETAIL_HEIGHT = 680

# 新增宠物表单的物种选项；选 Other 时手动填写
COMMON_SPECIES = ["Dog", "Cat", "Rabbit", "Guinea Pig", "Hamster", "Bird", "Reptile", "Other"]
OTHER_SPECIES = "Other"
DEFAULT_UNIT = "lbs"  # WeightUnit 的取值

# 趋势图
CHART_PADDING_RATIO = 0.1
CHART_DEFAULT_RANGE = (0.0, 100.0)
CHART_HEIGHT = 220


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, PETS_DIR, ENTRIES_DIR):
        d.mkdir(parents=True, exist_ok=True)
