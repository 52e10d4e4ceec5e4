"""宠物体重记录：宠物档案、体重记录、趋势图。"""

__version__ = "0.1.0"
