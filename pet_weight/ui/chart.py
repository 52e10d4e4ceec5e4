"""体重趋势图：折线 + 渐变面积 + 数据点，纵轴为宠物默认单位。"""
from typing import List, Optional

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QLinearGradient, QPainter, QPainterPath, QPen
from PyQt6.QtWidgets import QWidget

from pet_weight.config import CHART_HEIGHT
from pet_weight.tracker.chart import ChartPoint, chart_points, weight_range
from pet_weight.tracker.models import WeightEntry
from pet_weight.tracker.units import WeightUnit

# 绘图区边距：左侧留给纵轴刻度，底部留给日期
MARGIN_LEFT = 44
MARGIN_RIGHT = 12
MARGIN_TOP = 12
MARGIN_BOTTOM = 26
Y_TICKS = 4
LINE_COLOR = QColor(40, 110, 230)


class WeightChartWidget(QWidget):
    """set_entries 后重绘；0 条 / 1 条 / 多条记录分别显示不同内容。"""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._points: List[ChartPoint] = []
        self._unit = WeightUnit.POUNDS
        self.setMinimumHeight(CHART_HEIGHT)

    def set_entries(self, entries: List[WeightEntry], unit: WeightUnit) -> None:
        self._unit = WeightUnit(unit)
        self._points = chart_points(entries, self._unit)
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = QRectF(self.rect())

        if not self._points:
            painter.setPen(QColor("gray"))
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, "No data to display")
        elif len(self._points) == 1:
            self._paint_single(painter, rect)
        else:
            self._paint_series(painter, rect)
        painter.end()

    def _paint_single(self, painter: QPainter, rect: QRectF) -> None:
        painter.setPen(QColor("gray"))
        top = QRectF(rect.left(), rect.top(), rect.width(), rect.height() / 3)
        painter.drawText(top, Qt.AlignmentFlag.AlignCenter, "Add more weight entries to see the trend")
        font = painter.font()
        font.setPointSize(max(font.pointSize(), 9) * 2)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor("black"))
        value = f"{self._points[0].weight:.1f} {self._unit.symbol}"
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, value)

    def _paint_series(self, painter: QPainter, rect: QRectF) -> None:
        plot = rect.adjusted(MARGIN_LEFT, MARGIN_TOP, -MARGIN_RIGHT, -MARGIN_BOTTOM)
        lo, hi = weight_range(self._points)
        if hi <= lo:
            # 所有记录相同：给纵轴一个最小跨度
            lo, hi = max(0.0, lo - 1.0), hi + 1.0
        start = self._points[0].date.timestamp()
        span = max(self._points[-1].date.timestamp() - start, 1.0)

        def to_xy(p: ChartPoint) -> QPointF:
            x = plot.left() + (p.date.timestamp() - start) / span * plot.width()
            y = plot.bottom() - (p.weight - lo) / (hi - lo) * plot.height()
            return QPointF(x, y)

        xy = [to_xy(p) for p in self._points]

        # 网格与纵轴刻度
        painter.setPen(QPen(QColor(220, 220, 220), 1))
        for i in range(Y_TICKS + 1):
            value = lo + (hi - lo) * i / Y_TICKS
            y = plot.bottom() - plot.height() * i / Y_TICKS
            painter.drawLine(QPointF(plot.left(), y), QPointF(plot.right(), y))
            painter.setPen(QColor("gray"))
            painter.drawText(QRectF(0, y - 8, MARGIN_LEFT - 6, 16),
                             Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter, f"{value:.1f}")
            painter.setPen(QPen(QColor(220, 220, 220), 1))

        # 横轴：首尾日期
        painter.setPen(QColor("gray"))
        first, last = self._points[0].date, self._points[-1].date
        bottom = QRectF(plot.left(), plot.bottom() + 4, plot.width(), MARGIN_BOTTOM - 4)
        painter.drawText(bottom, Qt.AlignmentFlag.AlignLeft, f"{first:%b} {first.day}")
        painter.drawText(bottom, Qt.AlignmentFlag.AlignRight, f"{last:%b} {last.day}")
        painter.drawText(bottom, Qt.AlignmentFlag.AlignHCenter, self._unit.symbol)

        line = QPainterPath(xy[0])
        for pt in xy[1:]:
            line.lineTo(pt)

        area = QPainterPath(line)
        area.lineTo(xy[-1].x(), plot.bottom())
        area.lineTo(xy[0].x(), plot.bottom())
        area.closeSubpath()
        gradient = QLinearGradient(0, plot.top(), 0, plot.bottom())
        gradient.setColorAt(0.0, QColor(40, 110, 230, 77))
        gradient.setColorAt(1.0, QColor(40, 110, 230, 13))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(gradient))
        painter.drawPath(area)

        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.setPen(QPen(LINE_COLOR, 2))
        painter.drawPath(line)

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(LINE_COLOR))
        for pt in xy:
            painter.drawEllipse(pt, 4, 4)
