"""Side panel listing the per-frame debug entries."""

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGridLayout, QLabel, QVBoxLayout, QWidget

from handpuppet.coordination.frame_driver import DebugEntry


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


class MonitorPanel(QWidget):
    """Label/value rows, one per debug entry.

    Rows are keyed by label and reused between frames; labels that were
    not reported this frame are hidden rather than deleted.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("monitorPanel")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 8)
        layout.setSpacing(2)

        title = QLabel("MONITOR")
        title.setObjectName("sectionLabel")
        layout.addWidget(title)

        grid_host = QWidget()
        self._grid = QGridLayout(grid_host)
        self._grid.setContentsMargins(0, 0, 0, 0)
        self._grid.setHorizontalSpacing(8)
        layout.addWidget(grid_host)
        layout.addStretch(1)

        self._rows: dict[str, tuple[QLabel, QLabel]] = {}

    def set_entries(self, entries: list[DebugEntry]) -> None:
        seen = set()
        for entry in entries:
            seen.add(entry.label)
            _, value_label = self._row(entry.label)
            value_label.setText(format_value(entry.value))
        for label, (name_label, value_label) in self._rows.items():
            visible = label in seen
            name_label.setVisible(visible)
            value_label.setVisible(visible)

    def _row(self, label: str) -> tuple[QLabel, QLabel]:
        row = self._rows.get(label)
        if row is None:
            name_label = QLabel(label)
            name_label.setObjectName("sliderLabel")
            value_label = QLabel("")
            value_label.setObjectName("valueLabel")
            value_label.setAlignment(Qt.AlignmentFlag.AlignRight)
            index = len(self._rows)
            self._grid.addWidget(name_label, index, 0)
            self._grid.addWidget(value_label, index, 1)
            row = (name_label, value_label)
            self._rows[label] = row
        return row
