"""Main window: puppet canvas with the monitor panel beside it."""

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QStatusBar, QLabel, QSizePolicy,
)
from PySide6.QtGui import QFont

from handpuppet.core.events import EventBus, EventType
from handpuppet.rendering.puppet_canvas import PuppetCanvas
from handpuppet.ui.monitor_panel import MonitorPanel
from handpuppet.ui.style import DARK_THEME


class MainWindow(QMainWindow):
    """Main application window.

    Layout: [PuppetCanvas | MonitorPanel]
    with a status bar showing the hand state and respawn count.
    """

    def __init__(
        self,
        event_bus: EventBus,
        canvas: PuppetCanvas,
        monitor: MonitorPanel,
        parent=None,
    ):
        super().__init__(parent)
        self.event_bus = event_bus
        self.canvas = canvas
        self.monitor = monitor

        self.setWindowTitle("Hand Puppet")
        self.resize(1280, 800)
        self.setStyleSheet(DARK_THEME)

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        main_layout.addWidget(canvas)

        monitor.setFixedWidth(220)
        main_layout.addWidget(monitor)

        # Status bar
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        mono = QFont("monospace", 9)

        self.state_label = QLabel("Hands: IDLE")
        self.state_label.setFont(mono)
        self.respawn_label = QLabel("Respawns: 0")
        self.respawn_label.setFont(mono)
        self.status_bar.addPermanentWidget(self.state_label)
        self.status_bar.addPermanentWidget(self.respawn_label)
        self._respawns = 0

        event_bus.subscribe(EventType.HANDS_STATE_CHANGED, self._on_hands_state)
        event_bus.subscribe(EventType.CIRCLE_RESPAWNED, self._on_respawn)

    def _on_hands_state(self, state=None, **kw):
        if state is not None:
            self.state_label.setText(f"Hands: {state.name}")

    def _on_respawn(self, **kw):
        self._respawns += 1
        self.respawn_label.setText(f"Respawns: {self._respawns}")

    def closeEvent(self, event) -> None:
        self.canvas.stop()
        self.event_bus.unsubscribe(EventType.HANDS_STATE_CHANGED, self._on_hands_state)
        self.event_bus.unsubscribe(EventType.CIRCLE_RESPAWNED, self._on_respawn)
        super().closeEvent(event)
