"""Hand puppet application entry point.

Wires together config, hand slot, physics, frame driver, canvas and UI.
Detections reach the puppet through a :class:`HandSlot`; this entry point
can fill it from a recorded replay file.
"""

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from handpuppet.coordination.frame_driver import FrameDriver, is_front_readout
from handpuppet.core.config_loader import load_puppet_config
from handpuppet.core.config import DEFAULT_VARIANT, VARIANTS
from handpuppet.core.events import EventBus
from handpuppet.core.hands import HandSlot
from handpuppet.puppet.physics_bridge import PhysicsBridge
from handpuppet.puppet.replay import ReplaySource
from handpuppet.rendering.puppet_canvas import PuppetCanvas
from handpuppet.ui.main_window import MainWindow
from handpuppet.ui.monitor_panel import MonitorPanel

logger = logging.getLogger(__name__)

# Canvas size the bodies are laid out for (the window opens at this size)
INITIAL_CANVAS_SIZE = (1060, 760)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="handpuppet", description=__doc__.splitlines()[0])
    parser.add_argument(
        "--variant", choices=sorted(VARIANTS), default=DEFAULT_VARIANT,
        help="presentation preset (default: %(default)s)",
    )
    parser.add_argument("--config", type=Path, help="JSON file overriding the preset")
    parser.add_argument("--replay", type=Path, help="recorded detections to play back")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv=None):
    """Launch the hand puppet window."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s: %(message)s",
    )

    try:
        config = load_puppet_config(args.config, args.variant)
    except (OSError, ValueError) as e:
        logger.error("Cannot load config: %s", e)
        return 2

    app = QApplication(sys.argv[:1])

    event_bus = EventBus()
    slot = HandSlot()
    width, height = INITIAL_CANVAS_SIZE

    physics = PhysicsBridge(config, width, height)
    monitor = MonitorPanel()
    driver = FrameDriver(
        config, physics, slot, width, height,
        monitor=monitor.set_entries,
        event_bus=event_bus,
        debug_hooks=[is_front_readout] if config.show_is_front else [],
    )

    canvas = PuppetCanvas(driver, config)
    canvas.resize(width, height)

    if args.replay is not None:
        try:
            replay = ReplaySource.from_file(args.replay, slot)
        except (OSError, ValueError) as e:
            logger.error("Cannot load replay: %s", e)
            return 2
        canvas.pre_frame_callbacks.append(replay.advance)

    window = MainWindow(event_bus, canvas, monitor)
    app.aboutToQuit.connect(canvas.stop)
    app.aboutToQuit.connect(driver.close)

    window.show()
    canvas.start()
    logger.info("Hand puppet running (variant=%s)", args.variant)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
