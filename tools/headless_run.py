"""Run the puppet pipeline without Qt and print a per-second summary.

Useful for checking a replay or a config change without opening a window.

Usage::

    python tools/headless_run.py recording.json --variant mirror --frames 900
"""

import argparse
import logging
import sys
sys.path.insert(0, "src")

from handpuppet.coordination.frame_driver import FrameDriver, FrameState
from handpuppet.core.config_loader import load_puppet_config
from handpuppet.core.hands import HandSlot
from handpuppet.puppet.physics_bridge import PhysicsBridge
from handpuppet.puppet.replay import ReplaySource


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("replay")
    parser.add_argument("--variant", default="organ")
    parser.add_argument("--config")
    parser.add_argument("--frames", type=int, default=600)
    parser.add_argument("--size", type=int, nargs=2, default=(1060, 760))
    parser.add_argument("--once", action="store_true", help="stop at the end of the replay")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    config = load_puppet_config(args.config, args.variant)
    width, height = args.size
    slot = HandSlot()
    replay = ReplaySource.from_file(args.replay, slot, loop=not args.once)
    driver = FrameDriver(config, PhysicsBridge(config, width, height), slot, width, height)

    ready = synced = respawns = 0
    for i in range(args.frames):
        if replay.finished:
            break
        replay.advance()
        result = driver.step()
        ready += result.state is FrameState.READY
        synced += result.synced
        respawns += result.respawned
        if (i + 1) % 60 == 0:
            c = result.physics.circle
            print(f"frame {i + 1:5d}  ready={ready:4d}  synced={synced:4d}  "
                  f"respawns={respawns}  circle=({c.x:7.1f}, {c.y:7.1f})")
    driver.close()


if __name__ == "__main__":
    main()
