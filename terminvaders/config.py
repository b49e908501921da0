"""
Tunable constants and command line options
"""

import argparse
from typing import List, Optional

# Timing
FPS = 30
FRAME_TIME = 1.0 / FPS  # ~33 ms per tick

# Terminal
MIN_WIDTH = 80
MIN_HEIGHT = 24
MARGIN = 2  # Left boundary touched when x < MARGIN

# Player
PLAYER_STEP = 2
PLAYER_HEALTH = 100  # Archetype table entry only; nothing damages the player

# Enemy movement
SCOUT_DROP = 17  # Rows a scout descends on each boundary touch
WEAVER_DODGE = 50
BRUTE_BURST = 20
BRUTE_LOW_HEALTH = 4

# Waves
WAVE_DIGITS = 4  # Base-3 digits, one per tier
INITIAL_WAVE = 0

# Key bytes
KEY_LEFT = ord('a')
KEY_RIGHT = ord('d')
KEY_FIRE = ord('w')
KEY_START = ord('s')
KEY_QUIT = ord('q')
KEY_CTRL_C = 3

INPUT_BACKENDS = ("stdin", "pynput")
DEFAULT_LOG_FILE = "terminvaders.log"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line options"""
    parser = argparse.ArgumentParser(
        prog="terminvaders",
        description="Defend against waves of invaders in your terminal")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for enemy placement (default: random)")
    parser.add_argument(
        "--input",
        choices=INPUT_BACKENDS,
        default="stdin",
        help="Keyboard capture backend")
    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help="Where to write the game log")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level written to the log")
    return parser.parse_args(argv)
