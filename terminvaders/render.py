"""
Curses renderer for the draw list and the start/loss screens
"""

import curses
from typing import List

from .game import DrawRecord, Frame, Phase

FILL = "█"

# Color pairs
PAIR_DEFAULT = 1
PAIR_DAMAGED = 2
PAIR_TITLE = 3

LOSS_BANNER = [
    "██    ██  ██████  ██    ██     ██       ██████  ███████ ███████ ",
    " ██  ██  ██    ██ ██    ██     ██      ██    ██ ██      ██      ",
    "  ████   ██    ██ ██    ██     ██      ██    ██ ███████ █████   ",
    "   ██    ██    ██ ██    ██     ██      ██    ██      ██ ██      ",
    "   ██     ██████   ██████      ███████  ██████  ███████ ███████ ",
]


def boxed(lines: List[str]) -> List[str]:
    """Frame some text in a double-line box"""
    inner = max(len(line) for line in lines) + 4
    box = ["╔" + "═" * inner + "╗"]
    for line in lines:
        box.append("║  " + line.ljust(inner - 2) + "║")
    box.append("╚" + "═" * inner + "╝")
    return box


START_BANNER = boxed([
    "T E R M I N V A D E R S",
    "",
    "W: SHOOT | A: LEFT | D: RIGHT | Q: QUIT",
    "",
    "PRESS S TO START",
])


class Renderer:
    """Draws frames onto a curses screen through an off-screen pad"""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.height, self.width = stdscr.getmaxyx()
        # Pad for double buffering (eliminates flicker)
        self.pad = curses.newpad(self.height + 1, self.width + 1)

        curses.curs_set(0)
        stdscr.nodelay(1)
        stdscr.timeout(0)

        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(PAIR_DEFAULT, curses.COLOR_WHITE, background)
        curses.init_pair(PAIR_DAMAGED, curses.COLOR_RED, background)
        curses.init_pair(PAIR_TITLE, curses.COLOR_YELLOW, background)

    def draw(self, frame: Frame):
        """Render one frame"""
        self.pad.erase()
        if frame.phase is Phase.START:
            self._draw_banner(START_BANNER, PAIR_TITLE)
        elif frame.phase is Phase.LOSS:
            row = self._draw_banner(LOSS_BANNER, PAIR_DAMAGED)
            self._put(row + 5, self.width // 3, f"Score: {frame.score}", PAIR_DEFAULT)
            self._put(row + 7, self.width // 3, "PRESS S TO RESTART", PAIR_TITLE)
        for record in frame.records:
            self._draw_record(record)
        self.pad.noutrefresh(0, 0, 0, 0, self.height - 1, self.width - 1)
        curses.doupdate()

    def _draw_record(self, record: DrawRecord):
        pair = PAIR_DAMAGED if record.damaged else PAIR_DEFAULT
        for dy, line in enumerate(record.shape.lines(FILL)):
            # Empty cells are skipped so overlapping ships don't erase each other
            for dx, char in enumerate(line):
                if char == FILL:
                    self._put(record.y + dy, record.x + dx, char, pair)

    def _draw_banner(self, lines: List[str], pair: int) -> int:
        """Draw lines a third of the way down and across. Returns the last row used."""
        top, left = self.height // 3, self.width // 3
        if left + max(len(line) for line in lines) > self.width:
            left = 0
        for i, line in enumerate(lines):
            self._put(top + i, left, line, pair, bold=True)
        return top + len(lines)

    def _put(self, y: int, x: int, text: str, pair: int, bold: bool = False):
        if y < 0 or x < 0 or y >= self.height or x >= self.width:
            return
        try:
            attr = curses.color_pair(pair) | (curses.A_BOLD if bold else 0)
            self.pad.addstr(y, x, text[:self.width - x], attr)
        except curses.error:
            pass  # Writing the bottom-right cell raises after drawing
