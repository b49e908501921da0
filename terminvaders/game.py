"""
Game state machine: phases, the per-tick update and the draw list it produces
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from . import config
from .combat import passed_through, resolve_hit, wave_cleared
from .controls import Action
from .entities import Entity, Player
from .projectiles import Bullet, advance, fire, off_screen
from .shapes import Shape
from .waves import new_wave

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Top-level game phase"""
    START = 0
    PLAYING = 1
    LOSS = 2


@dataclass
class DrawRecord:
    """One bitmap to draw at (x, y); damaged ones get highlighted"""
    shape: Shape
    x: int
    y: int
    damaged: bool = False


@dataclass
class Frame:
    """Everything the renderer needs for one tick"""
    phase: Phase
    records: List[DrawRecord]
    score: int
    quit: bool = False


@dataclass
class GameState:
    """Simulation state. Only the tick loop mutates it."""
    term_width: int
    term_height: int
    entities: List[Entity] = field(default_factory=list)
    bullets: List[Bullet] = field(default_factory=list)
    wave: int = config.INITIAL_WAVE
    wave_complete: bool = False
    phase: Phase = Phase.START
    last_action: Action = Action.NONE


class Game:
    """Owns the game state and advances it one tick at a time"""

    def __init__(self, term_width: int, term_height: int, rng: Optional[random.Random] = None):
        self.state = GameState(term_width, term_height)
        self.player = Player.centered(term_width, term_height)
        self.rng = rng if rng is not None else random.Random()

    def tick(self, action: Action = Action.NONE) -> Frame:
        """Advance one frame: input, simulation, loss check, draw list"""
        state = self.state
        quit_requested = self.handle_input(action)

        records: List[DrawRecord] = []
        if state.phase is Phase.PLAYING:
            if state.wave_complete:
                new_wave(state, self.rng)
                records.append(self._draw(self.player))
            else:
                records = self.update(action)

        self.check_pass_through()
        return Frame(state.phase, records, state.wave, quit_requested)

    def handle_input(self, action: Action) -> bool:
        """Apply phase transitions and firing. Returns True when quit was asked for."""
        state = self.state
        quit_requested = False

        if action is Action.QUIT:
            logger.info("Quit requested (phase=%s, wave=%d)", state.phase.name, state.wave)
            quit_requested = True
        elif action is Action.START:
            if state.phase is Phase.START:
                self.begin()
            elif state.phase is Phase.LOSS:
                self.restart()
        elif action is Action.FIRE:
            # Edge-triggered: holding fire only shoots once
            if state.phase is Phase.PLAYING and state.last_action is not Action.FIRE:
                state.bullets.extend(fire(self.player))

        # An unmapped key is not a release of fire
        if action is not Action.UNKNOWN:
            state.last_action = action
        return quit_requested

    def begin(self):
        logger.info("Game started")
        self.state.phase = Phase.PLAYING
        new_wave(self.state, self.rng)

    def restart(self):
        state = self.state
        logger.info("Restarting after losing on wave %d", state.wave)
        state.wave = config.INITIAL_WAVE
        state.bullets = []
        state.entities = []
        state.phase = Phase.PLAYING
        self.player = Player.centered(state.term_width, state.term_height)
        new_wave(state, self.rng)

    def update(self, action: Action = Action.NONE) -> List[DrawRecord]:
        """Move everything one step and resolve hits.

        Ships are drawn after the bullets resolve, so a hit shows up as a
        damaged record on the same tick. Movement still sees the flag on the
        following tick before it is cleared.
        """
        state = self.state

        for entity in state.entities:
            if entity.alive:
                entity.update(state.term_width)
                entity.damaged = False

        self.player.update(action, state.term_width)
        records: List[DrawRecord] = [self._draw(self.player)]

        live: List[Bullet] = []
        for bullet in state.bullets:
            records.append(self._draw(bullet))
            if off_screen(bullet) or resolve_hit(bullet, state.entities):
                continue
            advance(bullet)
            live.append(bullet)
        state.bullets = live

        ships = [self._draw(e) for e in state.entities if e.alive]
        records = ships + records

        if wave_cleared(state.entities):
            state.wave_complete = True
            state.wave += 1

        return records

    def check_pass_through(self):
        state = self.state
        if state.phase is Phase.PLAYING and passed_through(state.entities, state.term_height):
            state.phase = Phase.LOSS
            logger.info("Overrun on wave %d", state.wave)

    @staticmethod
    def _draw(obj) -> DrawRecord:
        return DrawRecord(obj.current_shape, obj.x, obj.y, getattr(obj, "damaged", False))
