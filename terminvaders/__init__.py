"""Terminvaders - wave-based arcade shooter for the terminal"""

from .controls import Action
from .game import Frame, Game, GameState, Phase

__all__ = ['Action', 'Frame', 'Game', 'GameState', 'Phase']
__version__ = "0.1.0"
