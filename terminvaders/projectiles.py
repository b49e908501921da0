"""
Bullets: spawning from a ship's shot pattern, movement and retirement
"""

from dataclasses import dataclass
from typing import List

from . import shapes
from .shapes import Shape


@dataclass
class Bullet:
    """A single projectile. Positive velocity travels up the screen."""
    x: int
    y: int
    velocity: int = 1
    damage: int = 1
    shape: Shape = shapes.BULLET

    @property
    def width(self) -> int:
        return self.shape.width

    @property
    def current_shape(self) -> Shape:
        return self.shape


def decompose(shot: Shape, x: int, y: int, velocity: int, damage: int) -> List[Bullet]:
    """Split a shot pattern into one bullet per filled cell (shotgun spread)"""
    return [Bullet(x + dx, y + dy, velocity, damage) for dx, dy in shot.cells()]


def fire(shooter) -> List[Bullet]:
    """Volley from a ship's shot pattern at its current position"""
    return decompose(shooter.shot, shooter.x, shooter.y,
                     shooter.shot_velocity, shooter.shot_damage)


def advance(bullet: Bullet):
    bullet.y -= bullet.velocity


def off_screen(bullet: Bullet) -> bool:
    """True once the next step would carry the bullet past the top row"""
    return bullet.y < bullet.velocity
