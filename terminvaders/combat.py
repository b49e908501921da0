"""
Hit detection and the wave/game ending checks
"""

from typing import Iterable

from .entities import Entity
from .projectiles import Bullet


def hits(bullet: Bullet, entity: Entity) -> bool:
    """A bullet connects on the row just below the ship, inside its columns"""
    return (entity.x <= bullet.x <= entity.x + entity.width - 1
            and bullet.y == entity.y + entity.height)


def resolve_hit(bullet: Bullet, entities: Iterable[Entity]) -> bool:
    """Apply the bullet to the first live ship it hits. Returns True if consumed.

    Health can reach zero here, but the ship stays alive until its next
    movement update, so it is drawn once more with the damage flash.
    """
    for entity in entities:
        if not entity.alive:
            continue
        if hits(bullet, entity):
            entity.health -= bullet.damage
            entity.damaged = True
            return True
    return False


def passed_through(entities: Iterable[Entity], term_height: int) -> bool:
    """True if any live ship has made it past the bottom of the screen"""
    return any(e.alive and e.y > term_height for e in entities)


def wave_cleared(entities: Iterable[Entity]) -> bool:
    return not any(e.alive for e in entities)
