"""
Ships: the player and the four enemy archetypes, with their movement policies
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from . import config, shapes
from .controls import Action
from .shapes import Shape


class EntityKind(Enum):
    """Archetype discriminant"""
    PLAYER = 0
    SCOUT = 1
    WEAVER = 2
    BRUTE = 3
    BOSS = 4


class Side(Enum):
    """Horizontal boundary"""
    LEFT = 1
    RIGHT = 2


def touches_boundary(side: Side, x: int, width: int, term_width: int) -> bool:
    """True if a bitmap of `width` starting at column x touches the given boundary"""
    if side is Side.LEFT:
        return x < config.MARGIN
    return x > term_width - width


@dataclass(frozen=True)
class Archetype:
    """Fixed properties shared by every ship of one kind"""
    kind: EntityKind
    shape: Shape
    max_health: int
    spawn_row: Callable[[int], int]  # terminal height -> starting y
    alt_shape: Optional[Shape] = None

    @property
    def width(self) -> int:
        return self.shape.width


@dataclass
class Entity:
    """A ship on screen. Position is the top-left corner of its bitmap."""
    kind: EntityKind
    x: int
    y: int
    shape: Shape
    health: int
    max_health: int
    alt_shape: Optional[Shape] = None
    alive: bool = True
    damaged: bool = False
    collided: Optional[Side] = None
    turned: bool = False  # Draw with alt_shape

    @classmethod
    def spawn(cls, archetype: Archetype, x: int, y: int) -> "Entity":
        return cls(
            kind=archetype.kind,
            x=x,
            y=y,
            shape=archetype.shape,
            health=archetype.max_health,
            max_health=archetype.max_health,
            alt_shape=archetype.alt_shape,
        )

    @property
    def width(self) -> int:
        return self.shape.width

    @property
    def height(self) -> int:
        return self.shape.height

    @property
    def current_shape(self) -> Shape:
        if self.turned and self.alt_shape is not None:
            return self.alt_shape
        return self.shape

    def touches(self, side: Side, term_width: int, offset: int = 0) -> bool:
        return touches_boundary(side, self.x + offset, self.width, term_width)

    def update(self, term_width: int):
        """Run one tick of this enemy's movement policy"""
        MOVEMENT[self.kind].step(self, term_width)


class Movement:
    """Per-archetype movement policy for enemies"""

    def step(self, entity: Entity, term_width: int):
        # Zero health takes effect here, one tick after the killing hit
        if entity.health <= 0:
            entity.alive = False
        if not entity.alive:
            return
        self.move(entity, term_width)

    def move(self, entity: Entity, term_width: int):
        raise NotImplementedError

    @staticmethod
    def track_walls(entity: Entity, term_width: int, lookahead: int = 0) -> bool:
        """Record the boundary touched this tick, if any"""
        if entity.touches(Side.LEFT, term_width, -lookahead):
            entity.collided = Side.LEFT
            return True
        if entity.touches(Side.RIGHT, term_width, lookahead):
            entity.collided = Side.RIGHT
            return True
        return False

    @staticmethod
    def sweep(entity: Entity) -> int:
        """Unit step away from the last wall touched (leftwards until one is)"""
        return 1 if entity.collided is Side.LEFT else -1


class ScoutMovement(Movement):
    """Sweeps sideways and drops down a block every time it hits a wall"""

    def move(self, entity, term_width):
        dy = config.SCOUT_DROP if self.track_walls(entity, term_width) else 0
        entity.x += self.sweep(entity)
        entity.y += dy


class WeaverMovement(Movement):
    """Sweeps sideways; when hit near a wall it dodges far the other way"""

    def move(self, entity, term_width):
        self.track_walls(entity, term_width)
        dx = self.sweep(entity)
        if entity.damaged:
            if entity.touches(Side.LEFT, term_width, -config.WEAVER_DODGE):
                dx = config.WEAVER_DODGE
            elif entity.touches(Side.RIGHT, term_width, config.WEAVER_DODGE):
                dx = -config.WEAVER_DODGE
        entity.x += dx


class BruteMovement(Movement):
    """Holds position until badly hurt, then bursts away from the nearer wall"""

    def move(self, entity, term_width):
        self.track_walls(entity, term_width, lookahead=config.BRUTE_BURST)
        if entity.damaged and entity.health < config.BRUTE_LOW_HEALTH:
            entity.x += config.BRUTE_BURST if entity.collided is Side.LEFT else -config.BRUTE_BURST


class BossMovement(Movement):
    """Sweeps sideways forever, facing the way it travels"""

    def move(self, entity, term_width):
        self.track_walls(entity, term_width)
        entity.x += self.sweep(entity)
        entity.turned = entity.collided is Side.LEFT


MOVEMENT: Dict[EntityKind, Movement] = {
    EntityKind.SCOUT: ScoutMovement(),
    EntityKind.WEAVER: WeaverMovement(),
    EntityKind.BRUTE: BruteMovement(),
    EntityKind.BOSS: BossMovement(),
}


@dataclass
class Player:
    """The player's ship, steered only by input. Nothing can damage it."""
    x: int
    y: int
    shape: Shape = shapes.PLAYER
    shot: Shape = shapes.PLAYER_SHOT
    shot_velocity: int = 1
    shot_damage: int = 1
    step_size: int = config.PLAYER_STEP
    damaged: bool = False

    @classmethod
    def centered(cls, term_width: int, term_height: int) -> "Player":
        return cls(x=term_width // 2, y=PLAYER.spawn_row(term_height))

    @property
    def width(self) -> int:
        return self.shape.width

    @property
    def current_shape(self) -> Shape:
        return self.shape

    def update(self, action: Action, term_width: int):
        """Move one step left/right; a move that would touch a wall is dropped"""
        if action is Action.LEFT:
            new_x = self.x - self.step_size
            if not touches_boundary(Side.LEFT, new_x, self.width, term_width):
                self.x = new_x
        elif action is Action.RIGHT:
            new_x = self.x + self.step_size
            if not touches_boundary(Side.RIGHT, new_x, self.width, term_width):
                self.x = new_x


# Archetype table. Spawn rows depend on terminal height.
PLAYER = Archetype(EntityKind.PLAYER, shapes.PLAYER, config.PLAYER_HEALTH,
                   lambda height: height - shapes.PLAYER.height)
SCOUT = Archetype(EntityKind.SCOUT, shapes.SCOUT, 5, lambda height: 4)
WEAVER = Archetype(EntityKind.WEAVER, shapes.WEAVER, 10, lambda height: height // 3)
BRUTE = Archetype(EntityKind.BRUTE, shapes.BRUTE, 15, lambda height: height // 2)
BOSS = Archetype(EntityKind.BOSS, shapes.BOSS, 200, lambda height: (height // 4) * 3,
                 alt_shape=shapes.BOSS_TURNED)

# Tier order matches the base-3 digits of the wave number, least to most dangerous
TIERS = (SCOUT, WEAVER, BRUTE, BOSS)
