"""Arena environment contract.

Purpose: Describe the objects and calls the bot consumes from the host arena
Key Decisions: Protocols only - the arena owns every creep and structure, the bot just reads them and issues actions
Limitations: Coordinates are integer grid cells, y grows downward (TOP = smaller y)
"""

from enum import Enum, IntEnum
from typing import List, NamedTuple, Optional, Protocol, Sequence, Union


class Point(NamedTuple):
    """Grid cell on the arena map."""

    x: int
    y: int


class BodyPart(str, Enum):
    MOVE = "move"
    WORK = "work"
    CARRY = "carry"
    ATTACK = "attack"
    RANGED_ATTACK = "ranged_attack"
    HEAL = "heal"
    TOUGH = "tough"


OFFENSIVE_PARTS = frozenset({BodyPart.ATTACK, BodyPart.RANGED_ATTACK})


class StructureType(str, Enum):
    SPAWN = "spawn"
    EXTENSION = "extension"
    CONTAINER = "container"
    TOWER = "tower"
    WALL = "wall"
    RAMPART = "rampart"


class ResultCode(IntEnum):
    """Status returned by every action primitive."""

    OK = 0
    ERR_NOT_OWNER = -1
    ERR_BUSY = -4
    ERR_NOT_FOUND = -5
    ERR_NOT_ENOUGH_RESOURCES = -6
    ERR_INVALID_TARGET = -7
    ERR_FULL = -8
    ERR_NOT_IN_RANGE = -9
    ERR_INVALID_ARGS = -10
    ERR_TIRED = -11
    ERR_NO_BODYPART = -12


class Direction(IntEnum):
    TOP = 1
    TOP_RIGHT = 2
    RIGHT = 3
    BOTTOM_RIGHT = 4
    BOTTOM = 5
    BOTTOM_LEFT = 6
    LEFT = 7
    TOP_LEFT = 8


_DIRECTIONS = {
    (0, -1): Direction.TOP,
    (1, -1): Direction.TOP_RIGHT,
    (1, 0): Direction.RIGHT,
    (1, 1): Direction.BOTTOM_RIGHT,
    (0, 1): Direction.BOTTOM,
    (-1, 1): Direction.BOTTOM_LEFT,
    (-1, 0): Direction.LEFT,
    (-1, -1): Direction.TOP_LEFT,
}

RESOURCE_ENERGY = "energy"


def get_direction(dx: int, dy: int) -> Optional[Direction]:
    """
    Compass direction for an offset, using only its signs.

    Returns None for a zero offset (nowhere to go).
    """
    key = ((dx > 0) - (dx < 0), (dy > 0) - (dy < 0))
    return _DIRECTIONS.get(key)


class Positioned(Protocol):
    x: int
    y: int


class Store(Protocol):
    def get_used_capacity(self, resource: str = RESOURCE_ENERGY) -> int: ...

    def get_free_capacity(self, resource: str = RESOURCE_ENERGY) -> int: ...


class Creep(Protocol):
    id: str
    x: int
    y: int
    hits: int
    hits_max: int
    body: Sequence[BodyPart]
    my: bool
    store: Store

    def move(self, direction: Direction) -> ResultCode: ...

    def attack(self, target) -> ResultCode: ...

    def ranged_attack(self, target) -> ResultCode: ...

    def heal(self, target) -> ResultCode: ...

    def ranged_heal(self, target) -> ResultCode: ...

    def harvest(self, source) -> ResultCode: ...

    def withdraw(self, target, resource: str = RESOURCE_ENERGY) -> ResultCode: ...

    def transfer(self, target, resource: str = RESOURCE_ENERGY) -> ResultCode: ...

    def build(self, site) -> ResultCode: ...


class Structure(Protocol):
    id: str
    x: int
    y: int
    my: Optional[bool]
    structure_type: StructureType
    hits: int
    store: Optional[Store]
    cooldown: int

    # spawns
    def is_busy(self) -> bool: ...

    def spawn_creep(self, body: Sequence[BodyPart]) -> ResultCode: ...

    # towers
    def attack(self, target) -> ResultCode: ...


class Source(Protocol):
    id: str
    x: int
    y: int
    energy: int


class ConstructionSite(Protocol):
    id: str
    x: int
    y: int
    my: bool
    structure_type: StructureType


Target = Union[Positioned, Point]


class ArenaGame(Protocol):
    """Calls the bot makes into the host arena each tick."""

    def get_ticks(self) -> int: ...

    def get_creeps(self) -> List[Creep]: ...

    def get_structures(self) -> List[Structure]: ...

    def get_sources(self) -> List[Source]: ...

    def get_construction_sites(self) -> List[ConstructionSite]: ...

    def find_path(self, origin: Target, goal: Target, ignore_creeps: bool = False) -> Optional[List[Point]]: ...

    def create_construction_site(self, x: int, y: int, structure_type: StructureType) -> ResultCode: ...
