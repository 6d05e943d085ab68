from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Tuple
from tiny_world.core.config_manager import ConfigError

class Terrain(IntEnum):
    """Tile content types. One enum serves both the terrain and the land-use layer."""
    AIR = 0
    BUILDABLE = 1
    GRASS = 2
    WATER = 3
    DESERT = 4
    ROAD = 5
    TREE = 6
    ROCK = 7
    HOUSE = 8
    FARM = 9
    LUMBERJACK = 10
    FISHERMAN = 11
    MASON = 12
    WAREHOUSE = 13
    TOWER = 14
    BULLDOZE = 15

class TerrainBits(IntFlag):
    NONE = 0
    IS_TERRAIN = 1
    CAN_BUILD = 2
    CAN_BUY = 4
    IS_WAREHOUSE = 8

class Resource(IntEnum):
    WOOD = 0
    STONES = 1
    FOOD = 2

Cost = Mapping[Resource, int]

@dataclass(frozen=True)
class TerrainProperties:
    name: str
    build_cost: Dict[Resource, int] = field(default_factory=dict)
    population: int = 0
    housing: int = 0
    build_radius: int = 0
    terrain_bits: TerrainBits = TerrainBits.NONE
    build_on: FrozenSet[Terrain] = frozenset()
    sprites: Tuple[str, ...] = ()

    def has(self, bits: TerrainBits) -> bool:
        return (self.terrain_bits & bits) == bits

class TerrainRules:
    """
    Read-only rule table with one entry per Terrain member.
    Looking up anything that is not a Terrain raises KeyError.
    """
    def __init__(self, properties: Mapping[Terrain, TerrainProperties]):
        missing = [t.name for t in Terrain if t not in properties]
        if missing:
            raise ConfigError(f"Missing terrain rules for: {', '.join(missing)}")
        self._properties = tuple(properties[t] for t in Terrain)

    def __getitem__(self, terrain: Terrain) -> TerrainProperties:
        if not isinstance(terrain, Terrain):
            raise KeyError(terrain)
        return self._properties[terrain]

    def __iter__(self) -> Iterator[Tuple[Terrain, TerrainProperties]]:
        return iter(zip(Terrain, self._properties))

    def __len__(self) -> int:
        return len(self._properties)


def parse_terrain(name: str) -> Terrain:
    try:
        return Terrain[name.upper()]
    except (KeyError, AttributeError):
        raise ConfigError(f"Unknown terrain type: {name!r}") from None

def parse_resource(name: str) -> Resource:
    try:
        return Resource[name.upper()]
    except (KeyError, AttributeError):
        raise ConfigError(f"Unknown resource: {name!r}") from None

def parse_bits(names) -> TerrainBits:
    bits = TerrainBits.NONE
    for name in names:
        try:
            bits |= TerrainBits[name.upper()]
        except (KeyError, AttributeError):
            raise ConfigError(f"Unknown terrain flag: {name!r}") from None
    return bits

def parse_cost(raw: Mapping[str, Any]) -> Dict[Resource, int]:
    cost = {}
    for name, amount in raw.items():
        if not isinstance(amount, int) or amount < 0:
            raise ConfigError(f"Invalid cost {name}={amount!r}")
        cost[parse_resource(name)] = amount
    return cost

def parse_sprites(raw, default: str) -> Tuple[str, ...]:
    if raw is None:
        return (default,)
    if not isinstance(raw, (list, tuple)) or not all(isinstance(n, str) for n in raw):
        raise ConfigError(f"Sprites must be a list of names, got {raw!r}")
    return tuple(raw)

def load_rules(section: Mapping[str, Any]) -> TerrainRules:
    """
    Builds the rule table from the "terrain" section of the balance config.

    Each key is a terrain name; each value may hold "cost", "population",
    "housing", "build_radius", "flags", "build_on" and "sprites".
    Any malformed entry raises ConfigError.
    """
    if not isinstance(section, Mapping):
        raise ConfigError("Terrain rules must be an object keyed by type name")

    properties = {}
    for name, raw in section.items():
        terrain = parse_terrain(name)
        if not isinstance(raw, Mapping):
            raise ConfigError(f"Rules for {name!r} must be an object")
        try:
            properties[terrain] = TerrainProperties(
                name=terrain.name.lower(),
                build_cost=parse_cost(raw.get("cost", {})),
                population=int(raw.get("population", 0)),
                housing=int(raw.get("housing", 0)),
                build_radius=int(raw.get("build_radius", 0)),
                terrain_bits=parse_bits(raw.get("flags", [])),
                build_on=frozenset(parse_terrain(t) for t in raw.get("build_on", [])),
                sprites=parse_sprites(raw.get("sprites"), terrain.name.lower()),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Malformed rules for {name!r}: {e}") from e
    return TerrainRules(properties)
