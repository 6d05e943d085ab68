from dataclasses import dataclass
from tiny_world.world.terrain import Terrain, parse_terrain

@dataclass
class Selection:
    """The build action the player currently has chosen."""
    build_type: Terrain = Terrain.AIR
    allow_remove: bool = False
    rand_sprite: bool = False

    def reset(self):
        # AIR lacks CAN_BUILD, so the build tool goes idle
        self.build_type = Terrain.AIR
        self.allow_remove = False
        self.rand_sprite = False

    def to_dict(self) -> dict:
        return {
            "build_type": self.build_type.name.lower(),
            "allow_remove": self.allow_remove,
            "rand_sprite": self.rand_sprite,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Selection":
        return cls(
            build_type=parse_terrain(data.get("build_type", "air")),
            allow_remove=bool(data.get("allow_remove", False)),
            rand_sprite=bool(data.get("rand_sprite", False)),
        )
