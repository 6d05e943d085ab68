from typing import Any, Dict, List, Mapping, Sequence
from tiny_world.core.config_manager import ConfigError

NAME_UNKNOWN = "unknown"

class SpriteIndex:
    """
    Name -> index lookup for sprite sheets, with pixel heights for draw order.
    Image loading lives with the renderer; this only tracks sheet metadata.
    """
    def __init__(self, sheets: Sequence[Mapping[str, Any]]):
        self.names: List[str] = []
        self.heights: List[int] = []
        self.indices: Dict[str, int] = {}

        for sheet in sheets:
            for info in sheet.get("sprites", []):
                if not isinstance(info, Mapping) or not isinstance(info.get("name"), str):
                    raise ConfigError(f"sprite entry needs a string name: {info!r}")
                name = info["name"]
                if name in self.indices:
                    raise ConfigError(f"duplicate sprite name: {name}")
                try:
                    height = int(info.get("height", 0))
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"bad height for sprite {name}: {e}") from e
                self.indices[name] = len(self.names)
                self.names.append(name)
                self.heights.append(height)

        if NAME_UNKNOWN not in self.indices:
            raise ConfigError(f"sprite sheets must define '{NAME_UNKNOWN}'")
        self.idx_unknown = self.indices[NAME_UNKNOWN]

    def get_index(self, name: str) -> int:
        return self.indices.get(name, self.idx_unknown)

    def height(self, index: int) -> int:
        return self.heights[index]

    def __len__(self) -> int:
        return len(self.names)
