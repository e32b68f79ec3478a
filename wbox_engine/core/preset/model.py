from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ConverterConfig:
    algorithm: str
    strength: float
    included: Tuple[str, ...] = ()
    name: str = ""
    description: str = ""
    output_dir: str = "."
    preview_name: str = "preview.png"
    archive_name: str = "map.wbox"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "strength": self.strength,
            "included": list(self.included),
            "name": self.name,
            "description": self.description,
            "output_dir": self.output_dir,
            "preview_name": self.preview_name,
            "archive_name": self.archive_name,
        }
