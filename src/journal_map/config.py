# config.py
from dataclasses import dataclass
from pathlib import Path
import json

@dataclass
class MapConfig:
    entries: str
    zoom: float | None = None
    locale: str | None = None
    device_lat: float | None = None
    device_lon: float | None = None
    strategy: str = "greedy"
    print_members: bool = False
    validate_schema: bool = True

    def has_device_location(self) -> bool:
        return self.device_lat is not None and self.device_lon is not None

def load_json(path: str | None) -> dict:
    if not path: return {}
    p = Path(path)
    if not p.exists(): raise FileNotFoundError(path)
    with p.open("r", encoding="utf-8") as f: return json.load(f)
