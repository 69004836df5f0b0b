"""Editor settings dataclass and JSON helpers."""
from __future__ import annotations

from dataclasses import dataclass, asdict
import json
from pathlib import Path
from typing import Dict, Optional, Tuple, get_type_hints, get_origin, get_args

Color = Tuple[int, int, int]

DEFAULT_STORAGE_PATH = Path.home() / ".board_editor" / "cached_field.json"


@dataclass
class EditorConfig:
    """User-tunable settings for the board editor app."""

    window_size: Tuple[int, int] = (1280, 760)
    storage_path: str = str(DEFAULT_STORAGE_PATH)
    zoom_step: float = 1.1  # wheel factor per notch
    background: Color = (20, 24, 28)
    show_grid: bool = True
    autosave: bool = True
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def storage(self) -> Path:
        return Path(self.storage_path).expanduser()


def _dataclass_from_dict(cls, data: Dict) -> object:
    field_types = get_type_hints(cls)
    kwargs = {}
    for key, value in data.items():
        if key not in field_types:
            raise ValueError(f"unknown {cls.__name__} setting '{key}'")
        expected = field_types[key]
        origin = get_origin(expected)
        if origin is tuple and isinstance(value, list):
            kwargs[key] = tuple(value)
            continue
        if origin is not None:
            args = [a for a in get_args(expected) if a is not type(None)]
            if len(args) == 1 and hasattr(args[0], "__dataclass_fields__"):
                kwargs[key] = None if value is None else _dataclass_from_dict(args[0], value)
                continue
        if hasattr(expected, "__dataclass_fields__"):
            kwargs[key] = _dataclass_from_dict(expected, value)
        else:
            kwargs[key] = value
    return cls(**kwargs)


def load_json(path: Path, cls):
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return _dataclass_from_dict(cls, data)


def save_json(path: Path, obj) -> None:
    def _encode(o):
        if hasattr(o, "__dataclass_fields__"):
            return {k: _encode(v) for k, v in asdict(o).items()}
        if isinstance(o, (list, tuple)):
            return [_encode(v) for v in o]
        if isinstance(o, dict):
            return {k: _encode(v) for k, v in o.items()}
        return o

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(_encode(obj), f, indent=2)


def load_config(path: Optional[Path]) -> EditorConfig:
    """Read settings from ``path``; a missing file means defaults."""
    if path is None or not path.exists():
        return EditorConfig()
    return load_json(path, EditorConfig)
