"""YAML scene configuration.

A scene names a pixel grid and an ordered list of operations to draw on
it::

    grid:
      width: 41
      height: 41
      origin: center
    operations:
      - name: circle
        params: {cx: 0, cy: 0, radius: 15}
      - name: line_wu
        params: {x0: -18, y0: -5, x1: 18, y1: 9}
        layer: LINES

Operation names and parameters are checked against the registry in
``rastergeom.operations`` when the scene is loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from rastergeom.ezdxf_drawable import DXF_LAYERS

GRID_ORIGINS = ('center', 'corner')
DEFAULT_WIDTH = 41
DEFAULT_HEIGHT = 41


class ConfigError(ValueError):
    """Bad scene file, operation name or operation parameter."""


@dataclass
class OperationConfig:
    """One operation of a scene, with its parameters already coerced."""

    name: str
    params: Dict[str, Any] = field(default_factory=dict)
    layer: Any = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OperationConfig":
        from rastergeom.operations import get_operation

        if not isinstance(data, dict):
            raise ConfigError(f"operation entry must be a mapping, got: {data!r}")
        unknown = set(data) - {'name', 'params', 'layer'}
        if unknown:
            raise ConfigError(f"unknown keys in operation entry: {sorted(unknown)}")
        name = data.get('name')
        if not isinstance(name, str):
            raise ConfigError(f"operation entry needs a 'name': {data!r}")
        params = data.get('params') or {}
        if not isinstance(params, dict):
            raise ConfigError(f"'params' of operation {name} must be a mapping")
        layer = data.get('layer') or False
        if layer not in DXF_LAYERS:
            raise ConfigError(f"unknown layer for operation {name}: {layer!r}")
        op = get_operation(name)
        return cls(name=name, params=op.bind(params), layer=layer)

    def run(self):
        from rastergeom.operations import get_operation

        return get_operation(self.name).func(**self.params)

    def run_steps(self):
        from rastergeom.operations import get_operation

        return get_operation(self.name).run_steps(**self.params)


@dataclass
class SceneConfig:
    """Grid description plus the operations to draw on it."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    origin: str = 'center'
    operations: List[OperationConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "SceneConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("scene must be a mapping")
        unknown = set(data) - {'grid', 'operations'}
        if unknown:
            raise ConfigError(f"unknown keys in scene: {sorted(unknown)}")

        grid = data.get('grid') or {}
        if not isinstance(grid, dict):
            raise ConfigError("'grid' must be a mapping")
        width = _positive_int(grid.get('width', DEFAULT_WIDTH), 'grid.width')
        height = _positive_int(grid.get('height', DEFAULT_HEIGHT), 'grid.height')
        origin = grid.get('origin', 'center')
        if origin not in GRID_ORIGINS:
            raise ConfigError(f"grid.origin must be one of {GRID_ORIGINS}, got: {origin!r}")

        entries = data.get('operations') or []
        if not isinstance(entries, list):
            raise ConfigError("'operations' must be a list")
        operations = [OperationConfig.from_dict(e) for e in entries]
        return cls(width=width, height=height, origin=origin,
                   operations=operations)

    @classmethod
    def load(cls, path: Path | str) -> "SceneConfig":
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"scene file not found: {path}")
        with path.open("r", encoding="utf-8") as fp:
            try:
                data = yaml.safe_load(fp)
            except yaml.YAMLError as e:
                raise ConfigError(f"bad YAML in {path}: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'grid': {'width': self.width, 'height': self.height,
                     'origin': self.origin},
            'operations': [{'name': op.name, 'params': _plain_params(op.params),
                            'layer': op.layer}
                           for op in self.operations],
        }

    def save(self, path: Path | str) -> None:
        path = Path(path)
        with path.open("w", encoding="utf-8") as fp:
            yaml.safe_dump(self.to_dict(), fp, sort_keys=False)


def _positive_int(value, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer, got: {value!r}")
    return value


def _plain_params(params: Dict[str, Any]) -> Dict[str, Any]:
    ## points become [x, y] lists so the YAML stays plain
    out = {}
    for k, v in params.items():
        if hasattr(v, 'x') and hasattr(v, 'y'):
            v = [v.x, v.y]
        elif isinstance(v, (list, tuple)):
            v = [[p.x, p.y] if hasattr(p, 'x') else p for p in v]
        out[k] = v
    return out


__all__ = [
    'ConfigError',
    'OperationConfig',
    'SceneConfig',
]
