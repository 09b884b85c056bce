"""
DXF export utilities for rastergeom results.

Writes rasterizer output, polygons, clipped segments, triangulations,
Voronoi edges and projected faces to DXF using the ezdxf library via
rastergeom's ezdxfDraw drawable class.

Copyright (c) 2026 rastergeom contributors
All rights reserved (MIT License)
"""

import logging
from pathlib import Path
from typing import Any, List, Union

from rastergeom.ezdxf_drawable import ezdxfDraw

logger = logging.getLogger(__name__)


def _base_filename(output_path) -> str:
    # ezdxfDraw.display() adds the .dxf extension itself
    path = Path(output_path)
    if path.suffix.lower() == '.dxf':
        return str(path.with_suffix(''))
    return str(path)


def write_dxf(results, output_path, layer=False, polystyle: str = 'points') -> bool:
    """Export results to a DXF file.

    Args:
        results: a result record or a (nested) list of them
        output_path: Path to output DXF file (with or without .dxf extension)
        layer: DXF layer name; by default pixels go to PIXELS and
            lines to LINES
        polystyle: how bare point lists are drawn, see ``Drawable.polystyle``

    Returns:
        True if export succeeded, False otherwise.
    """
    drawable = ezdxfDraw()
    drawable.filename = _base_filename(output_path)

    try:
        drawable.layer = layer
        drawable.polystyle = polystyle
        drawable.draw(results)
        drawable.display()
        return True
    except (ValueError, OSError) as e:
        logger.error("DXF export error: %s", e)
        return False


def write_dxf_multi(results: List[Any], output_path,
                    layers: Union[str, List[str], bool] = False,
                    polystyles: Union[str, List[str]] = 'points') -> bool:
    """Export several results to a single DXF file, each with its own
    layer and polystyle.

    Returns:
        True if export succeeded, False otherwise.
    """
    drawable = ezdxfDraw()
    drawable.filename = _base_filename(output_path)

    if not isinstance(layers, list):
        layers = [layers] * len(results)
    if isinstance(polystyles, str):
        polystyles = [polystyles] * len(results)

    try:
        for result, layer, style in zip(results, layers, polystyles):
            drawable.layer = layer
            drawable.polystyle = style
            drawable.draw(result)
        drawable.display()
        return True
    except (ValueError, OSError) as e:
        logger.error("DXF export error: %s", e)
        return False


__all__ = ['write_dxf', 'write_dxf_multi']
