#!/usr/bin/env python3
"""
Command line front end for rastergeom.

Usage:
    python -m rastergeom list
    python -m rastergeom draw NAME [--param NAME=VALUE ...] [--steps] [--ascii] [--dxf FILE]
    python -m rastergeom run SCENE.yaml [--ascii] [--dxf FILE]

Examples:
    # Show every operation with its parameters and defaults
    python -m rastergeom list

    # Print the pixels of a Bresenham line
    python -m rastergeom draw line_bresenham --param x0=0 --param y0=0 \
        --param x1=5 --param y1=2

    # Show the decision trace of a circle and draw it as text
    python -m rastergeom draw circle --param radius=8 --steps --ascii

    # Triangulate some points and write the result to DXF
    python -m rastergeom draw delaunay --param points="0,0;8,0;8,8;0,8;3,4" \
        --dxf delaunay.dxf

    # Draw every operation of a scene file
    python -m rastergeom run scene.yaml --ascii
"""

import argparse
import logging
import sys
from typing import Any, Dict

from rastergeom import __version__
from rastergeom.config import ConfigError, SceneConfig
from rastergeom.ezdxf_exporter import write_dxf, write_dxf_multi
from rastergeom.grid_drawable import GridDraw
from rastergeom.operations import get_operation, list_operations


def parse_param(param_str: str) -> tuple:
    """Parse a parameter string like 'name=value' into (name, value).

    Numbers and booleans are converted; anything else, including point
    lists such as ``0,0;4,0``, stays a string for the operation to
    coerce."""
    if '=' not in param_str:
        raise ConfigError(f"Invalid parameter format: {param_str} (expected name=value)")

    name, value_str = param_str.split('=', 1)
    name = name.strip()
    value_str = value_str.strip()

    if value_str.lower() == 'true':
        return (name, True)
    elif value_str.lower() == 'false':
        return (name, False)

    try:
        return (name, int(value_str))
    except ValueError:
        pass

    try:
        return (name, float(value_str))
    except ValueError:
        pass

    # Strip quotes if present
    if (value_str.startswith('"') and value_str.endswith('"')) or \
       (value_str.startswith("'") and value_str.endswith("'")):
        value_str = value_str[1:-1]

    return (name, value_str)


def format_record(rec) -> str:
    """One line of text for a result record."""
    if hasattr(rec, 'message'):
        return f"{rec.step_index}: {rec.message}"
    fields = getattr(rec, '__dataclass_fields__', None)
    if not fields:
        return str(rec)
    return ' '.join(f"{k}={getattr(rec, k)}" for k in fields)


def cmd_list(args):
    """List the registered operations."""
    for op in list_operations():
        trace = ' [steps]' if op.trace else ''
        print(f"{op.signature()}{trace}")
        print(f"    {op.description}")
    return 0


def cmd_draw(args):
    """Run one operation and print or render its result."""
    try:
        op = get_operation(args.name)
        parameters: Dict[str, Any] = {}
        for param_str in args.param or []:
            name, value = parse_param(param_str)
            parameters[name] = value
        result = op.run_steps(**parameters) if args.steps else op.run(**parameters)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for rec in result:
        print(format_record(rec))

    ## a trace of snapshots is drawn from its last one
    drawn = result[-1] if args.steps and _is_snapshots(result) else result

    if args.ascii:
        try:
            grid = GridDraw(args.width, args.height, y_down=op.y_down)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        grid.polystyle = op.polystyle
        grid.draw(drawn)
        print(grid.render_text())

    if args.dxf:
        if not write_dxf(drawn, args.dxf, polystyle=op.polystyle):
            return 1
        print(f"Exported to: {args.dxf}")
    return 0


def _is_snapshots(result) -> bool:
    return bool(result) and hasattr(result[-1], 'step_index') and \
        not hasattr(result[-1], 'x')


def cmd_run(args):
    """Run every operation of a scene file."""
    try:
        scene = SceneConfig.load(args.scene)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    results = []
    for entry in scene.operations:
        result = entry.run()
        print(f"{entry.name}: {len(result)} record(s)")
        results.append(result)

    if args.ascii:
        grid = GridDraw(scene.width, scene.height, origin=scene.origin)
        for entry, result in zip(scene.operations, results):
            op = get_operation(entry.name)
            grid.y_down = op.y_down
            grid.polystyle = op.polystyle
            grid.draw(result)
        print(grid.render_text())

    if args.dxf:
        ok = write_dxf_multi(
            results, args.dxf,
            layers=[entry.layer for entry in scene.operations],
            polystyles=[get_operation(e.name).polystyle for e in scene.operations])
        if not ok:
            return 1
        print(f"Exported to: {args.dxf}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m rastergeom',
        description='raster graphics and computational geometry algorithms',
    )
    parser.add_argument('--version', action='version',
                        version=f'rastergeom {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log algorithm progress')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # list command
    subparsers.add_parser('list', help='List available operations')

    # draw command
    draw_parser = subparsers.add_parser('draw', help='Run a single operation')
    draw_parser.add_argument('name', help='Operation name')
    draw_parser.add_argument('-p', '--param', action='append', metavar='NAME=VALUE',
                             help='Parameter value (can be repeated)')
    draw_parser.add_argument('-s', '--steps', action='store_true',
                             help='Print the step trace instead of the result')
    draw_parser.add_argument('-a', '--ascii', action='store_true',
                             help='Render the result as text')
    draw_parser.add_argument('--width', type=int, default=41, help='Text grid width')
    draw_parser.add_argument('--height', type=int, default=41, help='Text grid height')
    draw_parser.add_argument('-o', '--dxf', metavar='FILE', help='Write the result to DXF')

    # run command
    run_parser = subparsers.add_parser('run', help='Run every operation of a scene file')
    run_parser.add_argument('scene', help='YAML scene file')
    run_parser.add_argument('-a', '--ascii', action='store_true',
                            help='Render the scene as text')
    run_parser.add_argument('-o', '--dxf', metavar='FILE', help='Write the scene to DXF')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    if args.action == 'list':
        return cmd_list(args)
    elif args.action == 'draw':
        return cmd_draw(args)
    elif args.action == 'run':
        return cmd_run(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
