# src/algoglass/core/grid.py
#!/usr/bin/env python3
"""
Grid model: construction, deep copy, clean-before-run and JSON map loading.

Map file format (all coordinates are [row, col]):

    {
      "rows": 20, "cols": 40,
      "start": [10, 10], "target": [10, 30],
      "walls": [[3, 4], [3, 5]]          # or "cells": [[0, 1, ...], ...] with 1 = wall
    }
"""

import json
from pathlib import Path
from typing import List, Tuple

from algoglass.core.types import (
    Cell, Coord, Grid, MapFormatError,
    EMPTY, WALL, START, TARGET,
)


def create_grid(rows: int, cols: int) -> Grid:
    if rows <= 0 or cols <= 0:
        raise ValueError(f"grid dimensions must be positive, got {rows}x{cols}")
    cells = [[Cell(r, c) for c in range(cols)] for r in range(rows)]
    return Grid(rows, cols, cells)


def clone_grid(grid: Grid) -> Grid:
    return Grid(grid.rows, grid.cols, [[cell.copy() for cell in row] for row in grid.cells])


def clean_for_run(grid: Grid) -> Grid:
    """Copy of `grid` with search fields reset; walls and start/target kept."""
    out = clone_grid(grid)
    for row in out.cells:
        for cell in row:
            cell.reset_search()
            if cell.kind in (START, TARGET):
                continue
            cell.kind = WALL if cell.is_wall else EMPTY
    return out


def place_endpoints(grid: Grid, start: Coord, target: Coord) -> None:
    """Mark start/target on a fresh grid; endpoints are never walls."""
    for coord, kind in ((start, START), (target, TARGET)):
        cell = grid.cell(coord)
        cell.is_wall = False
        cell.kind = kind


# ---------- Loader ----------
def _coord(value, label: str) -> Coord:
    try:
        r, c = value
        return (int(r), int(c))
    except (TypeError, ValueError):
        raise MapFormatError(f"{label} must be a [row, col] pair, got {value!r}")


def load_map(path: Path) -> Tuple[Grid, Coord, Coord]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as ex:
        raise MapFormatError(f"{path}: invalid JSON ({ex})")
    if not isinstance(data, dict):
        raise MapFormatError(f"{path}: top level must be an object, got {type(data).__name__}")

    cells = data.get("cells")
    if cells is not None and not (isinstance(cells, list) and all(isinstance(r, list) for r in cells)):
        raise MapFormatError(f"{path}: cells must be a list of rows")
    if not isinstance(data.get("walls", []), list):
        raise MapFormatError(f"{path}: walls must be a list of [row, col] pairs")
    try:
        rows = int(data.get("rows", len(cells) if cells else 0))
        cols = int(data.get("cols", len(cells[0]) if cells else 0))
    except (TypeError, ValueError):
        raise MapFormatError(f"{path}: rows/cols must be integers")
    if "start" not in data or "target" not in data:
        raise MapFormatError(f"{path}: missing start or target")
    start = _coord(data["start"], "start")
    target = _coord(data["target"], "target")

    try:
        grid = create_grid(rows, cols)
    except ValueError as ex:
        raise MapFormatError(f"{path}: {ex}")

    walls: List[Coord] = [_coord(w, "wall") for w in data.get("walls", [])]
    if cells is not None:
        if len(cells) != rows or any(len(r) != cols for r in cells):
            raise MapFormatError(f"{path}: cells size mismatch")
        walls.extend((r, c) for r in range(rows) for c in range(cols) if cells[r][c] == 1)

    for label, coord in (("start", start), ("target", target)):
        if not grid.in_bounds(coord):
            raise MapFormatError(f"{path}: {label} out of bounds")
    if start == target:
        raise MapFormatError(f"{path}: start and target coincide")

    for w in walls:
        if not grid.in_bounds(w):
            raise MapFormatError(f"{path}: wall {w} out of bounds")
        cell = grid.cell(w)
        cell.is_wall = True
        cell.kind = WALL
    place_endpoints(grid, start, target)
    return grid, start, target
