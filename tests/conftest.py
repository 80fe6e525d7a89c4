import random
from pathlib import Path

import pytest

from algoglass.core.grid import create_grid, place_endpoints
from algoglass.core.types import PATH, WALL

MAPS_DIR = Path(__file__).resolve().parents[1] / "maps"


def build_grid(rows, cols, start, target, walls=()):
    grid = create_grid(rows, cols)
    for w in walls:
        cell = grid.cell(w)
        cell.is_wall = True
        cell.kind = WALL
    place_endpoints(grid, start, target)
    return grid


def ring(center, radius=2):
    """Walls forming a closed square ring around `center`."""
    r0, c0 = center
    out = []
    for r in range(r0 - radius, r0 + radius + 1):
        for c in range(c0 - radius, c0 + radius + 1):
            if abs(r - r0) == radius or abs(c - c0) == radius:
                out.append((r, c))
    return out


def random_walls(rows, cols, seed, density=0.3, keep=()):
    rng = random.Random(seed)
    return [(r, c) for r in range(rows) for c in range(cols)
            if (r, c) not in keep and rng.random() < density]


def path_len(sequence):
    return sequence[-1].metrics["path_len"]


def path_cells(snapshot):
    return [cell.coord for row in snapshot.grid_state.cells for cell in row if cell.kind == PATH]


def found(sequence):
    return sequence[-1].log_message != "No path found."


@pytest.fixture
def open_grid():
    """20x40 empty grid, start (10,10), target (10,30)."""
    return build_grid(20, 40, (10, 10), (10, 30))


@pytest.fixture
def enclosed_grid():
    """Target sealed inside a contiguous wall ring."""
    return build_grid(20, 40, (10, 10), (10, 30), walls=ring((10, 30)))
