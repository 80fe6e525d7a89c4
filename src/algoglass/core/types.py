# src/algoglass/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from math import inf
from types import MappingProxyType
from typing import List, Tuple, Optional, Mapping, Any

Coord = Tuple[int, int]  # (row, col)

# Cell kinds (display classification only; search membership lives in each algorithm)
EMPTY = "empty"
WALL = "wall"
START = "start"
TARGET = "target"
VISITED = "visited"
FRONTIER = "frontier"
CURRENT = "current"
PATH = "path"

ENDPOINT_KINDS = (START, TARGET)


class PreconditionError(ValueError):
    """Start/target placement that no algorithm is allowed to run against."""


class UnknownAlgorithmError(ValueError):
    pass


class MapFormatError(ValueError):
    pass


@dataclass
class Cell:
    row: int
    col: int
    kind: str = EMPTY
    is_wall: bool = False
    distance: float = inf
    g: float = inf
    h: float = inf
    f: float = inf
    parent: Optional[Coord] = None

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def copy(self) -> "Cell":
        # every field is immutable (parent is a tuple), so a field copy is a deep copy
        return Cell(self.row, self.col, self.kind, self.is_wall,
                    self.distance, self.g, self.h, self.f, self.parent)

    def reset_search(self) -> None:
        self.distance = inf
        self.g = inf
        self.h = inf
        self.f = inf
        self.parent = None


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[Cell]]             # [row][col]

    def in_bounds(self, c: Coord) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def is_block(self, c: Coord) -> bool:
        r, col = c
        return self.cells[r][col].is_wall

    def cell(self, c: Coord) -> Cell:
        r, col = c
        return self.cells[r][col]

    def neighbors4(self, c: Coord) -> List[Coord]:
        """Passable neighbours in the fixed order up, down, left, right."""
        r, col = c
        candidates: List[Coord] = [
            (r - 1, col),
            (r + 1, col),
            (r, col - 1),
            (r, col + 1),
        ]
        return [n for n in candidates if self.in_bounds(n) and not self.is_block(n)]

    def count(self, kind: str) -> int:
        return sum(1 for row in self.cells for cell in row if cell.kind == kind)


@dataclass(frozen=True)
class FrontierEntry:
    row: int
    col: int
    key: Optional[float] = None     # distance (Dijkstra) / f (A*); None for queue & stack

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


@dataclass(frozen=True)
class Snapshot:
    """One replay frame.

    Fields cannot be reassigned and `metrics` is a read-only mapping. `grid_state`
    is a private deep copy, but its cells are plain mutable dataclasses: treat them
    as read-only.
    """
    grid_state: Grid
    structure_state: Tuple[FrontierEntry, ...] = ()
    current_node: Optional[Cell] = None
    log_message: str = ""
    metrics: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


SimulationSequence = Tuple[Snapshot, ...]
