#!/usr/bin/env python3
"""
A* with the Manhattan heuristic (admissible and consistent on a 4-connected,
uniform-cost grid).

Frontier order: lower f, then lower h (prefer the node estimated closer to the
target), then insertion order. The open list is re-sorted before every pick; a
frontier cell whose g improves keeps its slot and is re-ranked by that sort.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Sequence

from algoglass.core.search import GridSearch, manhattan
from algoglass.core.types import Cell, Coord, FRONTIER


@dataclass
class AStarAlgo(GridSearch):
    name: str = "A*"
    structure_name: ClassVar[str] = "Priority Queue"

    open_list: List[Coord] = field(default_factory=list)
    open_set: set = field(default_factory=set)

    # -------------------- helpers --------------------

    def _h(self, c: Coord) -> int:
        return manhattan(c, self.target)

    # -------------------- hooks --------------------

    def _seed(self, start: Cell) -> None:
        self.open_list.clear()
        self.open_set.clear()
        start.g = 0
        start.h = self._h(start.coord)
        start.f = start.g + start.h
        self.open_list.append(start.coord)
        self.open_set.add(start.coord)

    def _frontier(self) -> Sequence[Coord]:
        return self.open_list

    def _key(self, cell: Cell) -> Optional[float]:
        return cell.f

    def _extract(self) -> Optional[Coord]:
        def rank(c: Coord):
            cell = self.grid.cell(c)
            return (cell.f, cell.h)

        self.open_list.sort(key=rank)
        u = self.open_list.pop(0)
        self.open_set.discard(u)
        return u

    def _expand(self, cell: Cell) -> int:
        added = 0
        for v in self.grid.neighbors4(cell.coord):
            if v in self.closed_set or v == self.start:
                continue

            tentative_g = cell.g + 1
            in_open = v in self.open_set
            n = self.grid.cell(v)
            if not in_open or tentative_g < n.g:
                n.parent = cell.coord
                n.g = tentative_g
                n.h = self._h(v)
                n.f = n.g + n.h
                if not in_open:
                    self.open_set.add(v)
                    self.open_list.append(v)
                    self._paint(n, FRONTIER)
                    added += 1
        return added

    # -------------------- log wording --------------------

    def _init_message(self, start: Cell) -> str:
        return f"A* Started. Start F = {start.f} (G:0 + H:{start.h})"

    def _pick_message(self, cell: Cell) -> str:
        return f"Picked Best Node ({cell.row}, {cell.col}) with F: {cell.f}"

    def _expand_message(self, added: int) -> str:
        return f"Updated Neighbors. Open Set Size: {len(self.open_list)}"

    def _found_message(self, length: int) -> str:
        return f"A* Optimal Path Found! Length: {length}"
