# src/algoglass/core/dijkstra.py
#!/usr/bin/env python3

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Sequence

from algoglass.core.search import GridSearch
from algoglass.core.types import Cell, Coord, FRONTIER


@dataclass
class DijkstraAlgo(GridSearch):
    name: str = "Dijkstra"
    structure_name: ClassVar[str] = "Priority Queue"

    # Plain list re-sorted before every extraction (stable, so ties stay FIFO)
    open_list: List[Coord] = field(default_factory=list)
    open_set: set = field(default_factory=set)

    def _seed(self, start: Cell) -> None:
        self.open_list.clear()
        self.open_set.clear()
        start.distance = 0
        self.open_list.append(start.coord)
        self.open_set.add(start.coord)

    def _frontier(self) -> Sequence[Coord]:
        return self.open_list

    def _key(self, cell: Cell) -> Optional[float]:
        return cell.distance

    def _extract(self) -> Optional[Coord]:
        self.open_list.sort(key=lambda c: self.grid.cell(c).distance)
        u = self.open_list.pop(0)
        self.open_set.discard(u)
        return u

    def _expand(self, cell: Cell) -> int:
        added = 0
        for v in self.grid.neighbors4(cell.coord):
            if v in self.closed_set or v == self.start:
                continue

            alt = cell.distance + 1  # uniform weight
            n = self.grid.cell(v)
            if alt < n.distance:
                n.parent = cell.coord
                n.distance = alt
                if v not in self.open_set:
                    self.open_set.add(v)
                    self.open_list.append(v)
                    self._paint(n, FRONTIER)
                    added += 1
        return added

    def _init_message(self, start: Cell) -> str:
        return "Dijkstra Started. Start Dist = 0"

    def _pick_message(self, cell: Cell) -> str:
        return f"Processing Node ({cell.row}, {cell.col}) Dist: {cell.distance}"

    def _expand_message(self, added: int) -> str:
        return f"Updated Neighbors. PQ Size: {len(self.open_list)}"

    def _found_message(self, length: int) -> str:
        return f"Dijkstra Shortest Path Found! Length: {length}"
