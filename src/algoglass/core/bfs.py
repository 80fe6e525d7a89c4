# src/algoglass/core/bfs.py
#!/usr/bin/env python3

from collections import deque
from dataclasses import dataclass, field
from typing import ClassVar, Deque, Optional, Sequence

from algoglass.core.search import GridSearch
from algoglass.core.types import Cell, Coord, FRONTIER


@dataclass
class BFSAlgo(GridSearch):
    name: str = "BFS"
    structure_name: ClassVar[str] = "Queue (FIFO)"

    queue: Deque[Coord] = field(default_factory=deque)
    seen: set = field(default_factory=set)     # marked on enqueue, not on dequeue

    def _seed(self, start: Cell) -> None:
        self.queue.clear()
        self.seen.clear()
        start.distance = 0
        self.queue.append(start.coord)
        self.seen.add(start.coord)

    def _frontier(self) -> Sequence[Coord]:
        return self.queue

    def _extract(self) -> Optional[Coord]:
        return self.queue.popleft()

    def _expand(self, cell: Cell) -> int:
        added = 0
        for v in self.grid.neighbors4(cell.coord):
            if v in self.seen:
                continue
            self.seen.add(v)
            n = self.grid.cell(v)
            n.parent = cell.coord
            n.distance = cell.distance + 1
            self._paint(n, FRONTIER)
            self.queue.append(v)
            added += 1
        return added

    def _pick_message(self, cell: Cell) -> str:
        return f"Dequeue ({cell.row}, {cell.col}). Checking neighbors."

    def _expand_message(self, added: int) -> str:
        return f"Neighbors added: {added}. Queue: {len(self.queue)}"

    def _found_message(self, length: int) -> str:
        return f"Path Constructed! Length: {length}"
