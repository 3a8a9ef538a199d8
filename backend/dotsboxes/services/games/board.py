from typing import List, Tuple

EDGE_TYPES = ('h', 'v')


def _grid(rows: int, cols: int) -> List[List[int]]:
    return [[0] * cols for _ in range(rows)]


class Board:
    """Edge and box grids for one game.

    ``h_lines`` is (rows + 1) x cols, ``v_lines`` is rows x (cols + 1) and
    ``boxes`` is rows x cols. Every cell holds 0 or the pIndex (1 or 2) of
    the player who drew the edge / completed the box.
    """

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise ValueError(f'board must be at least 1x1, got {rows}x{cols}')
        self.rows = rows
        self.cols = cols
        self.h_lines = _grid(rows + 1, cols)
        self.v_lines = _grid(rows, cols + 1)
        self.boxes = _grid(rows, cols)

    def in_range(self, edge_type: str, r: int, c: int) -> bool:
        if edge_type == 'h':
            return 0 <= r <= self.rows and 0 <= c < self.cols
        if edge_type == 'v':
            return 0 <= r < self.rows and 0 <= c <= self.cols
        return False

    def apply_edge(self, edge_type: str, r: int, c: int, by_player: int) -> bool:
        """Claim an edge for ``by_player``.

        Returns False without touching the grids when the coordinates are
        out of range or the edge is already drawn.
        """
        if not self.in_range(edge_type, r, c):
            return False
        lines = self.h_lines if edge_type == 'h' else self.v_lines
        if lines[r][c] != 0:
            return False
        lines[r][c] = by_player
        return True

    def settle_boxes(self, by_player: int) -> List[Tuple[int, int]]:
        """Assign every newly enclosed box to ``by_player``.

        Call once after each accepted edge. A single edge closes at most two
        boxes; boxes that are already owned are never reassigned.
        """
        completed = []
        h, v = self.h_lines, self.v_lines
        for r in range(self.rows):
            for c in range(self.cols):
                if self.boxes[r][c] != 0:
                    continue
                if h[r][c] and h[r + 1][c] and v[r][c] and v[r][c + 1]:
                    self.boxes[r][c] = by_player
                    completed.append((r, c))
        return completed

    @staticmethod
    def is_full(rows: int, cols: int, total_score: int) -> bool:
        # Scores are authoritative, so there is no need to rescan the grid
        return total_score == rows * cols

    def is_empty(self) -> bool:
        return not any(any(row) for grid in (self.h_lines, self.v_lines, self.boxes) for row in grid)

    def to_dict(self):
        return {
            'hLines': [list(row) for row in self.h_lines],
            'vLines': [list(row) for row in self.v_lines],
            'boxes': [list(row) for row in self.boxes],
        }
