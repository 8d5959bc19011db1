import random
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple
import copy

from game_config import (
    Board,
    Cell,
    Difficulty,
    GameConfig,
    SudokuError,
    get_game_config,
    parse_difficulty,
)


class GenerationError(SudokuError):
    """The solver could not complete an empty board."""


class PuzzleResult(NamedTuple):
    initial: Board
    solved: Board


class Progress(Enum):
    IN_PROGRESS = "in_progress"
    WRONG = "wrong"
    SOLVED = "solved"


def find_empty(board: Board) -> Cell | None:
    for r, row in enumerate(board):
        for c, value in enumerate(row):
            if value == 0:
                return r, c
    return None

def valid(board: Board, num: int, pos: Cell, config: GameConfig) -> bool:
    r, c = pos
    if any(board[r][i] == num for i in range(config.size)):
        return False
    if any(board[i][c] == num for i in range(config.size)):
        return False
    br, bc = config.box_origin(r, c)
    for i in range(br, br + config.box_height):
        for j in range(bc, bc + config.box_width):
            if board[i][j] == num:
                return False
    return True

def solve(
    board: Board, config: GameConfig, counter: Optional[List[int]] = None, rng: random.Random = random
) -> bool:
    """Fill ``board`` in place, trying candidates in a fresh random order at every cell.

    ``counter[0]`` is incremented once per placement when a counter is given.
    """
    empty = find_empty(board)
    if not empty:
        return True
    r, c = empty
    nums = config.symbols
    rng.shuffle(nums)
    for n in nums:
        if valid(board, n, (r, c), config):
            board[r][c] = n
            if counter is not None:
                counter[0] += 1
            if solve(board, config, counter, rng):
                return True
            board[r][c] = 0
    return False

def generate_full_board(config: GameConfig, rng: random.Random = random) -> Board:
    board = config.empty_board()
    if not solve(board, config, rng=rng):
        raise GenerationError(f"could not fill an empty {config.mode} board")
    return board

def remove_cells(board: Board, count: int, rng: random.Random = random) -> Board:
    """Return a copy of ``board`` with up to ``count`` random cells blanked."""
    puzzle = copy.deepcopy(board)
    cells = [(r, c) for r in range(len(board)) for c in range(len(board[r]))]
    rng.shuffle(cells)

    removed = 0
    while cells and removed < count:
        r, c = cells.pop()
        if puzzle[r][c] != 0:
            puzzle[r][c] = 0
            removed += 1
    return puzzle

def generate_puzzle(
    difficulty: Difficulty | str = "easy", game_mode: str = "4x4", rng: random.Random = random
) -> PuzzleResult:
    config = get_game_config(game_mode)
    cells_to_remove = config.cells_to_remove(parse_difficulty(difficulty))
    solution = generate_full_board(config, rng)
    puzzle = remove_cells(solution, cells_to_remove, rng)
    return PuzzleResult(puzzle, solution)

# ---- Board checks ----
def board_shape_ok(board: object, config: GameConfig) -> bool:
    if not isinstance(board, list) or len(board) != config.size:
        return False
    for row in board:
        if not isinstance(row, list) or len(row) != config.size:
            return False
        for value in row:
            # bool is an int subclass; reject it explicitly
            if type(value) is not int or not 0 <= value <= config.size:
                return False
    return True

def is_complete_solution(board: Board, config: GameConfig) -> bool:
    expected = set(config.symbols)
    for r in range(config.size):
        if set(board[r]) != expected:
            return False
    for c in range(config.size):
        if {board[r][c] for r in range(config.size)} != expected:
            return False
    for br in range(0, config.size, config.box_height):
        for bc in range(0, config.size, config.box_width):
            box = [
                board[i][j]
                for i in range(br, br + config.box_height)
                for j in range(bc, bc + config.box_width)
            ]
            if len(set(box)) != len(box) or 0 in box:
                return False
    return True

def matches_solution(board: Board, solved: Board) -> bool:
    return all(
        value == 0 or value == solved[r][c]
        for r, row in enumerate(board)
        for c, value in enumerate(row)
    )

# ---- Game state ----
def reveal_hint(board: Board, solved: Board) -> Tuple[int, int, int] | None:
    """Fill the first empty cell of ``board`` from ``solved``."""
    empty = find_empty(board)
    if not empty:
        return None
    r, c = empty
    board[r][c] = solved[r][c]
    return r, c, board[r][c]

def check_progress(board: Board, solved: Board) -> Progress:
    if not matches_solution(board, solved):
        return Progress.WRONG
    if find_empty(board):
        return Progress.IN_PROGRESS
    return Progress.SOLVED
