from typing import Optional, Tuple

import requests

from game_config import Difficulty, SudokuError, get_game_config, parse_difficulty
from sudoku_generator import (
    PuzzleResult,
    board_shape_ok,
    generate_puzzle,
    is_complete_solution,
    matches_solution,
)


class RemoteGeneratorError(SudokuError):
    """The remote generator was unreachable or returned an unusable puzzle."""


class RemoteGenerator:
    def __init__(self, url: str, timeout: float = 5):
        self.url = url
        self.timeout = timeout

    def fetch(self, difficulty: Difficulty, mode: str) -> PuzzleResult:
        config = get_game_config(mode)
        try:
            response = requests.post(
                self.url,
                json={"difficulty": difficulty.value, "mode": mode},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteGeneratorError(f"request failed: {e}") from e
        if response.status_code != 200:
            raise RemoteGeneratorError(f"unexpected status {response.status_code}")
        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteGeneratorError("response is not JSON") from e
        if not isinstance(payload, dict):
            raise RemoteGeneratorError("response is not a JSON object")

        initial = payload.get("initial")
        solved = payload.get("solved")
        if initial is None or solved is None:
            raise RemoteGeneratorError("response is missing 'initial' or 'solved'")
        if not board_shape_ok(initial, config) or not board_shape_ok(solved, config):
            raise RemoteGeneratorError(f"boards are not {config.mode} grids of 0..{config.size}")
        if not is_complete_solution(solved, config):
            raise RemoteGeneratorError("solved board breaks the row, column or box rule")
        if not matches_solution(initial, solved):
            raise RemoteGeneratorError("initial board disagrees with the solved board")
        return PuzzleResult(initial, solved)


def generate_with_fallback(
    difficulty: Difficulty | str, mode: str, remote: Optional[RemoteGenerator] = None
) -> Tuple[PuzzleResult, str, Optional[RemoteGeneratorError]]:
    """Ask ``remote`` first when given, else (or on any failure) generate offline.

    Returns the puzzle, its source (``"remote"`` or ``"offline"``) and the remote
    error that forced the fallback, if any.
    """
    difficulty = parse_difficulty(difficulty)
    get_game_config(mode)
    error = None
    if remote is not None:
        try:
            return remote.fetch(difficulty, mode), "remote", None
        except RemoteGeneratorError as e:
            error = e
    return generate_puzzle(difficulty, mode), "offline", error
