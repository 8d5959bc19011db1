from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Tuple

Board = List[List[int]]
Cell = Tuple[int, int]


class SudokuError(Exception):
    """Base class for puzzle engine errors."""


class ConfigError(SudokuError, ValueError):
    """Invalid board geometry or an unknown mode/difficulty label."""


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class GameConfig:
    """Geometry of one board variant plus its blanking table."""

    size: int
    box_height: int
    box_width: int
    empty_cells: Mapping[Difficulty, int] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if self.size <= 0 or self.box_height <= 0 or self.box_width <= 0:
            raise ConfigError(f"dimensions must be positive: {self.size}/{self.box_height}x{self.box_width}")
        if self.size % self.box_height or self.size % self.box_width:
            raise ConfigError(
                f"a {self.size}x{self.size} board cannot be split into {self.box_height}x{self.box_width} boxes"
            )
        # a box with more cells than symbols can never be filled
        if self.box_height * self.box_width > self.size:
            raise ConfigError(
                f"a {self.box_height}x{self.box_width} box has more cells than {self.size} symbols"
            )
        object.__setattr__(self, "empty_cells", MappingProxyType(dict(self.empty_cells)))
        for difficulty, count in self.empty_cells.items():
            if count < 0:
                raise ConfigError(f"negative cell count for {difficulty.value}: {count}")

    @property
    def symbols(self) -> List[int]:
        return list(range(1, self.size + 1))

    @property
    def mode(self) -> str:
        return f"{self.size}x{self.size}"

    def box_origin(self, row: int, col: int) -> Cell:
        return (row // self.box_height) * self.box_height, (col // self.box_width) * self.box_width

    def empty_board(self) -> Board:
        return [[0] * self.size for _ in range(self.size)]

    def cells(self) -> List[Cell]:
        return [(r, c) for r in range(self.size) for c in range(self.size)]

    def cells_to_remove(self, difficulty: Difficulty) -> int:
        try:
            return self.empty_cells[difficulty]
        except KeyError:
            raise ConfigError(f"no blanking count for {difficulty.value} in {self.mode}") from None


GAME_CONFIGS: Mapping[str, GameConfig] = MappingProxyType({
    "4x4": GameConfig(
        size=4,
        box_height=2,
        box_width=2,
        empty_cells={Difficulty.EASY: 6, Difficulty.MEDIUM: 8, Difficulty.HARD: 10},
    ),
    "6x6": GameConfig(
        size=6,
        box_height=2,
        box_width=3,
        empty_cells={Difficulty.EASY: 14, Difficulty.MEDIUM: 18, Difficulty.HARD: 22},
    ),
})


def get_game_config(mode: str) -> GameConfig:
    try:
        return GAME_CONFIGS[mode]
    except KeyError:
        raise ConfigError(f"unknown game mode: {mode!r}") from None


def parse_difficulty(label: Difficulty | str) -> Difficulty:
    if isinstance(label, Difficulty):
        return label
    try:
        return Difficulty(str(label).strip().lower())
    except ValueError:
        raise ConfigError(f"unknown difficulty: {label!r}") from None
