from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from gridfour.core.grid import GridState
from gridfour.errors import QuitGame
from gridfour.types import Move, Player
from gridfour.ui.prompts import parse_move


@dataclass
class HumanStrategy:
    """Reads a column from the keyboard. Legality is left to the game loop."""
    name: str = "Human"
    player: Player = 1
    input_fn: Callable[[str], str] = field(default=input, repr=False)
    output_fn: Callable[[str], None] = field(default=print, repr=False)

    def choose_move(self, state: GridState) -> Move:
        while True:
            raw = self.input_fn(f"Player {self.player} move: ")
            try:
                move = parse_move(raw, state.cols)
            except ValueError as e:
                self.output_fn(str(e))
                continue
            if move is None:
                raise QuitGame(f"Player {self.player} quit.")
            return move
