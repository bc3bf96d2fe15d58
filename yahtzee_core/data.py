"""Dice constants and shared type aliases for the Yahtzee simulator."""

from __future__ import annotations

from typing import Final

DICE_PER_ROLL: Final[int] = 5
DIE_FACES: Final[int] = 6

# One winning roll per face value out of every possible ordered roll.
WIN_PROBABILITY: Final[float] = DIE_FACES / DIE_FACES**DICE_PER_ROLL
EXPECTED_ROLLS_PER_TRIAL: Final[int] = DIE_FACES ** (DICE_PER_ROLL - 1)

SIMULATION_METHODS: Final[tuple[str, ...]] = ("loop", "geometric")

Roll = list[int]
TrialBatch = list[int]
