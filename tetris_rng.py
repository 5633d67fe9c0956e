"""Uniform piece randomizer (no bag, repeats allowed)"""
import random
from typing import Optional
from tetris_piece import TAGS

class UniformRandom:
    PIECES = TAGS

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_piece(self) -> str:
        return self._rng.choice(self.PIECES)
