"""
Seeded pseudo-random number generator
Same seed always gives the same sequence, so a seed reproduces a maze
"""

from utils.helpers import time_seed


class SeededRandom:
    """
    Linear congruential generator with its own state
    """
    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    def __init__(self, seed=None):
        if seed is None:
            seed = time_seed()
        self.seed = int(seed)
        self._value = self.seed

    def next(self):
        """Next float in [0, 1)"""
        self._value = (self._value * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self._value / self.MODULUS

    def randrange(self, n):
        """Random integer in [0, n)"""
        if n <= 0:
            raise ValueError("randrange() needs a positive bound")
        return int(self.next() * n)

    def choice(self, items):
        """Pick one item uniformly"""
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.randrange(len(items))]

    def __repr__(self):
        return f"SeededRandom(seed={self.seed})"
