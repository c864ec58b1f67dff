"""Seeded PRNG — Mulberry32, threaded explicitly through the solver.

32-bit state, one float in [0, 1) per call. Same seed gives the same stream
on every platform, so layouts are reproducible across runs and tests.
"""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_GOLDEN = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply (unsigned result)."""
    return (a * b) & _MASK32


class SeededRng:
    """Deterministic generator. Each instance owns its own state."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK32

    def next(self) -> float:
        self._state = (self._state + _GOLDEN) & _MASK32
        t = self._state
        x = _imul(t ^ (t >> 15), 1 | t)
        x = (x ^ ((x + _imul(x ^ (x >> 7), 61 | x)) & _MASK32)) & _MASK32
        return ((x ^ (x >> 14)) & _MASK32) / 4294967296.0
