#!/usr/bin/env python3
"""
Continued fraction expansion of e/m, one Euclidean step at a time.

e/m = [Q0; Q1, Q2, ...]

Each step is an immutable CFState. step() is a pure transition, so the
expansion can be restarted or replayed from any state. Convergents follow the
usual recurrence
    F_i = Q_i * F_{i-1} + F_{i-2}
on numerators and denominators independently, seeded with F_{-1} = 1/0 and
F_{-2} = 0/1.

Wiener's candidates k/dg are drawn from the expansion:
    step 0      : 1/1
    odd step i  : F_i                    = [Q0; ..., Qi]
    even step i : F_i + F_{i-1}          = [Q0; ..., Qi + 1]
k/dg sits just above e/m, and the even convergents sit below it, so those
steps try the next semiconvergent instead.
"""
import logging
from typing import Iterator, List, NamedTuple, Optional

from .arith import divmod_trunc

logger = logging.getLogger(__name__)


class Pair(NamedTuple):
    """numerator / denominator, not necessarily reduced."""
    num: int
    den: int

    def __str__(self) -> str:
        return f"{self.num} / {self.den}"


class Candidate(NamedTuple):
    k: int
    dg: int

    def __str__(self) -> str:
        return f"{self.k} / {self.dg}"


class CFState(NamedTuple):
    index: int
    quotient: int
    remainder: Pair   # e/m - [Q0; ..., Qi] as R_num / R_den
    convergent: Pair  # F_i
    previous: Pair    # F_{i-1}

    @property
    def exhausted(self) -> bool:
        """True once the expansion is finite: nothing left to divide."""
        return self.remainder.num == 0


def initial_state(e: int, m: int) -> CFState:
    """Step 0: Q = e div m, R = (e mod m) / m, F0 = Q/1."""
    q, r = divmod_trunc(e, m)
    return CFState(0, q, Pair(r, m), Pair(q, 1), Pair(1, 0))


def step(state: CFState) -> Optional[CFState]:
    """Next state, or None when the previous remainder is zero."""
    if state.exhausted:
        return None
    q, r = divmod_trunc(state.remainder.den, state.remainder.num)
    f, f_prev = state.convergent, state.previous
    convergent = Pair(q * f.num + f_prev.num, q * f.den + f_prev.den)
    return CFState(
        index=state.index + 1,
        quotient=q,
        remainder=Pair(r, state.remainder.num),
        convergent=convergent,
        previous=f,
    )


def candidate(state: CFState) -> Candidate:
    """The k/dg pair to test at this step."""
    if state.index == 0:
        return Candidate(1, 1)
    f = state.convergent
    if state.index % 2:
        return Candidate(f.num, f.den)
    return Candidate(f.num + state.previous.num, f.den + state.previous.den)


def expand(e: int, m: int) -> Iterator[CFState]:
    """Lazily yield every state of the expansion of e/m."""
    if m <= 0:
        raise ValueError("m must be positive")
    state = initial_state(e, m)
    while state is not None:
        logger.debug("step #%d: Q=%d R=%s F=%s", state.index, state.quotient,
                     state.remainder, state.convergent)
        yield state
        state = step(state)


# Whole-expansion helpers for inspection and tests; the attack walks expand().

def quotients(e: int, m: int) -> List[int]:
    """[Q0, Q1, ...] of e/m."""
    return [s.quotient for s in expand(e, m)]


def convergents(e: int, m: int) -> List[Pair]:
    """[F0, F1, ...] of e/m; the last one equals e/m in lowest terms."""
    return [s.convergent for s in expand(e, m)]
