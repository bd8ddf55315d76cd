#!/usr/bin/env python3
"""
Wiener attack: recover a small private exponent d from (n, e).

Based on M.J. Wiener, "Cryptanalysis of Short RSA Secret Exponents".

Input:  n = pq with p > q prime, and e coprime to L = lcm(p-1, q-1)
        (L = (p-1)(q-1) works too).
Output: d = e^-1 mod L, and p, q.

Let G = (p-1)(q-1) / L, K = (de-1) / L, g = G / gcd(G, K), k = K / gcd(G, K).
Then
    edg = k(p-1)(q-1) + g
    e/n = (k/dg) * (1 - t),   t = 1/p + 1/q + 1/pq
t is small, so k/dg is close to e/n and shows up in the continued fraction
expansion of e/m. With q < p < 2q the attack succeeds whenever
dG < n^0.25 / 3, e < n and ed > n (G = 1 for L = (p-1)(q-1)).
"""
import logging
from enum import Enum
from typing import Iterator, NamedTuple, Optional

from .arith import approximate_modulus, divmod_trunc, is_even, isqrt
from .continued_fraction import Candidate, CFState, candidate, expand
from .errors import InvalidParameters, InvariantViolation

logger = logging.getLogger(__name__)

MIN_MODULUS = 9

# rejection causes, as shown by `wiener -vv`
G_NOT_POSITIVE = "g should be a positive integer"
HALF_SUM_NOT_INTEGER = "(p + q)/2 should be a positive integer"
HALF_DIFF_NOT_INTEGER = "(p - q)/2 should be a positive integer"
D_NOT_INTEGER = "d = dg/g should be an integer"

# abort causes: no later candidate can succeed
K_IS_ZERO = "k is zero"
SUM_NEGATIVE = "p + q is negative"
DISCRIMINANT_NEGATIVE = "((p - q)/2)^2 is negative"


class Verdict(Enum):
    SUCCESS = "success"
    REJECT = "reject"
    ABORT = "abort"


class Evaluation(NamedTuple):
    """Outcome of testing one k/dg, with every intermediate computed so far."""
    verdict: Verdict
    cause: Optional[str] = None
    phi_n: Optional[int] = None
    g: Optional[int] = None
    sum_pq: Optional[int] = None
    sqr_half_diff: Optional[int] = None
    half_sum: Optional[int] = None
    half_diff: Optional[int] = None
    d: Optional[int] = None

    @property
    def p(self) -> Optional[int]:
        if self.verdict is not Verdict.SUCCESS:
            return None
        return self.half_sum + self.half_diff

    @property
    def q(self) -> Optional[int]:
        if self.verdict is not Verdict.SUCCESS:
            return None
        return self.half_sum - self.half_diff


class Trace(NamedTuple):
    state: CFState
    candidate: Candidate
    evaluation: Evaluation


class RecoveredKey(NamedTuple):
    d: int
    p: int
    q: int


class Outcome(Enum):
    FOUND = "found"
    ABORTED = "aborted"
    EXHAUSTED = "exhausted"


class AttackResult(NamedTuple):
    key: Optional[RecoveredKey]
    steps: int
    outcome: Outcome

    @property
    def found(self) -> bool:
        return self.outcome is Outcome.FOUND


def check_parameters(n: int, e: int) -> None:
    if n < MIN_MODULUS or e <= 0:
        raise InvalidParameters(f"need n >= {MIN_MODULUS} and e > 0, got n={n}, e={e}")


def evaluate(cand: Candidate, n: int, e: int) -> Evaluation:
    """Test one candidate k/dg against n. The first rule that applies wins."""
    k, dg = cand
    if k == 0:
        return Evaluation(Verdict.ABORT, K_IS_ZERO)

    # edg = k(p-1)(q-1) + g, so (p-1)(q-1) = edg div k and g = edg mod k,
    # provided k > g (ed > n is enough for that)
    phi_n, g = divmod_trunc(e * dg, k)
    if g == 0:
        return Evaluation(Verdict.REJECT, G_NOT_POSITIVE, phi_n=phi_n, g=g)

    # p + q = pq - (p-1)(q-1) + 1
    sum_pq = n - phi_n + 1
    seen = dict(phi_n=phi_n, g=g, sum_pq=sum_pq)
    if sum_pq < 0:
        return Evaluation(Verdict.ABORT, SUM_NEGATIVE, **seen)
    if not is_even(sum_pq):
        return Evaluation(Verdict.REJECT, HALF_SUM_NOT_INTEGER, **seen)

    # ((p-q)/2)^2 = ((p+q)/2)^2 - pq
    half_sum = sum_pq // 2
    sqr_half_diff = half_sum * half_sum - n
    seen.update(sqr_half_diff=sqr_half_diff, half_sum=half_sum)
    if sqr_half_diff < 0:
        return Evaluation(Verdict.ABORT, DISCRIMINANT_NEGATIVE, **seen)

    half_diff = isqrt(sqr_half_diff)
    if half_diff * half_diff != sqr_half_diff:
        return Evaluation(Verdict.REJECT, HALF_DIFF_NOT_INTEGER, **seen)

    seen.update(half_diff=half_diff)
    # the factors may be right while k/dg is not the reduced k/(d*g)
    d, rest = divmod_trunc(dg, g)
    if rest != 0:
        return Evaluation(Verdict.REJECT, D_NOT_INTEGER, **seen)

    return Evaluation(Verdict.SUCCESS, d=d, **seen)


def recover(ev: Evaluation, n: int) -> RecoveredKey:
    """Turn a successful evaluation into (d, p, q), checking p * q == n."""
    if ev.verdict is not Verdict.SUCCESS:
        raise InvariantViolation(f"cannot recover a key from a {ev.verdict.value} verdict")
    half_sum, half_diff = ev.half_sum, ev.half_diff
    if half_sum * half_sum - half_diff * half_diff != n:
        raise InvariantViolation("((p+q)/2)^2 - ((p-q)/2)^2 != n")
    p, q = ev.p, ev.q
    if not (p >= q > 0 and p * q == n):
        raise InvariantViolation(f"bad factors p={p}, q={q} for n={n}")
    return RecoveredKey(ev.d, p, q)


def _run(n: int, e: int, m: int) -> Iterator[Trace]:
    for state in expand(e, m):
        cand = candidate(state)
        ev = evaluate(cand, n, e)
        if ev.verdict is Verdict.REJECT:
            logger.debug("step #%d: k/dg = %s rejected: %s", state.index, cand, ev.cause)
        yield Trace(state, cand, ev)
        if ev.verdict is not Verdict.REJECT:
            return


def search(n: int, e: int, sharpened: bool = False) -> Iterator[Trace]:
    """
    Validate (n, e) and return a lazy iterator of one Trace per step.

    The iterator stops after a success or an abort, or when the continued
    fraction of e/m runs out.
    """
    check_parameters(n, e)
    m = approximate_modulus(n, sharpened)
    if m < 4:
        raise InvariantViolation(f"m = {m} < 4 for n = {n}")
    logger.debug("m = %d%s", m, " (sharpened)" if sharpened else "")
    return _run(n, e, m)


def wiener_attack(n: int, e: int, sharpened: bool = False) -> AttackResult:
    """Run the whole search and return the recovered key, if any."""
    steps = 0
    for trace in search(n, e, sharpened):
        steps += 1
        ev = trace.evaluation
        if ev.verdict is Verdict.SUCCESS:
            key = recover(ev, n)
            logger.debug("found d=%d after %d steps", key.d, steps)
            return AttackResult(key, steps, Outcome.FOUND)
        if ev.verdict is Verdict.ABORT:
            logger.debug("aborted after %d steps: %s", steps, ev.cause)
            return AttackResult(None, steps, Outcome.ABORTED)
    return AttackResult(None, steps, Outcome.EXHAUSTED)
