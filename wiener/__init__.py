"""Wiener's continued fraction attack on RSA keys with a small private exponent."""
from .arith import approximate_modulus
from .attack import (AttackResult, Outcome, RecoveredKey, Verdict, evaluate,
                     recover, search, wiener_attack)
from .continued_fraction import Candidate, CFState, Pair, candidate, expand, step
from .errors import InvalidKeyFile, InvalidParameters, InvariantViolation, WienerError

__version__ = "0.1.0"
