#!/usr/bin/env python3
"""
Command-line front-ends.

Usage:
  wiener [-v] [-s] <n> <e>
  wiener [-v] [-s] -k key.pem
  wiener-keygen [-b BITS] [--lcm] [--show-private]

  -v   more output (repeatable): -v shows every intermediate value,
       -vv also why each candidate was rejected, -vvv enables debug logging
  -s   sharpened approximation of (p-1)(q-1), assumes q < p < 2q

Example:
  wiener 1451701 170505
"""
import argparse
import logging
import sys
from typing import List, Optional

from .attack import Verdict, check_parameters, recover, search
from .errors import InvalidKeyFile, InvalidParameters
from .keygen import DEFAULT_BITS, MIN_BITS, generate_vulnerable_key
from .keys import load_public_numbers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wiener",
        description="Recover a small RSA private exponent with Wiener's attack.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="increase verbosity (repeatable)")
    parser.add_argument("-s", "--sharpened", action="store_true",
                        help="use n - sqrt(4n) + 1 instead of n to approximate (p-1)(q-1)")
    parser.add_argument("-k", "--key", metavar="KEYFILE",
                        help="read n and e from an RSA key file instead of the command line")
    parser.add_argument("n", type=int, nargs="?", help="modulus")
    parser.add_argument("e", type=int, nargs="?",
                        help="exponent paired with the secret d (e*d = 1 mod lcm(p-1, q-1))")
    return parser


def print_trace(trace, verbose: int) -> None:
    state, cand, ev = trace
    if verbose:
        print(f">>> Step #{state.index}")
        print(f"Q = {state.quotient}")
        print(f"R = {state.remainder}")
        print(f"F = {state.convergent}")
        print(f"k / dg = {cand}")
    else:
        print(state.quotient, end=" ", flush=True)
    if not verbose:
        return
    if ev.phi_n is not None:
        print(f"phi(n) = {ev.phi_n}")
        print(f"g = {ev.g}")
    if ev.sum_pq is not None and ev.sum_pq >= 0:
        print(f"p + q = {ev.sum_pq}")
    if ev.sqr_half_diff is not None and ev.sqr_half_diff >= 0:
        print(f"((p - q)/2)^2 = {ev.sqr_half_diff}")
    if ev.verdict is Verdict.REJECT and verbose > 1:
        print(f">>> Failure: {ev.cause}")


def run(n: int, e: int, verbose: int = 0, sharpened: bool = False) -> int:
    print(f"n = {n}")
    print(f"e = {e}")
    try:
        check_parameters(n, e)
    except InvalidParameters:
        print("Invalid parameters", file=sys.stderr)
        return 1

    for trace in search(n, e, sharpened):
        ev = trace.evaluation
        print_trace(trace, verbose)
        if ev.verdict is not Verdict.SUCCESS:
            continue
        key = recover(ev, n)
        if verbose:
            print(">>> Secret key has been found!", end="")
        print()
        print(f"d = {key.d}")
        if verbose:
            print(f"p = {key.p}")
            print(f"q = {key.q}")
        print()
        return 0

    print()
    print(">>> The secret key could not be found")
    print()
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose > 2:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if args.key:
        if args.n is not None:
            parser.error("give either -k KEYFILE or <n> <e>, not both")
        try:
            n, e = load_public_numbers(args.key)
        except InvalidKeyFile as exc:
            print(f"[!] Error: {exc}", file=sys.stderr)
            return 1
    elif args.n is None or args.e is None:
        parser.error("the following arguments are required: n, e")
    else:
        n, e = args.n, args.e

    return run(n, e, args.verbose, args.sharpened)


def keygen_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wiener-keygen",
        description="Generate an RSA key whose private exponent is small enough for Wiener's attack.")
    parser.add_argument("-b", "--bits", type=int, default=DEFAULT_BITS,
                        help=f"modulus size in bits (default {DEFAULT_BITS})")
    parser.add_argument("--lcm", action="store_true",
                        help="take e = d^-1 mod lcm(p-1, q-1) instead of mod (p-1)(q-1)")
    parser.add_argument("--show-private", action="store_true",
                        help="also print d, p and q")
    args = parser.parse_args(argv)

    if args.bits < MIN_BITS:
        parser.error(f"--bits must be >= {MIN_BITS}")

    key = generate_vulnerable_key(args.bits, use_lcm=args.lcm)
    print(f"n = {key.n}")
    print(f"e = {key.e}")
    if args.show_private:
        print(f"d = {key.d}")
        print(f"p = {key.p}")
        print(f"q = {key.q}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
