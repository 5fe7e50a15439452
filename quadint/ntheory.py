"""
Number-theoretic functions on quadratic rings and their elements.

The pure integer helpers live in quadint.utils and are re-exported here.
"""
import logging

from enum import Enum
from functools import cache
from math import gcd, isqrt, log, pi, sin
from typing import Optional, Union

from sympy.ntheory import isprime
from sympy.ntheory.continued_fraction import continued_fraction_periodic

from quadint.config import DEFAULT_CLASS_NUMBER_LIMIT
from quadint.errors import NotDivisibleError
from quadint.quad import PART_MAX, _ring_units, quadint
from quadint.ring import NORM_EUCLIDEAN_QUADRATIC_RINGS_D, QuadraticRing
from quadint.utils import (is_perfect_square, is_squarefree, squarefree_kernel, symbol_jacobi, symbol_kronecker,
                           symbol_legendre)

__all__ = [
    "COMPLEX_CUBIC_ROOT_OF_UNITY",
    "GOLDEN_RATIO",
    "HEEGNER_NUMBERS",
    "IMAG_UNIT_I",
    "NORM_EUCLIDEAN_QUADRATIC_RINGS_D",
    "RING_EISENSTEIN",
    "RING_GAUSSIAN",
    "RING_ZPHI",
    "Splitting",
    "divide_out_units",
    "euclidean_gcd",
    "field_class_number",
    "fundamental_unit",
    "is_perfect_square",
    "is_prime",
    "is_squarefree",
    "is_ufd",
    "place_in_primary_sector",
    "prime_behavior",
    "squarefree_kernel",
    "symbol_jacobi",
    "symbol_kronecker",
    "symbol_legendre",
    "units",
]

logger = logging.getLogger(__name__)

HEEGNER_NUMBERS = frozenset({-163, -67, -43, -19, -11, -7, -3, -2, -1})

RING_GAUSSIAN = QuadraticRing(-1)
IMAG_UNIT_I = quadint(0, 1, RING_GAUSSIAN)

RING_EISENSTEIN = QuadraticRing(-3)
COMPLEX_CUBIC_ROOT_OF_UNITY = quadint(-1, 1, RING_EISENSTEIN, 2)

RING_ZPHI = QuadraticRing(5)
GOLDEN_RATIO = quadint(1, 1, RING_ZPHI, 2)


class Splitting(Enum):
    """How a rational prime factors in a quadratic ring. The values are the matching Kronecker symbols."""
    INERT = -1
    RAMIFIED = 0
    SPLIT = 1


def prime_behavior(ring: QuadraticRing, p: int) -> Splitting:
    """
    Classify the rational prime p in the ring.

    The Kronecker symbol of the field discriminant decides it, which also covers p = 2
    (for odd p it agrees with the Legendre symbol (d/p)).

    Raises:
        ValueError: If p is not a rational prime.
    """
    if not isprime(p):
        raise ValueError(f"{p} is not prime")

    return Splitting(symbol_kronecker(ring.discriminant, p))


@cache
def _fundamental_unit(ring: QuadraticRing) -> Optional[quadint]:
    """ε for a real ring, or None when it has parts beyond the supported range. Both outcomes are cached."""
    d = ring.radicand
    if ring.has_half_integers:
        terms = continued_fraction_periodic(1, 2, d)
    else:
        terms = continued_fraction_periodic(0, 1, d)

    # non-periodic terms first, then the period as a list
    prefix = [int(t) for t in terms[:-1]]
    period = [int(t) for t in terms[-1]]

    h, h_prev = 1, 0
    k, k_prev = 0, 1
    i = 0
    while True:
        t = prefix[i] if i < len(prefix) else period[(i - len(prefix)) % len(period)]
        i += 1

        h, h_prev = t * h + h_prev, h
        k, k_prev = t * k + k_prev, k
        if h > PART_MAX:
            return None

        if ring.has_half_integers:
            A, B = 2 * h - k, k
        else:
            A, B = 2 * h, 2 * k

        if abs(A * A - d * B * B) == 4:
            return quadint(A, B, ring, 2)


def fundamental_unit(ring: QuadraticRing) -> quadint:
    """
    The fundamental unit ε > 1 of a real quadratic ring.

    Walks the convergents h/k of the continued fraction of sqrt(d), or of (1 + sqrt(d))/2 when the ring
        has half-integers; the first one giving a unit h + k*sqrt(d), or h - k*(1 - sqrt(d))/2, is ε.

    Raises:
        ValueError: For imaginary rings.
        OverflowError: If ε has parts beyond the supported range.

    Returns:
        quadint: The fundamental unit.
    """
    if not ring.is_purely_real:
        raise ValueError(f"{ring} is imaginary; its unit group is finite")

    eps = _fundamental_unit(ring)
    if eps is None:
        raise OverflowError(f"Fundamental unit of {ring} exceeds the supported range")
    return eps


def _imaginary_class_number(ring: QuadraticRing) -> int:
    """h = -w/(2|D|) * sum(χ(a) * a for 0 < a < |D|), with w the number of units."""
    D = ring.discriminant
    size = -D
    w = len(_ring_units(ring))

    total = sum(symbol_kronecker(D, a) * a for a in range(1, size))
    h, r = divmod(-w * total, 2 * size)
    if r or h < 1:
        raise ArithmeticError(f"Class number formula gave a non-positive or fractional value for {ring}")

    return h


def _real_class_number(ring: QuadraticRing) -> int:
    """h = -1/(2 log ε) * sum(χ(a) * log(sin(πa/D)) for 0 < a < D)."""
    D = ring.discriminant
    eps = float(fundamental_unit(ring))

    total = 0.0
    for a in range(1, D):
        chi = symbol_kronecker(D, a)
        if chi:
            total += chi * log(sin(pi * a / D))

    h = -total / (2 * log(eps))
    result = round(h)
    if result < 1 or abs(h - result) > 1e-6 * max(1, result):
        raise ArithmeticError(f"Class number formula did not give an integer for {ring}: {h}")

    return result


@cache
def field_class_number(ring: QuadraticRing, limit: int = DEFAULT_CLASS_NUMBER_LIMIT) -> int:
    """
    The class number of the ring.

    Imaginary rings use the exact Dirichlet sum, real rings the analytic class number formula,
    which needs the fundamental unit. Both sum over every residue of the discriminant.

    Args:
        ring: The ring.
        limit: Largest absolute discriminant to sum over.

    Raises:
        ArithmeticError: If |D| exceeds limit, or the computation fails, including OverflowError from
            the fundamental unit.
    """
    if abs(ring.discriminant) > limit:
        raise ArithmeticError(f"Discriminant of {ring} is beyond the class number limit {limit}")

    if ring.is_purely_real:
        return _real_class_number(ring)
    return _imaginary_class_number(ring)


def is_ufd(ring: QuadraticRing) -> bool:
    """
    Whether the ring has unique factorization.

    Imaginary rings: exactly the Heegner numbers. Real rings: norm-Euclidean, or class number 1.

    Raises:
        ArithmeticError: If a real ring needs a class number that can't be computed.
    """
    if not ring.is_purely_real:
        return ring.radicand in HEEGNER_NUMBERS

    return ring.is_norm_euclidean or field_class_number(ring) == 1


def is_prime(x: Union[quadint, int]) -> bool:
    """
    Primality of a ring element, or of a rational integer.

    An element is prime when its norm is a rational prime, or when it is an associate
    of a rational prime that stays inert in its ring.
    """
    if isinstance(x, int):
        return bool(isprime(abs(x)))

    n = abs(x)
    if isprime(n):
        return True

    p = isqrt(n)
    if p * p != n or not isprime(p):
        return False

    try:
        cofactor = x / p
    except NotDivisibleError:
        return False

    return cofactor.is_unit() and prime_behavior(x.ring, p) is Splitting.INERT


def units(ring: QuadraticRing) -> tuple[quadint, ...]:
    """
    All units of an imaginary ring.

    Raises:
        ValueError: For real rings, which have infinitely many.
    """
    if ring.is_purely_real:
        raise ValueError(f"{ring} has infinitely many units")
    return _ring_units(ring)


def place_in_primary_sector(x: quadint) -> quadint:
    """
    The associate of x in the primary sector of an imaginary ring.

    Raises:
        ValueError: For real rings.
    """
    if x.ring.is_purely_real:
        raise ValueError(f"{x.ring} is real; use divide_out_units")
    return x._normalize_unit()


def divide_out_units(x: quadint) -> quadint:
    """
    Canonical associate of x.

    Imaginary rings: the associate in the primary sector.
    Real rings: the positive associate in [1, ε). When ε is out of range, only the sign is fixed.
    """
    if not x or not x.ring.is_purely_real:
        return x._normalize_unit()

    y = x._normalize_unit()
    try:
        eps = fundamental_unit(x.ring)
    except OverflowError:
        logger.debug("Fundamental unit of %s out of range, normalizing %s by sign only", x.ring, x)
        return y

    # ε^-1 = N(ε) * conj(ε)
    eps_inv = eps.conjugate() * eps.norm()
    while y >= eps:
        y = y * eps_inv
    while y < 1:
        y = y * eps

    return y


def euclidean_gcd(a: Union[quadint, int], b: Union[quadint, int]) -> Union[quadint, int]:
    """
    GCD of two rational integers, or of two quadratic integers.

    Raises:
        NonEuclideanDomainError: For quadratic integers of a ring that is not norm-Euclidean.
    """
    if isinstance(a, int) and isinstance(b, int):
        return gcd(a, b)

    if isinstance(a, int):
        a, b = b, a

    if not isinstance(a, quadint):
        raise TypeError(f"Unable to take the gcd of {type(a).__name__} and {type(b).__name__}")

    return a.gcd(b)
