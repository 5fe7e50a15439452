from math import isqrt

from sympy import factorint
from sympy.functions.combinatorial.numbers import jacobi_symbol, legendre_symbol
from sympy.ntheory import isprime


def _round_div_ties_away_from_zero(a: int, b: int) -> int:
    """Round a/b to nearest integer; ties go away from zero. b must be > 0."""
    if b <= 0:
        raise ValueError("b must be > 0")

    if a >= 0:
        return (a + (b // 2)) // b

    # a < 0
    return -((-a + (b // 2)) // b)


def is_perfect_square(n: int) -> bool:
    """True iff n is the square of an integer. Negative numbers never are."""
    if n < 0:
        return False

    r = isqrt(n)
    return r * r == n


def is_squarefree(n: int) -> bool:
    """
    Check whether no square greater than 1 divides n.

    Args:
        n: The number to check. The sign is ignored, 0 is not squarefree.

    Returns:
        bool: True if n is squarefree.
    """
    if n == 0:
        return False

    return all(e == 1 for e in factorint(abs(n)).values())


def squarefree_kernel(n: int) -> tuple[int, int]:
    """
    Split n into a squarefree part and a square: n = k * s**2 with s > 0.

    The sign of n stays with k, so squarefree_kernel(-12) == (-3, 2).

    Raises:
        ValueError: If n is 0.

    Returns:
        tuple: (k, s)
    """
    if n == 0:
        raise ValueError("0 has no squarefree kernel")

    k = -1 if n < 0 else 1
    s = 1
    for p, e in factorint(abs(n)).items():
        s *= p ** (e // 2)
        if e & 1:
            k *= p

    return k, s


def symbol_legendre(a: int, p: int) -> int:
    """
    Legendre symbol (a/p).

    Raises:
        ValueError: If p is not an odd prime.

    Returns:
        int: -1, 0 or 1.
    """
    if p == 2 or not isprime(p):
        raise ValueError(f"Legendre symbol needs an odd prime, got {p}")

    return int(legendre_symbol(a % p, p))


def symbol_jacobi(n: int, m: int) -> int:
    """
    Jacobi symbol (n/m).

    Raises:
        ValueError: If m is not a positive odd number.
    """
    if m <= 0 or not m & 1:
        raise ValueError(f"Jacobi symbol needs a positive odd modulus, got {m}")

    return int(jacobi_symbol(n % m, m))


def symbol_kronecker(n: int, m: int) -> int:
    """
    Kronecker symbol (n/m), defined for every pair of integers.

    Extends the Jacobi symbol with (n/-1) = sign(n), and (n/2) = 0 for even n,
    1 for n = ±1 (mod 8) and -1 for n = ±3 (mod 8).

    Returns:
        int: -1, 0 or 1.
    """
    if m == 0:
        return 1 if n in (1, -1) else 0

    result = 1
    if m < 0:
        m = -m
        if n < 0:
            result = -result

    twos = 0
    while not m & 1:
        m >>= 1
        twos += 1

    if twos:
        if not n & 1:
            return 0
        if twos & 1 and n % 8 in (3, 5):
            result = -result

    if m == 1:
        return result

    return result * int(jacobi_symbol(n % m, m))
