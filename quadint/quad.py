from dataclasses import dataclass
from functools import cache
from math import atan2, gcd, hypot, prod
from typing import Callable, Iterator, Optional, Union

from sympy import factorint
from sympy.ntheory import sqrt_mod

from quadint.errors import AlgebraicDegreeOverflowError, NonEuclideanDomainError, NotDivisibleError
from quadint.ring import QuadraticRing
from quadint.utils import _round_div_ties_away_from_zero, squarefree_kernel, symbol_kronecker

# Normalized parts must fit a signed 32-bit word.
PART_MIN = -(2 ** 31)
PART_MAX = 2 ** 31 - 1

OTHER_OP_TYPES = int
_OTHER_OP_TYPES = (int,)  # mypyc-friendly for isinstance
OP_TYPES = Union["quadint", OTHER_OP_TYPES]
RING_TYPES = Union[QuadraticRing, int]

# plain, ASCII, TeX, HTML
_PLAIN, _ASCII, _TEX, _HTML = range(4)
_SYMBOLS = {
    "i": ("i", "i", "i", "<i>i</i>"),
    "omega": ("ω", "omega", "\\omega", "&omega;"),
    "phi": ("φ", "phi", "\\phi", "&phi;"),
    "theta": ("θ", "theta", "\\theta", "&theta;"),
}
_MINUS = ("-", "-", "-", "&minus;")


# TODO: Once Py3.9 support has been dropped, add slots=True
@dataclass(frozen=True)
class QuadraticFactorization:
    """
    Factorization into primes:

        x = unit * P1 * P2 * ... * Pk

    - unit has norm ±1.
    - Pi are primes of the ring, sorted by absolute norm, each normalized up to sign.
      A rational prime that stays inert shows up as itself (norm p**2).
    """
    unit: "quadint"
    primes: tuple["quadint", ...]

    def prod(self) -> "quadint":
        """Recreate the factored number"""
        return prod(self.primes, start=self.unit)


def _real_sign(p: int, q: int, d: int) -> int:
    """Exact sign of p + q*sqrt(d) for a positive non-square d."""
    if p >= 0 and q >= 0:
        return 0 if p == 0 and q == 0 else 1
    if p <= 0 and q <= 0:
        return -1

    # Opposite signs: the bigger square wins. p**2 == d*q**2 can't happen for q != 0.
    pp, qq = p * p, d * q * q
    if p > 0:
        return 1 if pp > qq else -1
    return 1 if qq > pp else -1


def _check_range(A: int, B: int) -> None:
    """Raise OverflowError if the normalized parts of (A + B*sqrt(d))/2 leave the supported range."""
    if not A & 1:
        A, B = A // 2, B // 2

    if not (PART_MIN <= A <= PART_MAX and PART_MIN <= B <= PART_MAX):
        raise OverflowError(f"Parts {A}, {B} exceed the supported range [{PART_MIN}, {PART_MAX}]")


def _coeff(mag: int, symbol: str) -> str:
    return symbol if mag == 1 else f"{mag}{symbol}"


def _join_terms(reg: int, reg_mag: str, surd: int, surd_mag: str, minus: str) -> str:
    """Join a rational term and an irrational term given as magnitudes, placing the signs."""
    if not surd:
        return f"{minus}{reg_mag}" if reg < 0 else reg_mag

    if not reg:
        return f"{minus}{surd_mag}" if surd < 0 else surd_mag

    head = f"{minus}{reg_mag}" if reg < 0 else reg_mag
    op = minus if surd < 0 else "+"
    return f"{head} {op} {surd_mag}"


def _polynomial_string(coeffs: tuple[int, ...], square: str, minus: str) -> str:
    """Render monic coefficients, constant term first, as e.g. "x^2 - 3x + 5"."""
    if len(coeffs) == 1:
        return "x"

    terms = [f"x{square}" if len(coeffs) == 3 else "x"]
    if len(coeffs) == 3 and coeffs[1]:
        c = coeffs[1]
        terms.append(f"{minus if c < 0 else '+'} {_coeff(abs(c), 'x')}")

    if coeffs[0]:
        terms.append(f"{minus if coeffs[0] < 0 else '+'} {abs(coeffs[0])}")

    return " ".join(terms)


class quadint:
    """
    Quadratic integer: an algebraic integer of degree at most 2 in a quadratic ring.

    Internally stored in "numerator units" as (A, B) representing:
        (A + B*sqrt(d)) / 2

    Integrality constraint:
        A, B must have the same parity
        (both even = ordinary element a + b*sqrt(d), both odd = half-integer, only when d = 1 mod 4).

    Notes:
      - The trace is A, the norm is (A^2 - d*B^2) / 4.
      - Operands from different rings only combine when one of them is a rational integer,
        or for products and quotients of two pure surds.
      - Normalized parts are limited to a signed 32-bit range; leaving it raises OverflowError.
    """

    __slots__ = ("a", "b", "ring")

    a: int
    b: int
    ring: QuadraticRing

    def __init__(self, a: int, b: int, ring: RING_TYPES, denom: int = 1) -> None:
        """
        Initialize a quadint representing (a + b*sqrt(d)) / denom.

        Args:
            a: The rational part numerator.
            b: The surd part numerator.
            ring: The ring, or its radicand.
            denom: 1 or 2; -1 and -2 negate the numerators.

        Raises:
            ValueError: If the denominator is not ±1 or ±2, the parities differ with denominator 2,
                or the ring has no half-integers.
            OverflowError: If a normalized part leaves the supported range.
        """
        if not isinstance(ring, QuadraticRing):
            ring = QuadraticRing(int(ring))

        a0, b0, den = int(a), int(b), int(denom)
        if den == 0:
            raise ValueError("Denominator must not be 0")

        if den < 0:
            a0, b0, den = -a0, -b0, -den

        if den == 1:
            a0 *= 2
            b0 *= 2
        elif den == 2:
            if (a0 ^ b0) & 1:
                raise ValueError("With denominator 2, both parts must have the same parity")
            if a0 & 1 and not ring.has_half_integers:
                raise ValueError(f"{ring} has no half-integers")
        else:
            raise ValueError(f"Denominator must be 1 or 2, got {denom}")

        _check_range(a0, b0)
        self.a, self.b, self.ring = a0, b0, ring

    # region constructors / conversions
    @classmethod
    def _make(cls, A: int, B: int, ring: QuadraticRing) -> "quadint":
        """Construct a new value from internal numerators A, B."""
        return cls(A, B, ring, 2)

    def _from_obj(self, n: OP_TYPES) -> "quadint":
        """Convert a random object to a quadint of this ring"""
        if isinstance(n, _OTHER_OP_TYPES):
            return self._make(2 * int(n), 0, self.ring)

        if isinstance(n, quadint):
            return n

        return NotImplemented

    @classmethod
    def from_theta(cls, m: int, n: int, ring: RING_TYPES) -> "quadint":
        """
        Build m + n*θ where θ = (1 + sqrt(d))/2.

        Raises:
            ValueError: If the ring has no half-integers.
        """
        if not isinstance(ring, QuadraticRing):
            ring = QuadraticRing(int(ring))
        if not ring.has_half_integers:
            raise ValueError(f"{ring} has no half-integers")
        return cls._make(2 * m + n, n, ring)

    @classmethod
    def from_omega(cls, m: int, n: int) -> "quadint":
        """Build m + n*ω in Z[ω], where ω = (-1 + sqrt(-3))/2."""
        return cls._make(2 * m - n, n, QuadraticRing(-3))

    @classmethod
    def from_phi(cls, m: int, n: int) -> "quadint":
        """Build m + n*φ in Z[φ], where φ = (1 + sqrt(5))/2."""
        return cls.from_theta(m, n, QuadraticRing(5))

    def _common_ring(self, other: "quadint") -> tuple["quadint", "quadint"]:
        """
        Bring both operands into one ring.

        A rational integer (zero surd part) moves into the other operand's ring.

        Raises:
            AlgebraicDegreeOverflowError: If both operands are irrational and the rings differ.
        """
        if self.ring == other.ring:
            return self, other
        if not other.b:
            return self, self._make(other.a, 0, self.ring)
        if not self.b:
            return other._make(self.a, 0, other.ring), other

        raise AlgebraicDegreeOverflowError(QuadraticRing.max_algebraic_degree, 4, self, other)

    def _is_pure_surd_pair(self, other: "quadint") -> bool:
        """True for b1*sqrt(d1) and b2*sqrt(d2) with different radicands."""
        return self.ring != other.ring and not self.a and not other.a and bool(self.b) and bool(other.b)
    # endregion

    @property
    def is_half_integer(self) -> bool:
        """True iff this is (a + b*sqrt(d))/2 with a, b odd."""
        return bool(self.a & 1)

    @property
    def reg_part_mult(self) -> int:
        return self.a if self.is_half_integer else self.a // 2

    @property
    def surd_part_mult(self) -> int:
        return self.b if self.is_half_integer else self.b // 2

    @property
    def denom(self) -> int:
        return 2 if self.is_half_integer else 1

    def components2(self) -> tuple[int, int]:
        """Return the stored numerator components (A, B) for (...)/2."""
        return self.a, self.b

    def algebraic_degree(self) -> int:
        """0 for zero, 1 for rational integers, 2 otherwise."""
        if self.b:
            return 2
        return 1 if self.a else 0

    def conjugate(self) -> "quadint":
        """(A + B*sqrt(d))/2 -> (A - B*sqrt(d))/2"""
        return self._make(self.a, -self.b, self.ring)

    def trace(self) -> int:
        """Sum with the conjugate, 2a/denom."""
        return self.a

    def norm(self) -> int:
        """
        Product with the conjugate:
            N((A + B*sqrt(d))/2) = (A^2 - d*B^2) / 4

        Never negative in imaginary rings.

        Raises:
            ArithmeticError: If there is a non-integral norm due to parity violation.

        Returns:
            int: The norm.
        """
        num = self.a * self.a - self.ring.radicand * self.b * self.b
        q, r = divmod(num, 4)
        if r != 0:
            raise ArithmeticError("Non-integral norm; parity constraint violated")

        return q

    def is_unit(self) -> bool:
        return abs(self) == 1

    def min_polynomial_coeffs(self) -> tuple[int, ...]:
        """
        Coefficients of the minimal polynomial, constant term first.

        Returns:
            tuple: (norm, -trace, 1) at degree 2, (-a, 1) at degree 1 and (0,) for zero.
        """
        degree = self.algebraic_degree()
        if degree == 2:
            return self.norm(), -self.trace(), 1
        if degree == 1:
            return -(self.a // 2), 1
        return (0,)

    def min_polynomial_string(self) -> str:
        return _polynomial_string(self.min_polynomial_coeffs(), "^2", "-")

    def min_polynomial_string_html(self) -> str:
        return _polynomial_string(self.min_polynomial_coeffs(), "<sup>2</sup>", "&minus;")

    # region numeric approximations
    def real_part_numeric(self) -> float:
        if self.ring.is_purely_real:
            return (self.a + self.b * self.ring.rad_sqrt) / 2
        return self.a / 2

    def imag_part_numeric(self) -> float:
        if self.ring.is_purely_real:
            return 0.0
        return self.b * self.ring.abs_rad_sqrt / 2

    def numeric_abs(self) -> float:
        return hypot(self.real_part_numeric(), self.imag_part_numeric())

    def angle(self) -> float:
        """Argument in radians, in (-pi, pi]."""
        return atan2(self.imag_part_numeric(), self.real_part_numeric())

    def __complex__(self) -> complex:
        return complex(self.real_part_numeric(), self.imag_part_numeric())

    def __float__(self) -> float:
        if not self.ring.is_purely_real and self.b:
            raise TypeError(f"{self} is not a real number")
        return self.real_part_numeric()
    # endregion

    def __add__(self, other: OP_TYPES) -> "quadint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, quadint):
            x, y = self._common_ring(other)
            return self._make(x.a + y.a, x.b + y.b, x.ring)

        return NotImplemented

    def __radd__(self, other: OTHER_OP_TYPES) -> "quadint":
        return self.__add__(other)

    def __sub__(self, other: OP_TYPES) -> "quadint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, quadint):
            x, y = self._common_ring(other)
            return self._make(x.a - y.a, x.b - y.b, x.ring)

        return NotImplemented

    def __rsub__(self, other: OTHER_OP_TYPES) -> "quadint":
        return self.__neg__().__add__(other)

    def __neg__(self) -> "quadint":
        return self._make(-self.a, -self.b, self.ring)

    def __pos__(self) -> "quadint":
        return self._make(self.a, self.b, self.ring)

    def __mul__(self, other: OP_TYPES) -> "quadint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, quadint):
            return NotImplemented

        if self._is_pure_surd_pair(other):
            return self._surd_product(other)

        x, y = self._common_ring(other)

        # If x=(A+B*sqrt(d))/2 and y=(C+E*sqrt(d))/2,
        # then xy has denominator 4; we store with denominator 2,
        # so we must divide resulting numerators by 2.
        A, B = x.a, x.b
        C, E = y.a, y.b
        d = x.ring.radicand

        P = A * C + d * B * E
        Q = A * E + B * C

        if (P & 1) or (Q & 1):
            raise ArithmeticError("Non-integral product; parity constraint violated")

        return self._make(P // 2, Q // 2, x.ring)

    def __rmul__(self, other: OTHER_OP_TYPES) -> "quadint":
        return self.__mul__(other)

    def _surd_product(self, other: "quadint") -> "quadint":
        """
        b1*sqrt(d1) * b2*sqrt(d2) = ±b1*b2*s*sqrt(k) where d1*d2 = k*s^2.

        The sign is negative when both radicands are negative, since sqrt(d1)*sqrt(d2) = -sqrt(d1*d2) there.
        """
        d1, d2 = self.ring.radicand, other.ring.radicand
        k, s = squarefree_kernel(d1 * d2)
        sign = -1 if d1 < 0 and d2 < 0 else 1
        return quadint(0, sign * (self.b // 2) * (other.b // 2) * s, QuadraticRing(k))

    def _surd_quotient(self, other: "quadint") -> "quadint":
        """
        b1*sqrt(d1) / (b2*sqrt(d2)) = b1*sqrt(d1)*sqrt(d2) / (b2*d2).

        Raises:
            NotDivisibleError: If the coefficient is not an integer.
        """
        d1, d2 = self.ring.radicand, other.ring.radicand
        k, s = squarefree_kernel(d1 * d2)
        sign = -1 if d1 > 0 and d2 < 0 else 1
        num = sign * (self.b // 2) * s
        den = (other.b // 2) * abs(d2)

        if num % den:
            raise NotDivisibleError(self, other, 0, num, den, k)

        return quadint(0, num // den, QuadraticRing(k))

    def __pow__(self, exp: int) -> "quadint":
        e = int(exp)
        if e < 0:
            raise ValueError("Negative powers not supported")

        result = self._make(2, 0, self.ring)  # multiplicative identity
        base: quadint = self
        while e:
            if e & 1:
                result = result * base

            e >>= 1
            if e:
                base = base * base

        return result

    # region exact division
    def __truediv__(self, other: OP_TYPES) -> "quadint":
        """
        Exact division.

        Returns:
            quadint: q with q * other == self.

        Raises:
            ZeroDivisionError: If other == 0.
            NotDivisibleError: If the quotient is not an algebraic integer of the ring.
            AlgebraicDegreeOverflowError: If the quotient would need degree 4.
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, quadint):
            return NotImplemented

        if not other:
            raise ZeroDivisionError(f"{self} / 0")

        if self._is_pure_surd_pair(other):
            return self._surd_quotient(other)

        x, y = self._common_ring(other)

        # x / y = x * conj(y) / N(y); x * conj(y) is stored as (P + Q*sqrt(d))/2
        n = y.norm()
        num = x * y.conjugate()
        P, Q = num.a, num.b
        if n < 0:
            P, Q, n = -P, -Q, -n

        if P % n == 0 and Q % n == 0:
            A, B = P // n, Q // n
            if not (A ^ B) & 1 and (not A & 1 or x.ring.has_half_integers):
                return self._make(A, B, x.ring)

        raise NotDivisibleError(x, y, P, Q, 2 * n, x.ring.radicand)

    def __rtruediv__(self, other: OTHER_OP_TYPES) -> "quadint":
        if isinstance(other, _OTHER_OP_TYPES):
            new_other = self._from_obj(other)
            return new_other.__truediv__(self)

        return NotImplemented
    # endregion

    # region Euclidean division
    def _division(self, num: "quadint", divisor: "quadint", divisor_norm: int) -> tuple["quadint", "quadint"]:
        """
        Nearest-lattice quotient and its remainder.

        Args:
            num: self * conj(divisor).
            divisor: The divisor, already in self's ring.
            divisor_norm: The divisor norm. Should be checked for 0 already!

        Returns:
            tuple: The quotient and remainder.
        """
        ring = num.ring
        P, Q, n = num.a, num.b, divisor_norm
        if n < 0:
            P, Q, n = -P, -Q, -n

        # We want q ≈ num / n, but everything is stored in numerator-units (../2).
        # Without half-integers the quotient numerators must be even.
        if ring.has_half_integers:
            A0 = _round_div_ties_away_from_zero(P, n)
            B0 = _round_div_ties_away_from_zero(Q, n)
            step = 1
        else:
            A0 = 2 * _round_div_ties_away_from_zero(P, 2 * n)
            B0 = 2 * _round_div_ties_away_from_zero(Q, 2 * n)
            step = 2

        # The norm is indefinite in real rings, so look further around the rounded point.
        reach = (2 if ring.is_purely_real else 1) * step

        best: Optional[tuple[int, quadint, quadint]] = None
        for A in range(A0 - reach, A0 + reach + 1, step):
            for B in range(B0 - reach, B0 + reach + 1, step):
                if (A ^ B) & 1:
                    continue

                q = self._make(A, B, ring)
                r = self - q * divisor
                metric = abs(r)
                if best is None or metric < best[0]:
                    best = (metric, q, r)

        assert best is not None
        return best[1], best[2]

    def __divmod__(self, other: OP_TYPES) -> tuple["quadint", "quadint"]:
        """
        Nearest-lattice division:
            self = q * other + r

        Returns:
            (q, r) where r has small absolute norm (below abs(other) in norm-Euclidean rings).

        Raises:
            ZeroDivisionError: if other == 0
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, quadint):
            return NotImplemented

        x, y = self._common_ring(other)
        n = y.norm()
        if n == 0:
            raise ZeroDivisionError

        # q ~ self * conj(other) / N(other)
        num = x * y.conjugate()

        return x._division(num, y, n)

    def __floordiv__(self, other: OP_TYPES) -> "quadint":
        q, _ = divmod(self, other)
        return q

    def __rfloordiv__(self, other: OTHER_OP_TYPES) -> "quadint":
        if isinstance(other, _OTHER_OP_TYPES):
            new_other = self._from_obj(other)
            return new_other.__floordiv__(self)

        return NotImplemented

    def __mod__(self, other: OP_TYPES) -> "quadint":
        _, r = divmod(self, other)
        return r
    # endregion

    def __abs__(self) -> int:
        """Absolute value of the norm."""
        return abs(self.norm())

    def __bool__(self) -> bool:
        return (self.a | self.b) != 0

    def __iter__(self) -> Iterator[int]:
        return iter((self.a, self.b))

    def __len__(self) -> int:
        return 2

    def __getitem__(self, idx: int) -> int:
        if idx == 0:
            return self.a
        if idx == 1:
            return self.b
        raise IndexError("quadint index out of range (valid: 0..1)")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, quadint):
            return False

        return (self.a, self.b, self.ring) == (other.a, other.b, other.ring)

    def __hash__(self) -> int:
        return hash((self.a, self.b, self.ring))

    # region ordering (real rings only)
    def _compare(self, other: OP_TYPES) -> Optional[int]:
        """Sign of self - other, or None when the difference is not a real number."""
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, quadint):
            return None

        diff = self - other
        if not diff.ring.is_purely_real:
            return None

        return _real_sign(diff.a, diff.b, diff.ring.radicand)

    def __lt__(self, other: OP_TYPES) -> bool:
        c = self._compare(other)
        if c is None:
            return NotImplemented
        return c < 0

    def __le__(self, other: OP_TYPES) -> bool:
        c = self._compare(other)
        if c is None:
            return NotImplemented
        return c <= 0

    def __gt__(self, other: OP_TYPES) -> bool:
        c = self._compare(other)
        if c is None:
            return NotImplemented
        return c > 0

    def __ge__(self, other: OP_TYPES) -> bool:
        c = self._compare(other)
        if c is None:
            return NotImplemented
        return c >= 0
    # endregion

    # region presentation
    def _render(self, root: str, minus: str, half: Callable[[str], str]) -> str:
        reg, surd = self.reg_part_mult, self.surd_part_mult
        reg_mag, surd_mag = str(abs(reg)), _coeff(abs(surd), root)
        if self.is_half_integer:
            reg_mag, surd_mag = half(reg_mag), half(surd_mag)

        return _join_terms(reg, reg_mag, surd, surd_mag, minus)

    def _render_alt(self, style: int) -> Optional[str]:
        """Render with i, ω, φ or θ as the second basis element, or None when this ring has no such symbol."""
        d = self.ring.radicand
        if d == -1:
            m, n, symbol = self.a // 2, self.b // 2, "i"
        elif self.ring.has_half_integers:
            # (A + B*sqrt(d))/2 = m + n*θ with θ = (1 + sqrt(d))/2, or m + n*ω with ω = (-1 + sqrt(-3))/2
            n = self.b
            if d == -3:
                m, symbol = (self.a + self.b) // 2, "omega"
            else:
                m, symbol = (self.a - self.b) // 2, "phi" if d == 5 else "theta"
        else:
            return None

        return _join_terms(m, str(abs(m)), n, _coeff(abs(n), _SYMBOLS[symbol][style]), _MINUS[style])

    def __str__(self) -> str:
        """Plain rendering, e.g. "3 - 2√(-5)" or "1/2 + √(-3)/2"."""
        return self._render(f"√({self.ring.radicand})", "-", lambda s: f"{s}/2")

    def __repr__(self) -> str:
        den = ", 2" if self.is_half_integer else ""
        return f"quadint({self.reg_part_mult}, {self.surd_part_mult}, {self.ring.radicand}{den})"

    def to_ascii_string(self) -> str:
        return self._render(f"sqrt({self.ring.radicand})", "-", lambda s: f"{s}/2")

    def to_tex_string(self) -> str:
        """TeX rendering; half-integers become "\\frac{a}{2} + \\frac{b\\sqrt{d}}{2}"."""
        return self._render(f"\\sqrt{{{self.ring.radicand}}}", "-", lambda s: f"\\frac{{{s}}}{{2}}")

    def to_tex_string_single_denom(self) -> str:
        """TeX rendering with one fraction bar, "\\frac{a + b\\sqrt{d}}{2}"."""
        if not self.is_half_integer:
            return self.to_tex_string()

        numerator = _join_terms(self.a, str(abs(self.a)), self.b,
                                _coeff(abs(self.b), f"\\sqrt{{{self.ring.radicand}}}"), "-")
        return f"\\frac{{{numerator}}}{{2}}"

    def to_html_string(self) -> str:
        d = self.ring.radicand
        rad = f"&minus;{-d}" if d < 0 else str(d)
        return self._render(f"&radic;({rad})", "&minus;", lambda s: f"{s}/2")

    def to_string_alt(self) -> str:
        """Like str(), but with i, ω, φ or θ where the ring has one, e.g. "2 + θ" for (5 + √(-7))/2."""
        alt = self._render_alt(_PLAIN)
        return str(self) if alt is None else alt

    def to_ascii_string_alt(self) -> str:
        alt = self._render_alt(_ASCII)
        return self.to_ascii_string() if alt is None else alt

    def to_tex_string_alt(self) -> str:
        alt = self._render_alt(_TEX)
        return self.to_tex_string() if alt is None else alt

    def to_html_string_alt(self) -> str:
        alt = self._render_alt(_HTML)
        return self.to_html_string() if alt is None else alt
    # endregion

    # region GCD
    def _in_primary_sector(self) -> bool:
        """Exact test for the sector that holds one associate of each nonzero element of an imaginary ring."""
        A, B = self.a, self.b
        d = self.ring.radicand
        if d == -1:
            # argument in (-pi/4, pi/4]
            return A > 0 and -A < B <= A
        if d == -3:
            # argument in (-pi/6, pi/6]
            return A > 0 and -A < 3 * B <= A
        return A > 0 or (A == 0 and B > 0)

    def _normalize_unit(self) -> "quadint":
        """
        Deterministic associate choice.

        Imaginary rings have finitely many units, so this picks the associate in the primary sector.
        Real rings only get the sign fixed here; see ntheory.divide_out_units for the full normalization.

        Returns:
            quadint: The unit normalized quadint.
        """
        if not self:
            return self

        if self.ring.is_purely_real:
            return -self if _real_sign(self.a, self.b, self.ring.radicand) < 0 else self

        for u in _ring_units(self.ring):
            cand = self * u
            if cand._in_primary_sector():
                return cand

        raise ArithmeticError(f"No associate of {self} in the primary sector")

    def _gcd(self, other: OP_TYPES, *, normalize: bool = True) -> "quadint":
        """GCD via Euclidean algorithm, whether or not the ring is norm-Euclidean."""
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, quadint):
            raise TypeError(f"Unable to divide quadint and type {type(other)}")

        a, b = self._common_ring(other)

        if not a:
            return b._normalize_unit() if normalize else b

        if b:
            last = abs(b)
            while b:
                _, r = divmod(a, b)
                a, b = b, r

                if b:
                    nb = abs(b)
                    if nb >= last:
                        raise ArithmeticError("Euclidean descent failed (non-decreasing remainder norm)")
                    last = nb

        return a._normalize_unit() if normalize else a

    def gcd(self, other: OP_TYPES, *, normalize: bool = True) -> "quadint":
        """
        GCD via the Euclidean algorithm.

        Returns:
            quadint: A generator of the ideal spanned by self and other.

        Raises:
            NonEuclideanDomainError: If the ring is not norm-Euclidean.
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, quadint):
            raise TypeError(f"Unable to divide quadint and type {type(other)}")

        x, y = self._common_ring(other)
        if not x.ring.is_norm_euclidean:
            raise NonEuclideanDomainError(x, y)

        return x._gcd(y, normalize=normalize)
    # endregion

    # region Factoring
    def content(self) -> int:
        """
        Largest positive integer m such that self = m*q' with q' still in the ring.
            Computed on the coordinates over the integral basis {1, θ} or {1, sqrt(d)}.

        Returns:
            int: Computed content value, 0 for zero.
        """
        if self.ring.has_half_integers:
            return gcd((self.a - self.b) // 2, self.b)
        return gcd(self.a // 2, self.b // 2)

    @staticmethod
    @cache
    def _primes_over(ring: QuadraticRing, p: int) -> tuple["quadint", ...]:
        """
        Primes of the ring whose product is the rational prime p, up to a unit.

        For a prime that doesn't stay inert, t - ω has norm divisible by p for a root t of the
            minimal polynomial of ω modulo p, and gcd(p, t - ω) has norm p.

        Raises:
            ArithmeticError: If the Euclidean algorithm fails in this ring.
        """
        rational = quadint(p, 0, ring)
        if symbol_kronecker(ring.discriminant, p) == -1:
            return (rational,)

        d = ring.radicand
        if ring.has_half_integers:
            # minimal polynomial of (1 + sqrt(d))/2 is x^2 - x + (1 - d)/4
            def f(t: int) -> int:
                return t * t - t + (1 - d) // 4
        else:
            def f(t: int) -> int:
                return t * t - d

        if p == 2:
            t = next(t for t in (0, 1) if f(t) % 2 == 0)
        elif ring.has_half_integers:
            # complete the square: (2t - 1)^2 = d (mod p)
            t = (int(sqrt_mod(d, p)) + 1) * ((p + 1) // 2) % p
        else:
            t = int(sqrt_mod(d, p))

        if ring.has_half_integers:
            alpha = quadint(2 * t - 1, -1, ring, 2)
        else:
            alpha = quadint(t, -1, ring)

        pi = alpha._gcd(rational)
        if abs(pi) != p:
            raise ArithmeticError(f"prime construction failed: gcd did not have norm {p}")

        return pi, (rational / pi)._normalize_unit()

    def _extract_prime(self, p: int) -> "quadint":
        """
        Extract a prime of norm p dividing self, which must not be divisible by p itself.

        Raises:
            ArithmeticError: If the Euclidean algorithm fails in this ring.
        """
        g = self._gcd(p)

        if abs(g) != p:
            raise ArithmeticError(f"Failed to extract prime for {p=}")

        return g

    def factor(self) -> QuadraticFactorization:
        """
        Factor into primes of the ring.

        Always succeeds in norm-Euclidean rings, and wherever else the Euclidean algorithm happens to.

        Returns:
            QuadraticFactorization: The factorization.

        Raises:
            ValueError: For zero.
            ArithmeticError: If the Euclidean algorithm fails in this ring.
        """
        if not self:
            raise ValueError("0 has no factorization")

        primes: list[quadint] = []

        # Rational content first: each rational prime factors on its own
        m = self.content()
        for p, e in factorint(m).items():
            primes.extend(quadint._primes_over(self.ring, int(p)) * e)

        # Now q is primitive, so no inert prime divides it and every p | N(q) gives a prime of norm p.
        q = self / m if m > 1 else self
        nf = factorint(abs(q))
        for p in sorted(nf.keys()):
            for _ in range(nf[p]):
                pi = q._extract_prime(int(p))
                try:
                    q = q / pi
                except NotDivisibleError as e:
                    raise ArithmeticError("extracted prime did not actually divide (unexpected)") from e
                primes.append(pi)

        primes.sort(key=lambda x: (abs(x), x.components2()))

        unit = self / prod(primes, start=self._make(2, 0, self.ring))
        if not unit.is_unit():
            raise ArithmeticError("remaining cofactor is not a unit; factorization incomplete")

        return QuadraticFactorization(unit=unit, primes=tuple(primes))
    # endregion


@cache
def _ring_units(ring: QuadraticRing) -> tuple[quadint, ...]:
    """All units of an imaginary ring, by increasing argument starting at 1."""
    d = ring.radicand
    if d == -1:
        numerators = [(2, 0), (0, 2), (-2, 0), (0, -2)]
    elif d == -3:
        # ±1, ±ω, ±ω^2
        numerators = [(2, 0), (1, 1), (-1, 1), (-2, 0), (-1, -1), (1, -1)]
    else:
        numerators = [(2, 0), (-2, 0)]

    return tuple(quadint._make(A, B, ring) for A, B in numerators)
