from fractions import Fraction
from math import gcd, sqrt
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from quadint.quad import quadint


class AlgebraicDegreeOverflowError(ArithmeticError):
    """
    An operation would produce an algebraic number of higher degree than the operands can hold.

    Adding or multiplying numbers from two different quadratic rings generally gives a number of
    degree 4. The caller gets both degrees so it can decide whether to retry in a bigger representation.
    """

    def __init__(self,
                 max_expected_degree: int,
                 necessary_degree: int,
                 first: Optional["quadint"] = None,
                 second: Optional["quadint"] = None) -> None:
        self.max_expected_degree = max_expected_degree
        self.necessary_degree = necessary_degree
        self.first = first
        self.second = second
        super().__init__(f"Operation needs algebraic degree {necessary_degree} "
                         f"but only degree {max_expected_degree} is supported")


class NotDivisibleError(ArithmeticError):
    """
    A division whose quotient is not an algebraic integer of the ring.

    The exact quotient is kept as the reduced fraction
        (reg_numerator + surd_numerator * sqrt(radicand)) / denominator
    with a positive denominator.
    """

    def __init__(self,
                 dividend: "quadint",
                 divisor: "quadint",
                 reg_numerator: int,
                 surd_numerator: int,
                 denominator: int,
                 radicand: int) -> None:
        if denominator == 0:
            raise ValueError("denominator must not be 0")

        if denominator < 0:
            reg_numerator, surd_numerator, denominator = -reg_numerator, -surd_numerator, -denominator

        g = gcd(reg_numerator, surd_numerator, denominator)
        self.dividend = dividend
        self.divisor = divisor
        self.reg_numerator = reg_numerator // g
        self.surd_numerator = surd_numerator // g
        self.denominator = denominator // g
        self.radicand = radicand
        super().__init__(f"{dividend} is not divisible by {divisor}")

    @property
    def fractions(self) -> tuple[Fraction, Fraction]:
        """The rational and surd coefficients of the quotient."""
        return Fraction(self.reg_numerator, self.denominator), Fraction(self.surd_numerator, self.denominator)

    def numeric_real_part(self) -> float:
        """Approximate real part of the quotient."""
        reg, surd = self.fractions
        if self.radicand < 0:
            return float(reg)
        return float(reg) + float(surd) * sqrt(self.radicand)

    def numeric_imag_part(self) -> float:
        """Approximate imaginary part of the quotient, 0.0 for real radicands."""
        if self.radicand > 0:
            return 0.0
        return float(self.fractions[1]) * sqrt(-self.radicand)

    def round_toward_zero(self) -> "quadint":
        """Truncate both coefficients of the quotient toward zero, giving an element of the divisor's ring."""
        from quadint.quad import quadint

        reg, surd = self.fractions
        return quadint(int(reg), int(surd), self.divisor.ring)

    def round_away_from_zero(self) -> "quadint":
        """Round both coefficients of the quotient away from zero, giving an element of the divisor's ring."""
        from quadint.quad import quadint

        def away(f: Fraction) -> int:
            q = -(-abs(f.numerator) // f.denominator)
            return q if f >= 0 else -q

        reg, surd = self.fractions
        return quadint(away(reg), away(surd), self.divisor.ring)


class NonEuclideanDomainError(ArithmeticError):
    """
    A Euclidean GCD was requested in a ring that is not norm-Euclidean.

    The Euclidean algorithm can still succeed for particular pairs, so the operands are kept
    and try_euclidean_gcd_anyway() runs it regardless.
    """

    def __init__(self, first: "quadint", second: "quadint") -> None:
        self.first = first
        self.second = second
        super().__init__(f"{first.ring} is not norm-Euclidean")

    def try_euclidean_gcd_anyway(self) -> "quadint":
        """
        Run the Euclidean algorithm on the operands without checking the ring.

        Raises:
            ArithmeticError: If the remainder norms stop decreasing.

        Returns:
            quadint: A generator of the ideal spanned by both operands.
        """
        return self.first._gcd(self.second)
