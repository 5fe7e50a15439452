import logging

from math import isqrt
from typing import Optional

from sympy import primerange

from quadint.config import Settings
from quadint.ntheory import Splitting, field_class_number, fundamental_unit, is_perfect_square, prime_behavior
from quadint.quad import quadint
from quadint.ring import QuadraticRing

logger = logging.getLogger(__name__)


class ResultsGrouping:
    """
    How the rational primes up to a bound factor in one ring.

    Every rational prime p <= prime_pi is in exactly one of:
      - inerts(): primes that stay prime in the ring
      - splits(): primes that split into two non-associate factors, mapped to one of them
      - ramifieds(): primes that are a unit times the square of a prime, mapped to that prime

    A factor is None when the bounded search below did not find one; raising the search threshold
    retries only those.

    The fundamental unit (real rings) and the class number are computed up front. When either
    computation fails the field is None and a warning is logged; classification still goes ahead.
    Class numbers are only attempted up to settings.class_number_limit on |D|.
    """

    def __init__(self,
                 ring: QuadraticRing,
                 prime_pi: Optional[int] = None,
                 surd_part_search_threshold: Optional[int] = None,
                 *,
                 settings: Optional[Settings] = None) -> None:
        """
        Classify the primes of a ring.

        Args:
            ring: The ring.
            prime_pi: Classify rational primes up to and including this bound. Defaults to settings.prime_pi.
            surd_part_search_threshold: Exclusive bound on the surd multiplier tried when searching for factors.
                Defaults to settings.surd_part_search_threshold.
            settings: Where the defaults come from.

        Raises:
            ValueError: On a negative bound or a threshold below 1.
        """
        settings = settings or Settings()
        if prime_pi is None:
            prime_pi = settings.prime_pi
        if surd_part_search_threshold is None:
            surd_part_search_threshold = settings.surd_part_search_threshold

        if prime_pi < 0:
            raise ValueError(f"prime_pi must be >= 0, got {prime_pi}")
        if surd_part_search_threshold < 1:
            raise ValueError(f"surd_part_search_threshold must be >= 1, got {surd_part_search_threshold}")

        self.ring = ring
        self._prime_pi = prime_pi
        self._threshold = surd_part_search_threshold
        self._class_number_limit = settings.class_number_limit

        self._inerts: set[quadint] = set()
        self._splits: dict[quadint, Optional[quadint]] = {}
        self._ramifieds: dict[quadint, Optional[quadint]] = {}

        self.fundamental_unit = self._compute_fundamental_unit()
        self.class_number = self._compute_class_number()

        self._classify(2, prime_pi)

    def _compute_fundamental_unit(self) -> Optional[quadint]:
        if not self.ring.is_purely_real:
            return None

        try:
            return fundamental_unit(self.ring)
        except ArithmeticError as e:
            logger.warning("Unable to compute the fundamental unit of %s: %s", self.ring, e)
            return None

    def _compute_class_number(self) -> Optional[int]:
        try:
            return field_class_number(self.ring, self._class_number_limit)
        except ArithmeticError as e:
            logger.warning("Unable to compute the class number of %s: %s", self.ring, e)
            return None

    @property
    def prime_pi(self) -> int:
        return self._prime_pi

    @property
    def surd_part_search_threshold(self) -> int:
        return self._threshold

    def _classify(self, lo: int, hi: int) -> None:
        """Classify the primes in [lo, hi] and search factors for the ones that split or ramify."""
        for p in primerange(lo, hi + 1):
            p = int(p)
            key = quadint(p, 0, self.ring)
            behavior = prime_behavior(self.ring, p)
            if behavior is Splitting.INERT:
                self._inerts.add(key)
            elif behavior is Splitting.SPLIT:
                self._splits[key] = self._find_factor(p)
            else:
                self._ramifieds[key] = self._find_factor(p)

    def _find_factor(self, p: int, start: int = 1) -> Optional[quadint]:
        """
        Look for an element of norm ±p with surd multiplier s, start <= s < threshold.

        (r + s*sqrt(d))/denom has norm ±p exactly when s^2*d ∓ n is the square r^2,
            with n = 4p and denom = 2 when the ring has half-integers, and n = p, denom = 1 otherwise.

        Returns:
            Optional[quadint]: The first candidate found, or None.
        """
        d = self.ring.radicand
        if self.ring.has_half_integers:
            num, denom = 4 * p, 2
        else:
            num, denom = p, 1

        for s in range(start, self._threshold):
            xd = s * s * d
            for trial in (xd - num, xd + num):
                if is_perfect_square(trial):
                    try:
                        return quadint(isqrt(trial), s, self.ring, denom)
                    except OverflowError as e:
                        logger.warning("Factor of %d in %s is out of range: %s", p, self.ring, e)
                        return None

            # In imaginary rings both trials only get more negative from here
            if xd + num < 0:
                break

        return None

    def raise_prime_pi(self, increment: int) -> None:
        """
        Extend classification to the primes up to prime_pi + increment.

        Primes classified before are left untouched.

        Raises:
            ValueError: If increment is negative.
        """
        if increment < 0:
            raise ValueError(f"prime_pi can only be raised, got increment {increment}")

        new_pi = self._prime_pi + increment
        self._classify(self._prime_pi + 1, new_pi)
        self._prime_pi = new_pi

    def raise_surd_part_search_threshold(self, increment: int) -> None:
        """
        Search further for the split and ramified primes that have no factor yet.

        Classifications don't depend on the threshold and stay as they are.

        Raises:
            ValueError: If increment is negative.
        """
        if increment < 0:
            raise ValueError(f"The search threshold can only be raised, got increment {increment}")

        old = self._threshold
        self._threshold += increment
        for table in (self._splits, self._ramifieds):
            for key in [k for k, v in table.items() if v is None]:
                table[key] = self._find_factor(key.reg_part_mult, start=old)

    def inerts(self) -> set[quadint]:
        return set(self._inerts)

    def splits(self) -> dict[quadint, Optional[quadint]]:
        return dict(self._splits)

    def ramifieds(self) -> dict[quadint, Optional[quadint]]:
        return dict(self._ramifieds)

    def classification(self, p: int) -> Splitting:
        """
        How an already covered rational prime factors.

        Raises:
            ValueError: If p is not a prime up to prime_pi.
        """
        if p > self._prime_pi:
            raise ValueError(f"{p} is beyond prime_pi = {self._prime_pi}")

        key = quadint(p, 0, self.ring)
        if key in self._inerts:
            return Splitting.INERT
        if key in self._splits:
            return Splitting.SPLIT
        if key in self._ramifieds:
            return Splitting.RAMIFIED

        raise ValueError(f"{p} is not prime")

    def __repr__(self) -> str:
        return f"ResultsGrouping({self.ring!r}, prime_pi={self._prime_pi})"
