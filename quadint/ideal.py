from typing import Optional, Union

from sympy import Matrix
from sympy.matrices.normalforms import hermite_normal_form
from sympy.ntheory import isprime

from quadint.config import DEFAULT_FORMAT, FormatOptions
from quadint.errors import NonEuclideanDomainError, NotDivisibleError
from quadint.ntheory import divide_out_units, euclidean_gcd, is_prime
from quadint.quad import quadint
from quadint.ring import QuadraticRing


class Ideal:
    """
    Ideal of a quadratic ring, generated by one element (principal) or two.

    Ideal(ring)        the whole ring
    Ideal(g)           principal ideal (g); |N(g)| = 1 gives the whole ring
    Ideal(g, h)        the ideal g*R + h*R, principal whenever the Euclidean algorithm finds gcd(g, h)

    Generators are stored with their units divided out, so ideals built from associates compare equal.
    """

    __slots__ = ("ring", "generators")

    ring: QuadraticRing
    generators: tuple[quadint, ...]

    def __init__(self, first: Union[QuadraticRing, quadint, int], second: Union[quadint, int, None] = None) -> None:
        """
        Raises:
            ValueError: If the generators come from different rings, or a ring is given with a generator.
            TypeError: If no generator is a quadint, so there is no ring to put the ideal in.
        """
        if isinstance(first, QuadraticRing):
            if second is not None:
                raise ValueError("The whole-ring ideal takes no generators")
            self.ring = first
            self.generators = (quadint(1, 0, first),)
            return

        # A rational generator may come first as long as the other one names the ring
        if isinstance(first, int) and isinstance(second, quadint):
            first, second = second, first

        if not isinstance(first, quadint):
            raise TypeError(f"An ideal needs a ring or a quadint generator, got {type(first).__name__}"
                            f" and {type(second).__name__}")

        self.ring = first.ring

        if second is None:
            self.generators = (self._principal_generator(first),)
            return

        if isinstance(second, int):
            second = quadint(second, 0, first.ring)

        if second.ring != first.ring:
            raise ValueError(f"Generators come from different rings: {first.ring} and {second.ring}")

        g = self._try_gcd(first, second)
        if g is not None:
            self.generators = (self._principal_generator(g),)
            return

        # List a purely rational generator second
        if not first.b and second.b:
            first, second = second, first

        self.generators = (divide_out_units(first), divide_out_units(second))

    @staticmethod
    def _try_gcd(first: quadint, second: quadint) -> Optional[quadint]:
        """gcd(first, second), or None when the Euclidean algorithm can't find one in this ring."""
        try:
            return euclidean_gcd(first, second)
        except NonEuclideanDomainError as e:
            try:
                return e.try_euclidean_gcd_anyway()
            except ArithmeticError:
                return None

    @staticmethod
    def _principal_generator(g: quadint) -> quadint:
        if abs(g) == 1:
            return quadint(1, 0, g.ring)
        return divide_out_units(g)

    def is_principal(self) -> bool:
        return len(self.generators) == 1

    def is_whole_ring(self) -> bool:
        return self.is_principal() and abs(self.generators[0]) == 1

    def norm(self) -> int:
        """Absolute norm of the generator for principal ideals; 0 (not computed) otherwise."""
        if self.is_principal():
            return abs(self.generators[0])
        return 0

    # region lattice
    def _coords(self, x: quadint) -> tuple[int, int]:
        """Coordinates of x over the integral basis {1, sqrt(d)} or {1, (1 + sqrt(d))/2}."""
        if self.ring.has_half_integers:
            return (x.a - x.b) // 2, x.b
        return x.a // 2, x.b // 2

    def _omega(self) -> quadint:
        if self.ring.has_half_integers:
            return quadint(1, 1, self.ring, 2)
        return quadint(0, 1, self.ring)

    def _lattice_basis(self) -> tuple[tuple[int, int], tuple[int, int]]:
        """
        A Z-basis of the ideal as a lattice in Z^2, from the Hermite normal form of g, g*ω, h, h*ω.

        Raises:
            ArithmeticError: If the generators span less than a full lattice (the zero ideal).
        """
        omega = self._omega()
        columns = []
        for g in self.generators:
            columns.append(self._coords(g))
            columns.append(self._coords(g * omega))

        hnf = hermite_normal_form(Matrix([[c[0] for c in columns], [c[1] for c in columns]]))
        if hnf.shape != (2, 2):
            raise ArithmeticError(f"{self} does not span a full lattice")

        return (int(hnf[0, 0]), int(hnf[1, 0])), (int(hnf[0, 1]), int(hnf[1, 1]))

    def lattice_index(self) -> int:
        """Index of the ideal in the ring as a subgroup of Z^2, which is its norm."""
        if self.is_principal():
            return self.norm()

        (u1, u2), (v1, v2) = self._lattice_basis()
        return abs(u1 * v2 - u2 * v1)

    def _lattice_contains(self, x: quadint) -> bool:
        """Is x = s*u + t*v for integers s, t, with u, v the lattice basis? Solved by Cramer's rule."""
        (u1, u2), (v1, v2) = self._lattice_basis()
        x1, x2 = self._coords(x)

        det = u1 * v2 - u2 * v1
        s_num = x1 * v2 - x2 * v1
        t_num = u1 * x2 - u2 * x1
        return s_num % det == 0 and t_num % det == 0
    # endregion

    def contains(self, x: Union[quadint, int, "Ideal"]) -> bool:
        """
        Membership of an element, or inclusion of another ideal.

        Elements of other rings are never contained. For principal ideals this is exact divisibility;
        for two generators, x must be an integer combination of the lattice basis of g*R + h*R.
        """
        if isinstance(x, Ideal):
            return x.ring == self.ring and all(self.contains(g) for g in x.generators)

        if isinstance(x, int):
            x = quadint(x, 0, self.ring)

        if x.ring != self.ring:
            return False

        if not self.is_principal():
            return self._lattice_contains(x)

        g = self.generators[0]
        if not g:
            return not x

        try:
            x / g
        except NotDivisibleError:
            return False

        return True

    def __contains__(self, x: Union[quadint, int, "Ideal"]) -> bool:
        return self.contains(x)

    def is_maximal(self) -> bool:
        """
        Whether the ideal is maximal (prime and nonzero).

        Principal ideals are maximal when the generator is prime. A non-principal ideal is
        maximal exactly when its norm is a rational prime.
        """
        if self.is_principal():
            return is_prime(self.generators[0])
        return isprime(self.lattice_index())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ideal):
            return False
        return self.ring == other.ring and self.generators == other.generators

    def __hash__(self) -> int:
        return hash((self.ring, self.generators))

    def __repr__(self) -> str:
        if self.is_whole_ring():
            return f"Ideal({self.ring!r})"
        return f"Ideal({', '.join(repr(g) for g in self.generators)})"

    # region presentation
    def __str__(self) -> str:
        """Angle brackets around the generators, or the ring itself for the whole ring."""
        if self.is_whole_ring():
            return str(self.ring)
        return f"⟨{', '.join(str(g) for g in self.generators)}⟩"

    def to_ascii_string(self) -> str:
        if self.is_whole_ring():
            return self.ring.to_ascii_string()
        return f"({', '.join(g.to_ascii_string() for g in self.generators)})"

    def to_tex_string(self, options: FormatOptions = DEFAULT_FORMAT) -> str:
        if self.is_whole_ring():
            return self.ring.to_tex_string(options)
        return f"\\langle {', '.join(g.to_tex_string() for g in self.generators)} \\rangle"

    def to_html_string(self, options: FormatOptions = DEFAULT_FORMAT) -> str:
        if self.is_whole_ring():
            return self.ring.to_html_string(options)
        return f"&#10216;{', '.join(g.to_html_string() for g in self.generators)}&#10217;"
    # endregion
