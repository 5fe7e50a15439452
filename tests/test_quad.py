import itertools
import math

from fractions import Fraction
from typing import Union

import pytest

from quadint import AlgebraicDegreeOverflowError, NonEuclideanDomainError, NotDivisibleError, QuadraticRing, quadint
from quadint.ntheory import is_prime, place_in_primary_sector, units
from quadint.quad import PART_MAX, PART_MIN


def test_is_instance():
    """Verify that basic isinstance checks work"""
    assert isinstance(quadint(1, 2, -5), quadint)
    assert not isinstance(complex(1, 2), quadint)


def small_elements(ring: QuadraticRing, bound: int = 3):
    """Every element with numerators over 2 in [-2*bound, 2*bound] that is valid in the ring"""
    step = 1 if ring.has_half_integers else 2
    for A, B in itertools.product(range(-2 * bound, 2 * bound + 1, step), repeat=2):
        if (A ^ B) & 1:
            continue
        yield quadint(A, B, ring, 2)


class QuadIntTests:
    """Support methods for testing quadint"""
    gauss, eisenstein, r_m5, r_m7, r2, r5 = None, None, None, None, None, None

    def setup_method(self, _):
        """Setup some test data"""
        self.gauss = QuadraticRing(-1)
        self.eisenstein = QuadraticRing(-3)
        self.r_m5 = QuadraticRing(-5)
        self.r_m7 = QuadraticRing(-7)
        self.r2 = QuadraticRing(2)
        self.r5 = QuadraticRing(5)

        self.a_int = quadint(1, 2, self.r_m5)
        self.b_int = quadint(3, -1, self.r_m5)

    @staticmethod
    def assert_equal(res: Union[tuple, list], res_int: quadint):
        """Validate the quadint has the normalized parts (a, b, denom), and that it is still backed by integers"""
        assert (res_int.reg_part_mult, res_int.surd_part_mult, res_int.denom) == tuple(res)

        assert isinstance(res_int.a, int)
        assert isinstance(res_int.b, int)

        assert isinstance(res_int, quadint)


class TestInit(QuadIntTests):
    """Tests for __init__"""

    def test_denominators(self):
        """Parts over 1 and 2 are normalized"""
        self.assert_equal((1, 2, 1), quadint(1, 2, self.r_m5))
        self.assert_equal((1, 1, 2), quadint(1, 1, self.eisenstein, 2))
        self.assert_equal((1, 2, 1), quadint(2, 4, self.eisenstein, 2))

    def test_negative_denominator(self):
        """Negative denominators negate the numerators"""
        assert quadint(3, 2, self.r_m5, -1) == quadint(-3, -2, self.r_m5)
        assert quadint(1, 1, self.eisenstein, -2) == quadint(-1, -1, self.eisenstein, 2)

    def test_ring_from_radicand(self):
        """The ring can be given by its radicand"""
        assert quadint(1, 2, -5).ring == self.r_m5

    def test_mixed_parity(self):
        """Parts of different parity can't share a denominator of 2"""
        with pytest.raises(ValueError):
            quadint(2, 1, self.r5, 2)
        with pytest.raises(ValueError):
            quadint(2, 1, self.eisenstein, 2)

    def test_no_half_integers(self):
        """Odd parts over 2 need d = 1 (mod 4)"""
        with pytest.raises(ValueError):
            quadint(1, 1, self.r_m5, 2)
        with pytest.raises(ValueError):
            quadint(1, 1, self.gauss, 2)

    def test_bad_denominator(self):
        """Only ±1 and ±2 are accepted"""
        for denom in (0, 3, 4, -3):
            with pytest.raises(ValueError):
                quadint(2, 2, self.r5, denom)

    def test_range(self):
        """Normalized parts must fit 32 bits"""
        quadint(PART_MAX, PART_MIN, self.gauss)
        with pytest.raises(OverflowError):
            quadint(PART_MAX + 1, 0, self.gauss)
        with pytest.raises(OverflowError):
            quadint(0, PART_MIN - 1, self.gauss)
        with pytest.raises(OverflowError):
            quadint(PART_MAX, 0, self.gauss) + 1

    def test_factories(self):
        """from_theta, from_omega and from_phi"""
        assert quadint.from_theta(2, 1, -7) == quadint(5, 1, self.r_m7, 2)
        assert quadint.from_omega(0, 1) == quadint(-1, 1, self.eisenstein, 2)
        assert quadint.from_omega(1, 1) == quadint(1, 1, self.eisenstein, 2)
        assert quadint.from_phi(0, 1) == quadint(1, 1, self.r5, 2)

        with pytest.raises(ValueError):
            quadint.from_theta(1, 1, self.r_m5)


class TestEq(QuadIntTests):
    """Tests for __eq__ and __hash__"""

    def test_main(self):
        """Basic equals tests"""
        c = quadint(1, 2, self.r_m5)
        assert self.a_int == c
        assert self.b_int != c
        assert hash(self.a_int) == hash(c)

    def test_rings_differ(self):
        """The same parts in different rings are different values"""
        assert quadint(1, 0, self.gauss) != quadint(1, 0, self.r_m5)

    def test_int(self):
        """A quadint never equals a plain int"""
        assert quadint(1, 0, self.gauss) != 1


class TestReadOuts(QuadIntTests):
    """Tests for degree, trace, norm and the container protocol"""

    def test_algebraic_degree(self):
        """0 for zero, 1 for rationals, 2 otherwise"""
        assert quadint(0, 0, self.r_m5).algebraic_degree() == 0
        assert quadint(4, 0, self.r_m5).algebraic_degree() == 1
        assert quadint(0, 1, self.r_m5).algebraic_degree() == 2

    def test_trace(self):
        """The trace is 2a/denom"""
        assert quadint(3, 1, self.r_m7).trace() == 6
        assert quadint(3, 1, self.r_m7, 2).trace() == 3

    def test_norm(self):
        """The norm is (a^2 - d*b^2)/denom^2"""
        assert quadint(3, 1, self.r_m7).norm() == 16
        assert quadint(3, 1, self.r_m7, 2).norm() == 4
        assert quadint(1, 1, self.eisenstein, 2).norm() == 1
        assert quadint(1, 1, self.r2).norm() == -1
        assert abs(quadint(1, 1, self.r2)) == 1

    def test_norm_imaginary_nonnegative(self):
        """Norms in imaginary rings are never negative"""
        for ring in (self.gauss, self.eisenstein, self.r_m5, self.r_m7):
            for x in small_elements(ring, 5):
                assert x.norm() >= 0
                assert (x.norm() == 0) == (not x)

    def test_conjugate(self):
        """Conjugation flips the surd part and keeps the norm"""
        x = quadint(3, 1, self.r_m7, 2)
        assert x.conjugate() == quadint(3, -1, self.r_m7, 2)
        assert x * x.conjugate() == quadint(x.norm(), 0, self.r_m7)

    def test_is_unit(self):
        """Units have norm ±1"""
        assert quadint(0, 1, self.gauss).is_unit()
        assert quadint(1, 1, self.r2).is_unit()
        assert not quadint(1, 1, self.gauss).is_unit()

    def test_iter(self):
        """Iteration and indexing give the numerators over 2"""
        assert list(self.a_int) == [2, 4]
        assert len(self.a_int) == 2
        assert self.a_int[1] == 4
        with pytest.raises(IndexError):
            self.a_int[2]

    def test_content(self):
        """The largest rational integer dividing the value"""
        assert quadint(6, 4, self.r_m5).content() == 2
        assert quadint(3, 3, self.eisenstein, 2).content() == 3
        assert quadint(1, 1, self.eisenstein, 2).content() == 1


class TestMinPolynomial(QuadIntTests):
    """Tests for min_polynomial_coeffs and its strings"""

    def test_coeffs(self):
        """Coefficients by degree"""
        assert quadint(3, 1, self.r_m7).min_polynomial_coeffs() == (16, -6, 1)
        assert quadint(5, 0, self.r_m7).min_polynomial_coeffs() == (-5, 1)
        assert quadint(0, 0, self.r_m7).min_polynomial_coeffs() == (0,)

    def test_coeffs_from_norm_and_trace(self):
        """At degree 2 the coefficients are (norm, -trace, 1)"""
        for ring in (self.gauss, self.r_m7, self.r2, self.r5):
            for x in small_elements(ring):
                if x.algebraic_degree() == 2:
                    assert x.min_polynomial_coeffs() == (x.norm(), -x.trace(), 1)

    def test_string(self):
        """Plain polynomial strings"""
        assert quadint(3, 1, self.r_m7).min_polynomial_string() == "x^2 - 6x + 16"
        assert quadint(1, 1, self.eisenstein, 2).min_polynomial_string() == "x^2 - x + 1"
        assert quadint(0, 1, self.gauss).min_polynomial_string() == "x^2 + 1"
        assert quadint(1, 1, self.r2).min_polynomial_string() == "x^2 - 2x - 1"
        assert quadint(5, 0, self.r_m7).min_polynomial_string() == "x - 5"
        assert quadint(-5, 0, self.r_m7).min_polynomial_string() == "x + 5"
        assert quadint(0, 0, self.r_m7).min_polynomial_string() == "x"

    def test_html(self):
        """HTML polynomial strings"""
        assert quadint(3, 1, self.r_m7).min_polynomial_string_html() == "x<sup>2</sup> &minus; 6x + 16"


class TestAdd(QuadIntTests):
    """Tests for __add__ and __sub__"""

    def test_add(self):
        """Test quadint + quadint"""
        self.assert_equal((4, 1, 1), self.a_int + self.b_int)

    def test_add_half_integers(self):
        """Half-integers and whole elements mix freely"""
        x = quadint(1, 1, self.eisenstein, 2)
        assert x + quadint(1, 0, self.eisenstein) == quadint(3, 1, self.eisenstein, 2)
        self.assert_equal((1, 0, 1), x + quadint(1, -1, self.eisenstein, 2))

    def test_add_int(self):
        """Test quadint + int"""
        for i in range(-10, 10):
            self.assert_equal((1 + i, 2, 1), self.a_int + i)
            self.assert_equal((1 + i, 2, 1), i + self.a_int)

    def test_sub_int(self):
        """Test quadint - int and int - quadint"""
        self.assert_equal((-2, 2, 1), self.a_int - 3)
        self.assert_equal((2, -2, 1), 3 - self.a_int)

    def test_round_trip(self):
        """(x + y) - y == x"""
        for ring in (self.gauss, self.r_m7, self.r5):
            elements = list(small_elements(ring, 2))
            for x, y in itertools.product(elements, repeat=2):
                assert (x + y) - y == x

    def test_neg(self):
        """Negation and unary plus"""
        assert -self.a_int == quadint(-1, -2, self.r_m5)
        assert +self.a_int == self.a_int
        assert self.a_int + -self.a_int == quadint(0, 0, self.r_m5)


class TestMul(QuadIntTests):
    """Tests for __mul__ and __pow__"""

    def test_mul(self):
        """Test quadint * quadint"""
        assert quadint(1, 1, self.gauss) * quadint(1, -1, self.gauss) == quadint(2, 0, self.gauss)
        assert quadint(2, 1, self.r_m5) * quadint(2, -1, self.r_m5) == quadint(9, 0, self.r_m5)

    def test_mul_half_integers(self):
        """Products of half-integers"""
        x = quadint(1, 1, self.eisenstein, 2)
        self.assert_equal((-1, 1, 2), x * x)

        phi = quadint(1, 1, self.r5, 2)
        assert phi * phi == phi + 1

    def test_mul_int(self):
        """Test quadint * int"""
        for i in range(-10, 10):
            self.assert_equal((i, 2 * i, 1), self.a_int * i)
            self.assert_equal((i, 2 * i, 1), i * self.a_int)

    def test_pow(self):
        """Test quadint ** int"""
        x = quadint(1, 1, self.gauss)
        assert x ** 4 == quadint(-4, 0, self.gauss)
        assert x ** 0 == quadint(1, 0, self.gauss)
        assert x ** 1 == x

        y = quadint(3, 1, self.r_m7, 2)
        assert y ** 5 == y * y * y * y * y

        with pytest.raises(ValueError):
            x ** -1


class TestCrossRing(QuadIntTests):
    """Tests for operands from different rings"""

    def test_rational_moves(self):
        """A rational integer is reinterpreted in the other ring"""
        res = quadint(3, 0, self.r2) + quadint(1, 1, self.gauss)
        assert res == quadint(4, 1, self.gauss)
        assert res.ring == self.gauss

        assert quadint(1, 1, self.gauss) * quadint(2, 0, self.r_m5) == quadint(2, 2, self.gauss)

    def test_degree_overflow(self):
        """Two irrational operands from different rings need degree 4"""
        with pytest.raises(AlgebraicDegreeOverflowError) as info:
            quadint(0, 1, self.gauss) + quadint(0, 1, self.r2)

        assert info.value.max_expected_degree == 2
        assert info.value.necessary_degree == 4

        with pytest.raises(AlgebraicDegreeOverflowError):
            quadint(1, 1, self.gauss) * quadint(1, 1, self.r_m5)

    def test_surd_product(self):
        """Pure surds multiply into the ring of the squarefree kernel"""
        assert quadint(0, 1, self.r2) * quadint(0, 1, 3) == quadint(0, 1, 6)
        assert quadint(0, 1, self.gauss) * quadint(0, 1, -2) == quadint(0, -1, self.r2)
        assert quadint(0, 1, self.r2) * quadint(0, 1, self.eisenstein) == quadint(0, 1, -6)
        assert quadint(0, 2, 6) * quadint(0, 1, 3) == quadint(0, 6, self.r2)

    def test_surd_quotient(self):
        """Pure surds divide into the ring of the squarefree kernel"""
        assert quadint(0, 1, 6) / quadint(0, 1, self.r2) == quadint(0, 1, 3)

        with pytest.raises(NotDivisibleError) as info:
            quadint(0, 1, self.r2) / quadint(0, 1, 3)

        assert info.value.fractions == (Fraction(0), Fraction(1, 3))
        assert info.value.radicand == 6


class TestTrueDiv(QuadIntTests):
    """Tests for __truediv__"""

    def test_exact(self):
        """Exact quotients"""
        assert quadint(4, 2, self.r_m5) / 2 == quadint(2, 1, self.r_m5)
        assert quadint(9, 0, self.r_m5) / quadint(2, 1, self.r_m5) == quadint(2, -1, self.r_m5)
        assert 2 / quadint(1, 1, self.gauss) == quadint(1, -1, self.gauss)

    def test_half_integer_quotient(self):
        """Quotients that are half-integers"""
        assert 1 / quadint(1, 1, self.eisenstein, 2) == quadint(1, -1, self.eisenstein, 2)
        assert 2 / quadint(1, 1, self.r_m7, 2) == quadint(1, -1, self.r_m7, 2)

    def test_not_divisible(self):
        """1 / 2 in Z[sqrt(-5)]"""
        with pytest.raises(NotDivisibleError) as info:
            quadint(1, 0, self.r_m5) / quadint(2, 0, self.r_m5)

        e = info.value
        assert e.fractions == (Fraction(1, 2), Fraction(0))
        assert (e.reg_numerator, e.surd_numerator, e.denominator, e.radicand) == (1, 0, 2, -5)

    def test_not_divisible_half_ring(self):
        """Even with half-integers, 1/2 is not an algebraic integer"""
        with pytest.raises(NotDivisibleError) as info:
            quadint(1, 0, self.eisenstein) / 2

        assert info.value.fractions == (Fraction(1, 2), Fraction(0))

    def test_not_divisible_rounding(self):
        """The error rounds the exact quotient both ways"""
        with pytest.raises(NotDivisibleError) as info:
            quadint(3, 1, self.r_m5) / 2

        e = info.value
        assert (e.reg_numerator, e.surd_numerator, e.denominator) == (3, 1, 2)
        assert e.round_toward_zero() == quadint(1, 0, self.r_m5)
        assert e.round_away_from_zero() == quadint(2, 1, self.r_m5)
        assert e.numeric_real_part() == pytest.approx(1.5)
        assert e.numeric_imag_part() == pytest.approx(0.5 * math.sqrt(5))

    def test_zero(self):
        """Division by zero"""
        with pytest.raises(ZeroDivisionError):
            self.a_int / 0
        with pytest.raises(ZeroDivisionError):
            self.a_int / quadint(0, 0, self.r_m5)

    def test_round_trip(self):
        """(x * y) / y == x"""
        for ring in (self.gauss, self.eisenstein, self.r_m5, self.r2, self.r5):
            elements = list(small_elements(ring, 2))
            for x, y in itertools.product(elements, repeat=2):
                if y:
                    assert (x * y) / y == x


class TestDivmod(QuadIntTests):
    """Tests for __divmod__, __floordiv__ and __mod__"""

    @pytest.mark.parametrize("d", [-1, -2, -3, -7, -11, 2, 3, 5, 13])
    def test_euclidean(self, d):
        """q * y + r == x with |N(r)| < |N(y)| in norm-Euclidean rings"""
        ring = QuadraticRing(d)
        divisors = [y for y in small_elements(ring, 2) if y]
        for x in small_elements(ring, 3):
            for y in divisors:
                q, r = divmod(x, y)
                assert q * y + r == x
                assert abs(r) < abs(y)

    def test_operators(self):
        """// and % agree with divmod"""
        x, y = quadint(7, 3, self.gauss), quadint(2, 1, self.gauss)
        q, r = divmod(x, y)
        assert x // y == q
        assert x % y == r
        assert 10 // y == divmod(quadint(10, 0, self.gauss), y)[0]

    def test_zero(self):
        """Division by zero"""
        with pytest.raises(ZeroDivisionError):
            divmod(self.a_int, 0)


class TestGcd(QuadIntTests):
    """Tests for gcd"""

    def test_gaussian(self):
        """The gcd is normalized into the primary sector"""
        g = quadint(2, 1, self.gauss)
        a = g * quadint(1, 1, self.gauss)
        b = g * 3
        assert a.gcd(b) == g
        assert (a * quadint(0, 1, self.gauss)).gcd(b) == g

    def test_eisenstein(self):
        """gcd in Z[ω]"""
        g = quadint(2, 1, self.eisenstein)
        d = (g * 2).gcd(g * 3)
        assert d == place_in_primary_sector(g)

    def test_coprime(self):
        """Coprime elements have gcd 1"""
        assert quadint(1, 1, self.gauss).gcd(3) == quadint(1, 0, self.gauss)

    def test_zero(self):
        """gcd(0, x) is x up to a unit"""
        assert quadint(0, 0, self.gauss).gcd(quadint(-2, -1, self.gauss)) == quadint(2, 1, self.gauss)

    def test_non_euclidean(self):
        """Rings that are not norm-Euclidean refuse, but can try anyway"""
        with pytest.raises(NonEuclideanDomainError) as info:
            quadint(4, 0, self.r_m5).gcd(6)

        assert info.value.try_euclidean_gcd_anyway() == quadint(2, 0, self.r_m5)

    def test_non_euclidean_fails(self):
        """The Euclidean descent fails on a non-principal ideal"""
        with pytest.raises(NonEuclideanDomainError) as info:
            quadint(2, 0, self.r_m5).gcd(quadint(1, 1, self.r_m5))

        with pytest.raises(ArithmeticError):
            info.value.try_euclidean_gcd_anyway()


class TestFactor(QuadIntTests):
    """Tests for factor"""

    def test_gaussian(self):
        """10 = -i * (1 + i)^2 * (2 - i) * (2 + i)"""
        f = quadint(10, 0, self.gauss).factor()
        assert f.primes == (quadint(1, 1, self.gauss), quadint(1, 1, self.gauss),
                            quadint(2, -1, self.gauss), quadint(2, 1, self.gauss))
        assert f.unit == quadint(0, -1, self.gauss)
        assert f.prod() == quadint(10, 0, self.gauss)

    def test_inert(self):
        """Inert primes stay whole"""
        f = quadint(3, 0, self.gauss).factor()
        assert f.primes == (quadint(3, 0, self.gauss),)
        assert f.unit == quadint(1, 0, self.gauss)

    @pytest.mark.parametrize("d", [-1, -2, -3, -7, 2, 5])
    def test_products(self, d):
        """Every factorization multiplies back, into primes and a unit"""
        ring = QuadraticRing(d)
        for x in small_elements(ring, 5):
            if not x:
                continue

            f = x.factor()
            assert f.prod() == x
            assert f.unit.is_unit()
            assert all(is_prime(p) for p in f.primes)
            assert [abs(p) for p in f.primes] == sorted(abs(p) for p in f.primes)

    def test_zero(self):
        """0 has no factorization"""
        with pytest.raises(ValueError):
            quadint(0, 0, self.gauss).factor()

    def test_non_principal(self):
        """6 in Z[sqrt(-5)] can't be factored by the Euclidean algorithm"""
        with pytest.raises(ArithmeticError):
            quadint(6, 0, self.r_m5).factor()


class TestOrdering(QuadIntTests):
    """Tests for comparisons in real rings"""

    def test_real(self):
        """Exact comparisons"""
        assert quadint(1, 1, self.r2) > quadint(2, 0, self.r2)
        assert quadint(3, -2, self.r2) > 0
        assert quadint(-3, 2, self.r2) < 0
        assert quadint(1, 1, self.r2) < 3
        assert quadint(1, 1, self.r2) <= quadint(1, 1, self.r2)
        assert quadint(1, 1, self.r2) >= quadint(1, 1, self.r2)

    def test_sorted(self):
        """Sorting agrees with the numeric values"""
        values = [x for x in small_elements(self.r5, 3)]
        assert [float(x) for x in sorted(values)] == sorted(float(x) for x in values)

    def test_imaginary(self):
        """Imaginary values can't be ordered"""
        with pytest.raises(TypeError):
            quadint(1, 1, self.gauss) < quadint(2, 0, self.gauss)


class TestNumeric(QuadIntTests):
    """Tests for the numeric approximations"""

    def test_complex(self):
        """complex() of imaginary values"""
        assert complex(quadint(1, 2, self.gauss)) == complex(1, 2)
        assert complex(quadint(1, 1, self.eisenstein, 2)) == pytest.approx(complex(0.5, math.sqrt(3) / 2))

    def test_float(self):
        """float() of real values"""
        assert float(quadint(1, 1, self.r2)) == pytest.approx(1 + math.sqrt(2))
        assert float(quadint(3, 0, self.gauss)) == 3.0
        with pytest.raises(TypeError):
            float(quadint(0, 1, self.gauss))

    def test_abs_angle(self):
        """numeric_abs and angle"""
        assert quadint(3, 4, self.gauss).numeric_abs() == pytest.approx(5.0)
        assert quadint(0, 1, self.gauss).angle() == pytest.approx(math.pi / 2)
        assert quadint(-1, 0, self.gauss).angle() == pytest.approx(math.pi)


class TestStrings(QuadIntTests):
    """Tests for __str__, __repr__ and the other renderings"""

    def test_str(self):
        """Plain strings"""
        assert str(quadint(3, -2, self.r_m5)) == "3 - 2√(-5)"
        assert str(quadint(0, 1, self.r_m5)) == "√(-5)"
        assert str(quadint(0, -1, self.r_m5)) == "-√(-5)"
        assert str(quadint(-3, 0, self.r_m5)) == "-3"
        assert str(quadint(0, 0, self.r_m5)) == "0"
        assert str(quadint(0, 1, self.gauss)) == "√(-1)"

    def test_str_half(self):
        """Half-integers over 2"""
        assert str(quadint(1, 1, self.eisenstein, 2)) == "1/2 + √(-3)/2"
        assert str(quadint(-1, 3, self.eisenstein, 2)) == "-1/2 + 3√(-3)/2"

    def test_repr(self):
        """repr rebuilds the value"""
        assert repr(quadint(1, 1, self.eisenstein, 2)) == "quadint(1, 1, -3, 2)"
        assert repr(self.a_int) == "quadint(1, 2, -5)"

    def test_ascii(self):
        """ASCII strings"""
        assert quadint(3, -2, self.r_m5).to_ascii_string() == "3 - 2sqrt(-5)"
        assert quadint(1, 1, self.r5, 2).to_ascii_string() == "1/2 + sqrt(5)/2"

    def test_tex(self):
        """TeX strings"""
        assert quadint(3, -2, self.r_m5).to_tex_string() == "3 - 2\\sqrt{-5}"
        assert quadint(1, 1, self.eisenstein, 2).to_tex_string() == "\\frac{1}{2} + \\frac{\\sqrt{-3}}{2}"
        assert quadint(1, 1, self.eisenstein, 2).to_tex_string_single_denom() == "\\frac{1 + \\sqrt{-3}}{2}"
        assert quadint(3, -2, self.r_m5).to_tex_string_single_denom() == "3 - 2\\sqrt{-5}"

    def test_html(self):
        """HTML strings"""
        assert quadint(3, -2, self.r_m5).to_html_string() == "3 &minus; 2&radic;(&minus;5)"
        assert quadint(1, -1, self.r5, 2).to_html_string() == "1/2 &minus; &radic;(5)/2"

    def test_alt(self):
        """Renderings with i, ω, φ and θ"""
        assert quadint(3, -2, self.gauss).to_string_alt() == "3 - 2i"
        assert quadint(0, 1, self.gauss).to_string_alt() == "i"
        assert quadint(-1, 1, self.eisenstein, 2).to_string_alt() == "ω"
        assert quadint(1, 1, self.eisenstein, 2).to_string_alt() == "1 + ω"
        assert quadint(5, 1, self.r_m7, 2).to_string_alt() == "2 + θ"
        assert quadint(3, 1, self.r_m7).to_string_alt() == "2 + 2θ"
        assert quadint(1, 1, self.r5, 2).to_string_alt() == "φ"

    def test_alt_other_styles(self):
        """ASCII, TeX and HTML alternates"""
        x = quadint(1, 1, self.eisenstein, 2)
        assert x.to_ascii_string_alt() == "1 + omega"
        assert x.to_tex_string_alt() == "1 + \\omega"
        assert x.to_html_string_alt() == "1 + &omega;"
        assert quadint(1, -1, self.gauss).to_html_string_alt() == "1 &minus; <i>i</i>"

    def test_alt_fallback(self):
        """Rings without a symbol render as usual"""
        assert self.a_int.to_string_alt() == str(self.a_int)
        assert self.a_int.to_tex_string_alt() == self.a_int.to_tex_string()


class TestUnits(QuadIntTests):
    """Tests for the unit helpers used by gcd"""

    def test_primary_sector(self):
        """Exactly one associate lands in the primary sector"""
        for ring in (self.gauss, self.eisenstein, self.r_m7):
            for x in small_elements(ring, 3):
                if x:
                    associates = {place_in_primary_sector(x * u) for u in units(ring)}
                    assert len(associates) == 1
