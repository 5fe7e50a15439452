import dataclasses

import pytest

from quadint import FormatOptions, QuadraticRing

BLACKBOARD = FormatOptions(prefer_blackboard_bold=True)


class TestInit:
    """Tests for QuadraticRing construction"""

    def test_kind(self):
        """Imaginary and real rings"""
        assert QuadraticRing(-5).kind == "imaginary"
        assert QuadraticRing(2).kind == "real"
        assert not QuadraticRing(-5).is_purely_real
        assert QuadraticRing(2).is_purely_real

    def test_half_integers(self):
        """Only d = 1 (mod 4) has half-integers"""
        assert QuadraticRing(-3).has_half_integers
        assert QuadraticRing(-7).has_half_integers
        assert QuadraticRing(5).has_half_integers
        assert not QuadraticRing(-1).has_half_integers
        assert not QuadraticRing(-5).has_half_integers
        assert not QuadraticRing(2).has_half_integers

    def test_invalid(self):
        """0, 1 and non-squarefree radicands are rejected"""
        for d in (0, 1, 4, -4, 12, -18):
            with pytest.raises(ValueError):
                QuadraticRing(d)

        with pytest.raises(TypeError):
            QuadraticRing(2.0)

    def test_factories(self):
        """imaginary() and real() check the sign"""
        assert QuadraticRing.imaginary(-5) == QuadraticRing(-5)
        assert QuadraticRing.real(5) == QuadraticRing(5)
        with pytest.raises(ValueError):
            QuadraticRing.imaginary(5)
        with pytest.raises(ValueError):
            QuadraticRing.real(-1)

    def test_eq(self):
        """Rings are equal and hash equal by radicand"""
        assert QuadraticRing(-5) == QuadraticRing(-5)
        assert QuadraticRing(-5) != QuadraticRing(5)
        assert len({QuadraticRing(-5), QuadraticRing(-5), QuadraticRing(5)}) == 2

    def test_frozen(self):
        """Rings are immutable"""
        with pytest.raises(dataclasses.FrozenInstanceError):
            QuadraticRing(2).radicand = 3


class TestProperties:
    """Tests for the derived properties"""

    def test_discriminant(self):
        """d when d = 1 (mod 4), 4d otherwise"""
        assert QuadraticRing(-1).discriminant == -4
        assert QuadraticRing(-3).discriminant == -3
        assert QuadraticRing(2).discriminant == 8
        assert QuadraticRing(5).discriminant == 5

    def test_sqrt(self):
        """Numeric square roots"""
        assert QuadraticRing(2).rad_sqrt == pytest.approx(2 ** 0.5)
        assert QuadraticRing(-2).abs_rad_sqrt == pytest.approx(2 ** 0.5)
        assert QuadraticRing(-2).abs_radicand == 2
        with pytest.raises(ValueError):
            QuadraticRing(-2).rad_sqrt

    def test_norm_euclidean(self):
        """Membership in the norm-Euclidean list"""
        assert QuadraticRing(-1).is_norm_euclidean
        assert QuadraticRing(73).is_norm_euclidean
        assert not QuadraticRing(-5).is_norm_euclidean
        assert not QuadraticRing(-19).is_norm_euclidean

    def test_max_degree(self):
        """Quadratic rings hold degree 2"""
        assert QuadraticRing.max_algebraic_degree == 2


class TestStrings:
    """Tests for the ring renderings"""

    def test_str(self):
        """Plain strings"""
        assert str(QuadraticRing(-1)) == "Z[i]"
        assert str(QuadraticRing(-3)) == "Z[ω]"
        assert str(QuadraticRing(5)) == "Z[φ]"
        assert str(QuadraticRing(-7)) == "O_(Q(√-7))"
        assert str(QuadraticRing(13)) == "O_(Q(√13))"
        assert str(QuadraticRing(-5)) == "Z[√-5]"

    def test_ascii(self):
        """ASCII strings"""
        assert QuadraticRing(-3).to_ascii_string() == "Z[omega]"
        assert QuadraticRing(5).to_ascii_string() == "Z[phi]"
        assert QuadraticRing(-7).to_ascii_string() == "O_(Q(sqrt(-7)))"
        assert QuadraticRing(-5).to_ascii_string() == "Z[sqrt(-5)]"

    def test_tex(self):
        """TeX strings, with and without blackboard bold"""
        assert QuadraticRing(-5).to_tex_string() == "\\mathbf Z[\\sqrt{-5}]"
        assert QuadraticRing(-5).to_tex_string(BLACKBOARD) == "\\mathbb Z[\\sqrt{-5}]"
        assert QuadraticRing(-7).to_tex_string() == "\\mathcal O_{\\mathbf Q(\\sqrt{-7})}"
        assert QuadraticRing(-1).to_tex_string() == "\\mathbf Z[i]"
        assert QuadraticRing(-3).to_tex_string(BLACKBOARD) == "\\mathbb Z[\\omega]"

    def test_html(self):
        """HTML strings, with and without blackboard bold"""
        assert QuadraticRing(-5).to_html_string() == "<b>Z</b>[&radic;&minus;5]"
        assert QuadraticRing(-5).to_html_string(BLACKBOARD) == "&#x2124;[&radic;&minus;5]"
        assert QuadraticRing(13).to_html_string() == "<i>O</i><sub><b>Q</b>(&radic;(13))</sub>"
        assert QuadraticRing(13).to_html_string(BLACKBOARD) == "<i>O</i><sub>&#x211A;(&radic;(13))</sub>"
        assert QuadraticRing(-1).to_html_string() == "<b>Z</b>[<i>i</i>]"

    def test_filename(self):
        """Filename labels only use letters and digits"""
        expected = {-1: "ZI", -3: "ZW", 5: "ZPHI", -5: "ZI5", -7: "OQI7", 13: "OQ13", 2: "Z2"}
        for d, label in expected.items():
            assert QuadraticRing(d).to_filename_string() == label
            assert label.isalnum()

    def test_repr(self):
        """repr only shows the radicand"""
        assert repr(QuadraticRing(-5)) == "QuadraticRing(radicand=-5)"
