from dataclasses import dataclass, field
from math import sqrt
from typing import ClassVar, Literal

from quadint.config import DEFAULT_FORMAT, FormatOptions
from quadint.utils import is_squarefree

NORM_EUCLIDEAN_QUADRATIC_RINGS_D = frozenset({-11, -7, -3, -2, -1, 2, 3, 5, 6, 7, 11, 13, 17, 19, 21, 29, 33, 37, 41,
                                              57, 73})


@dataclass(frozen=True)
class QuadraticRing:
    """
    The ring of algebraic integers of Q(sqrt(d)) for a squarefree d != 0, 1.

    A single type covers both kinds of ring; `kind` tells them apart:
      - "imaginary" for d < 0
      - "real" for d > 0

    When d = 1 (mod 4) the ring also holds the "half-integers" (a + b*sqrt(d))/2 with a, b odd.
    """
    radicand: int
    kind: Literal["imaginary", "real"] = field(init=False, repr=False, compare=False)
    has_half_integers: bool = field(init=False, repr=False, compare=False)

    max_algebraic_degree: ClassVar[int] = 2

    def __post_init__(self) -> None:
        d = self.radicand
        if isinstance(d, bool) or not isinstance(d, int):
            raise TypeError(f"Radicand must be an int, got {type(d).__name__}")
        if d == 0:
            raise ValueError("Radicand must not be 0")
        if d == 1:
            raise ValueError("Radicand 1 does not give a quadratic ring")
        if not is_squarefree(d):
            raise ValueError(f"Radicand {d} is not squarefree")

        # frozen dataclass; the derived fields are set once here
        object.__setattr__(self, "kind", "imaginary" if d < 0 else "real")
        object.__setattr__(self, "has_half_integers", d % 4 == 1)

    # region constructors
    @classmethod
    def imaginary(cls, d: int) -> "QuadraticRing":
        """Build an imaginary quadratic ring, rejecting d > 0."""
        if d >= 0:
            raise ValueError(f"Imaginary quadratic rings need a negative radicand, got {d}")
        return cls(d)

    @classmethod
    def real(cls, d: int) -> "QuadraticRing":
        """Build a real quadratic ring, rejecting d < 0."""
        if d <= 0:
            raise ValueError(f"Real quadratic rings need a positive radicand, got {d}")
        return cls(d)
    # endregion

    @property
    def is_purely_real(self) -> bool:
        return self.radicand > 0

    @property
    def abs_radicand(self) -> int:
        return abs(self.radicand)

    @property
    def discriminant(self) -> int:
        """Field discriminant: d if d = 1 (mod 4), otherwise 4d."""
        return self.radicand if self.has_half_integers else 4 * self.radicand

    @property
    def rad_sqrt(self) -> float:
        """
        Numeric square root of the radicand.

        Raises:
            ValueError: For imaginary rings; use abs_rad_sqrt there.
        """
        if self.radicand < 0:
            raise ValueError(f"{self} has a negative radicand; use abs_rad_sqrt")
        return sqrt(self.radicand)

    @property
    def abs_rad_sqrt(self) -> float:
        return sqrt(self.abs_radicand)

    @property
    def is_norm_euclidean(self) -> bool:
        """True iff the absolute norm is a Euclidean function for this ring."""
        return self.radicand in NORM_EUCLIDEAN_QUADRATIC_RINGS_D

    # region presentation
    def __str__(self) -> str:
        d = self.radicand
        if d == -1:
            return "Z[i]"
        if d == -3:
            return "Z[ω]"
        if d == 5:
            return "Z[φ]"
        if self.has_half_integers:
            return f"O_(Q(√{d}))"
        return f"Z[√{d}]"

    def to_ascii_string(self) -> str:
        d = self.radicand
        if d == -1:
            return "Z[i]"
        if d == -3:
            return "Z[omega]"
        if d == 5:
            return "Z[phi]"
        if self.has_half_integers:
            return f"O_(Q(sqrt({d})))"
        return f"Z[sqrt({d})]"

    def to_tex_string(self, options: FormatOptions = DEFAULT_FORMAT) -> str:
        """
        TeX rendering, e.g. "\\mathbf Z[\\sqrt{-5}]" or "\\mathcal O_{\\mathbf Q(\\sqrt{-7})}".

        Args:
            options: With prefer_blackboard_bold, \\mathbb replaces \\mathbf.
        """
        bold = "\\mathbb" if options.prefer_blackboard_bold else "\\mathbf"
        d = self.radicand
        if d == -1:
            return f"{bold} Z[i]"
        if d == -3:
            return f"{bold} Z[\\omega]"
        if d == 5:
            return f"{bold} Z[\\phi]"
        if self.has_half_integers:
            return f"\\mathcal O_{{{bold} Q(\\sqrt{{{d}}})}}"
        return f"{bold} Z[\\sqrt{{{d}}}]"

    def to_html_string(self, options: FormatOptions = DEFAULT_FORMAT) -> str:
        """
        HTML rendering, e.g. "<b>Z</b>[&radic;&minus;5]".

        Args:
            options: With prefer_blackboard_bold, the double-struck characters replace bold letters.
        """
        if options.prefer_blackboard_bold:
            z, q = "&#x2124;", "&#x211A;"
        else:
            z, q = "<b>Z</b>", "<b>Q</b>"

        d = self.radicand
        if d == -1:
            return f"{z}[<i>i</i>]"
        if d == -3:
            return f"{z}[&omega;]"
        if d == 5:
            return f"{z}[&phi;]"

        rad = f"&minus;{-d}" if d < 0 else str(d)
        if self.has_half_integers:
            return f"<i>O</i><sub>{q}(&radic;({rad}))</sub>"
        return f"{z}[&radic;{rad}]"

    def to_filename_string(self) -> str:
        """A label with only letters and digits, e.g. "ZI5" for Z[sqrt(-5)] or "OQ13" for O_(Q(sqrt(13)))."""
        d = self.radicand
        if d == -1:
            return "ZI"
        if d == -3:
            return "ZW"
        if d == 5:
            return "ZPHI"

        prefix = "OQ" if self.has_half_integers else "Z"
        if d < 0:
            prefix += "I"
        return f"{prefix}{abs(d)}"
    # endregion
