"""Font, color and text measurement values.

Fonts are immutable descriptors. Style traits (bold, italic, monospace) are
a flag set, so adding one trait keeps every other trait and the point size:

    >>> font = Font("System", 16, FontTraits.ITALIC)
    >>> font.bold.is_italic, font.bold.is_bold, font.bold.size
    (True, True, 16)

Text measurement is a capability (FontMetrics) injected through the render
style. EstimatedFontMetrics is the default: it approximates advance widths
from per-character factors, which is enough for tab-stop geometry when no
real font rasterizer is available.

Thread Safety:
Font and Color are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntFlag
from typing import Protocol


class FontTraits(IntFlag):
    """Symbolic font traits."""

    NONE = 0
    BOLD = 1 << 0
    ITALIC = 1 << 1
    MONOSPACE = 1 << 2


class FontWeight(Enum):
    """Weight variants that are not expressed as traits.

    Light and bold are mutually exclusive: bolding a light font first
    strips the light weight.

    """

    LIGHT = "light"
    REGULAR = "regular"


@dataclass(frozen=True, slots=True)
class Font:
    """Immutable font descriptor.

    Attributes:
        family: Font family name (e.g. "System", "Menlo")
        size: Point size
        traits: Symbolic traits
        weight: Light or regular weight

    """

    family: str
    size: float
    traits: FontTraits = FontTraits.NONE
    weight: FontWeight = FontWeight.REGULAR

    # -- Trait querying --------------------------------------------------------

    @property
    def is_bold(self) -> bool:
        return FontTraits.BOLD in self.traits

    @property
    def is_italic(self) -> bool:
        return FontTraits.ITALIC in self.traits

    @property
    def is_monospace(self) -> bool:
        return FontTraits.MONOSPACE in self.traits

    @property
    def is_light(self) -> bool:
        return self.weight is FontWeight.LIGHT

    # -- Trait transforms ------------------------------------------------------

    @property
    def bold(self) -> Font:
        """Copy with the bold trait added."""
        return self.with_traits(FontTraits.BOLD)

    @property
    def italic(self) -> Font:
        """Copy with the italic trait added."""
        return self.with_traits(FontTraits.ITALIC)

    @property
    def without_light_weight(self) -> Font:
        """Copy with regular weight, keeping traits and size."""
        if not self.is_light:
            return self
        return replace(self, weight=FontWeight.REGULAR)

    def with_traits(self, traits: FontTraits) -> Font:
        """Return a copy with ``traits`` unioned into the existing ones."""
        if traits in self.traits:
            return self
        return replace(self, traits=self.traits | traits)

    def with_size(self, size: float) -> Font:
        return replace(self, size=size)

    def with_weight(self, weight: FontWeight) -> Font:
        return replace(self, weight=weight)


@dataclass(frozen=True, slots=True)
class Color:
    """RGBA color with components in 0.0-1.0."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#rrggbb`` or ``#rrggbbaa``.

        Raises:
            ValueError: If the string is not a 6 or 8 digit hex color

        """
        digits = value.removeprefix("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        components = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
        return cls(*components)


BLACK = Color(0.0, 0.0, 0.0)
DARK_GRAY = Color(1 / 3, 1 / 3, 1 / 3)
GRAY = Color(0.5, 0.5, 0.5)


class FontMetrics(Protocol):
    """Capability that measures rendered text.

    Implementations must be side-effect free; they are called during
    rendering and may be shared across threads.

    """

    def width(self, text: str, font: Font) -> float:
        """Return the advance width of ``text`` set in ``font``, in points."""
        ...


# Advance widths as a fraction of the point size, for proportional fonts
_NARROW = frozenset(".,:;'!|`ijlIft ")
_WIDE = frozenset("mwMW@%")
_DIGIT_FACTOR = 0.556
_NARROW_FACTOR = 0.278
_WIDE_FACTOR = 0.833
_UPPER_FACTOR = 0.667
_DEFAULT_FACTOR = 0.5
_BULLET_FACTOR = 0.35
_MONOSPACE_FACTOR = 0.6
_BOLD_SCALE = 1.05


class EstimatedFontMetrics:
    """Approximate advance widths from per-character factors.

    Digits share one width (tabular figures), so ordered-list markers with
    the same number of digits measure the same.

    """

    __slots__ = ()

    def width(self, text: str, font: Font) -> float:
        if not text:
            return 0.0
        if font.is_monospace:
            total = len(text) * _MONOSPACE_FACTOR
        else:
            total = sum(self._factor(char) for char in text)
        if font.is_bold:
            total *= _BOLD_SCALE
        return total * font.size

    @staticmethod
    def _factor(char: str) -> float:
        if char.isdigit():
            return _DIGIT_FACTOR
        if char in _NARROW:
            return _NARROW_FACTOR
        if char in _WIDE:
            return _WIDE_FACTOR
        if char == "•":
            return _BULLET_FACTOR
        if char.isupper():
            return _UPPER_FACTOR
        return _DEFAULT_FACTOR


__all__ = [
    "BLACK",
    "Color",
    "DARK_GRAY",
    "EstimatedFontMetrics",
    "Font",
    "FontMetrics",
    "FontTraits",
    "FontWeight",
    "GRAY",
]
