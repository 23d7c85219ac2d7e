"""Paragraph layout values: spacing, indentation and tab stops.

ParagraphStyle is immutable; every adjustment returns a new value. This is
what makes the list renderer's capture/restore pass safe: a captured style
can be shifted and re-applied without affecting the range it came from.

Example:
    >>> style = ParagraphStyle(head_indent=10, tab_stops=(TextTab(10),))
    >>> shifted = style.indented_by(16)
    >>> shifted.head_indent, shifted.tab_stops[0].location
    (26, 26)

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class TextAlignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class LineBreakMode(Enum):
    """How lines that overflow the layout width are broken."""

    WORD_WRAPPING = "word_wrapping"
    CHAR_WRAPPING = "char_wrapping"
    CLIPPING = "clipping"
    TRUNCATING_HEAD = "truncating_head"
    TRUNCATING_TAIL = "truncating_tail"
    TRUNCATING_MIDDLE = "truncating_middle"


@dataclass(frozen=True, slots=True)
class TextTab:
    """A tab stop at ``location`` points from the leading margin."""

    location: float
    alignment: TextAlignment = TextAlignment.LEFT


@dataclass(frozen=True, slots=True)
class ParagraphStyle:
    """Immutable paragraph style.

    Attributes:
        paragraph_spacing_before: Space above the paragraph
        paragraph_spacing: Space below the paragraph
        head_indent: Leading indent of every line after the first
        first_line_head_indent: Leading indent of the first line
        tab_stops: Tab stops, in order
        line_break_mode: Overflow behaviour

    """

    paragraph_spacing_before: float = 0
    paragraph_spacing: float = 0
    head_indent: float = 0
    first_line_head_indent: float = 0
    tab_stops: tuple[TextTab, ...] = ()
    line_break_mode: LineBreakMode = LineBreakMode.WORD_WRAPPING

    def with_spacing(self, top: float, bottom: float) -> ParagraphStyle:
        return replace(self, paragraph_spacing_before=top, paragraph_spacing=bottom)

    def indented_by(self, points: float) -> ParagraphStyle:
        """Shift both indents and every tab stop by ``points``.

        Tab alignments are preserved.
        """
        return replace(
            self,
            first_line_head_indent=self.first_line_head_indent + points,
            head_indent=self.head_indent + points,
            tab_stops=tuple(
                TextTab(tab.location + points, tab.alignment) for tab in self.tab_stops
            ),
        )

    def with_tab_stop_offset(self, offset: float) -> ParagraphStyle:
        """Replace the tab stops with one left tab at ``offset`` and hang to it."""
        return replace(self, head_indent=offset, tab_stops=(TextTab(offset),))

    def with_line_break_mode(self, mode: LineBreakMode) -> ParagraphStyle:
        return replace(self, line_break_mode=mode)


__all__ = ["LineBreakMode", "ParagraphStyle", "TextAlignment", "TextTab"]
