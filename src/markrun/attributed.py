"""Attributed text buffer: a string plus typographic attribute runs.

AttributedString is the artifact the renderer produces. It stores the text
once and a list of runs, each covering a span of characters with one
attribute dictionary. Adjacent runs with equal attributes are always
coalesced, so enumeration reports maximal ranges.

Attribute keys form one enum-keyed scheme (AttributeKey). Values are
immutable (MarkdownKind, Font, Color, ParagraphStyle, str), which lets
runs be compared and merged by equality.

Markdown kinds are additive: ``add_attributes`` unions an incoming
``MARKDOWN`` value into whatever the range already carries, while every
other key is overwritten. ``set_attributes`` overwrites all keys, including
the kind.

Example:
    >>> text = AttributedString("hello ", {AttributeKey.MARKDOWN: MarkdownKind.NONE})
    >>> text.append(AttributedString("world", {AttributeKey.MARKDOWN: MarkdownKind.BOLD}))
    >>> text.ranges_of(MarkdownKind.BOLD)
    [TextRange(location=6, length=5)]

Thread Safety:
Instances are mutable and not synchronized. Each render owns its buffers
until they are handed to the parent.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias

from markrun.fonts import Font, FontMetrics
from markrun.kinds import MarkdownKind
from markrun.paragraph import LineBreakMode


class AttributeKey(StrEnum):
    """Keys of the attribute dictionaries stored on runs."""

    MARKDOWN = "markdown"
    FONT = "font"
    FOREGROUND_COLOR = "foreground_color"
    PARAGRAPH_STYLE = "paragraph_style"
    LINK = "link"


Attributes: TypeAlias = Mapping[AttributeKey, Any]


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open character range ``[location, location + length)``."""

    location: int
    length: int

    @property
    def end(self) -> int:
        return self.location + self.length

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.location <= index < self.end


def unify_ranges(ranges: Iterable[TextRange]) -> list[TextRange]:
    """Merge overlapping and adjacent ranges, returned in document order.

    Example:
        >>> unify_ranges([TextRange(0, 2), TextRange(2, 3), TextRange(7, 1)])
        [TextRange(location=0, length=5), TextRange(location=7, length=1)]

    """
    unified: list[TextRange] = []
    for current in sorted(ranges, key=lambda r: (r.location, r.length)):
        if unified and current.location <= unified[-1].end:
            last = unified[-1]
            end = max(last.end, current.end)
            unified[-1] = TextRange(last.location, end - last.location)
        else:
            unified.append(current)
    return unified


@dataclass(slots=True)
class _Run:
    length: int
    attributes: dict[AttributeKey, Any]


class AttributedString:
    """Mutable text with per-range attributes.

    Args:
        text: Initial text
        attributes: Attributes applied to the whole initial text

    """

    __slots__ = ("_text", "_runs")

    def __init__(self, text: str = "", attributes: Attributes | None = None) -> None:
        self._text = text
        self._runs: list[_Run] = [_Run(len(text), dict(attributes or {}))] if text else []

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def string(self) -> str:
        """The plain text content."""
        return self._text

    @property
    def whole_range(self) -> TextRange:
        return TextRange(0, len(self._text))

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributedString):
            return NotImplemented
        return self._text == other._text and self._runs == other._runs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AttributedString({self._text!r}, runs={len(self._runs)})"

    def copy(self) -> AttributedString:
        duplicate = AttributedString()
        duplicate._text = self._text
        duplicate._runs = [_Run(run.length, dict(run.attributes)) for run in self._runs]
        return duplicate

    def runs(self) -> Iterator[tuple[str, dict[AttributeKey, Any]]]:
        """Yield ``(substring, attributes)`` for each run, in order."""
        position = 0
        for run in self._runs:
            yield self._text[position : position + run.length], dict(run.attributes)
            position += run.length

    def width(self, metrics: FontMetrics, default_font: Font) -> float:
        """Measure the rendered width of the whole string.

        Runs without a font are measured in ``default_font``.
        """
        return sum(
            metrics.width(text, attributes.get(AttributeKey.FONT, default_font))
            for text, attributes in self.runs()
        )

    # =========================================================================
    # Text mutation
    # =========================================================================

    def insert(self, other: AttributedString | str, at: int, attributes: Attributes | None = None) -> None:
        """Insert ``other`` before the character at index ``at``.

        Plain strings are wrapped with ``attributes`` (or no attributes).
        """
        if not 0 <= at <= len(self._text):
            raise IndexError(f"Insert position {at} out of bounds for length {len(self._text)}")
        if isinstance(other, str):
            other = AttributedString(other, attributes)
        if not other._text:
            return
        index = self._split(at)
        self._text = self._text[:at] + other._text + self._text[at:]
        self._runs[index:index] = [_Run(run.length, dict(run.attributes)) for run in other._runs]
        self._normalize()

    def append(self, other: AttributedString | str, attributes: Attributes | None = None) -> None:
        self.insert(other, len(self._text), attributes)

    def prepend_break(self) -> None:
        self.insert("\n", 0)

    def append_break(self, attributes: Attributes | None = None) -> None:
        self.append("\n", attributes)

    # =========================================================================
    # Attribute queries
    # =========================================================================

    def enumerate_attributes(
        self, in_range: TextRange | None = None
    ) -> Iterator[tuple[dict[AttributeKey, Any], TextRange]]:
        """Yield ``(attributes, range)`` for each run intersecting the range."""
        bounds = self._resolve(in_range)
        position = 0
        for run in self._runs:
            start = max(position, bounds.location)
            end = min(position + run.length, bounds.end)
            if start < end:
                yield dict(run.attributes), TextRange(start, end - start)
            position += run.length

    def enumerate_attribute(
        self, key: AttributeKey, in_range: TextRange | None = None
    ) -> Iterator[tuple[Any, TextRange]]:
        """Yield ``(value, range)`` for maximal spans sharing one value of ``key``.

        Spans where the key is absent are reported with value None.
        """
        current: Any = None
        span: TextRange | None = None
        for attributes, run_range in self.enumerate_attributes(in_range):
            value = attributes.get(key)
            if span is not None and value == current and type(value) is type(current):
                span = TextRange(span.location, span.length + run_range.length)
                continue
            if span is not None:
                yield current, span
            current, span = value, run_range
        if span is not None:
            yield current, span

    def attributes_at(self, index: int) -> tuple[dict[AttributeKey, Any], TextRange]:
        """Return the attributes at ``index`` and the run they cover."""
        self._check_index(index)
        for attributes, run_range in self.enumerate_attributes():
            if index in run_range:
                return attributes, run_range
        raise IndexError(index)  # pragma: no cover

    def attribute(self, key: AttributeKey, at: int) -> tuple[Any, TextRange]:
        """Return the value of ``key`` at ``at`` and its effective range."""
        self._check_index(at)
        for value, span in self.enumerate_attribute(key):
            if at in span:
                return value, span
        raise IndexError(at)  # pragma: no cover

    def attribute_ranges(self, key: AttributeKey, in_range: TextRange | None = None) -> list[tuple[Any, TextRange]]:
        """Return ``(value, range)`` pairs where ``key`` is present."""
        return [(value, span) for value, span in self.enumerate_attribute(key, in_range) if value is not None]

    def ranges_of(self, kind: MarkdownKind, in_range: TextRange | None = None) -> list[TextRange]:
        """Ranges whose markdown kind is exactly ``kind``."""
        result = [
            span
            for value, span in self.enumerate_attribute(AttributeKey.MARKDOWN, in_range)
            if _kind(value) == kind
        ]
        return unify_ranges(result)

    def ranges_containing(self, kind: MarkdownKind, in_range: TextRange | None = None) -> list[TextRange]:
        """Ranges whose markdown kind includes every flag of ``kind``.

        ``NONE`` is contained in everything, so querying it only matches
        untagged ranges.
        """
        result: list[TextRange] = []
        for value, span in self.enumerate_attribute(AttributeKey.MARKDOWN, in_range):
            current = _kind(value)
            if kind == MarkdownKind.NONE:
                if current == MarkdownKind.NONE:
                    result.append(span)
            elif current & kind == kind:
                result.append(span)
        return unify_ranges(result)

    # =========================================================================
    # Attribute mutation
    # =========================================================================

    def add_attributes(self, attributes: Attributes | None, in_range: TextRange | None = None) -> None:
        """Apply a bundle, unioning markdown kinds and overwriting other keys.

        A None bundle is a no-op.
        """
        if attributes is None:
            return

        def update(run_attributes: dict[AttributeKey, Any]) -> None:
            for key, value in attributes.items():
                if key is AttributeKey.MARKDOWN:
                    run_attributes[key] = _kind(run_attributes.get(key)) | value
                else:
                    run_attributes[key] = value

        self._update(in_range, update)

    def set_attributes(self, attributes: Attributes, in_range: TextRange | None = None) -> None:
        """Overwrite every key of ``attributes``, markdown kind included."""
        self._update(in_range, lambda run_attributes: run_attributes.update(attributes))

    def set_attribute(self, key: AttributeKey, value: Any, in_range: TextRange | None = None) -> None:
        self.set_attributes({key: value}, in_range)

    def remove_attribute(self, key: AttributeKey, in_range: TextRange | None = None) -> None:
        self._update(in_range, lambda run_attributes: run_attributes.pop(key, None))

    def map_attribute(
        self,
        key: AttributeKey,
        transform: Callable[[Any], Any],
        in_range: TextRange | None = None,
        default: Any = None,
    ) -> None:
        """Replace each value of ``key`` in the range with ``transform(value)``.

        Spans without the key use ``default``; they are skipped when default
        is None. Values are snapshotted before any write.
        """
        snapshot = [
            (default if value is None else value, span)
            for value, span in self.enumerate_attribute(key, in_range)
        ]
        for value, span in snapshot:
            if value is not None:
                self.set_attribute(key, transform(value), span)

    # -- Font transforms -------------------------------------------------------

    def italicize(self, in_range: TextRange | None = None) -> None:
        """Add the italic trait to every font, keeping existing traits."""
        self.map_attribute(AttributeKey.FONT, lambda font: font.italic, in_range)

    def bolden(self, size: float | None = None, in_range: TextRange | None = None) -> None:
        """Add the bold trait to every font, keeping existing traits.

        Light weights are stripped first. With ``size``, fonts are also
        resized, discarding their previous size.
        """

        def transform(font: Font) -> Font:
            font = font.without_light_weight
            if size is not None:
                font = font.with_size(size)
            return font.bold

        self.map_attribute(AttributeKey.FONT, transform, in_range)

    def add_markdown_kind(self, kind: MarkdownKind, in_range: TextRange | None = None) -> None:
        """Union ``kind`` into every markdown kind in the range."""
        self.map_attribute(AttributeKey.MARKDOWN, lambda current: current | kind, in_range, MarkdownKind.NONE)

    def truncate_paragraph_tails(self) -> None:
        """Switch every paragraph to truncating-tail line breaks.

        Used to show quoted messages inside a frame of limited size.
        """
        self.map_attribute(
            AttributeKey.PARAGRAPH_STYLE,
            lambda style: style.with_line_break_mode(LineBreakMode.TRUNCATING_TAIL),
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _resolve(self, in_range: TextRange | None) -> TextRange:
        if in_range is None:
            return self.whole_range
        if in_range.location < 0 or in_range.length < 0 or in_range.end > len(self._text):
            raise IndexError(f"Range {in_range} out of bounds for length {len(self._text)}")
        return in_range

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._text):
            raise IndexError(f"Index {index} out of bounds for length {len(self._text)}")

    def _split(self, at: int) -> int:
        """Ensure a run boundary at ``at``; return the index of the run starting there."""
        position = 0
        for index, run in enumerate(self._runs):
            if position == at:
                return index
            end = position + run.length
            if at < end:
                head = at - position
                self._runs[index : index + 1] = [
                    _Run(head, dict(run.attributes)),
                    _Run(run.length - head, dict(run.attributes)),
                ]
                return index + 1
            position = end
        return len(self._runs)

    def _update(
        self,
        in_range: TextRange | None,
        update: Callable[[dict[AttributeKey, Any]], object],
    ) -> None:
        bounds = self._resolve(in_range)
        if bounds.length == 0:
            return
        start = self._split(bounds.location)
        end = self._split(bounds.end)
        for run in self._runs[start:end]:
            update(run.attributes)
        self._normalize()

    def _normalize(self) -> None:
        merged: list[_Run] = []
        for run in self._runs:
            if run.length == 0:
                continue
            if merged and merged[-1].attributes == run.attributes:
                merged[-1].length += run.length
            else:
                merged.append(run)
        self._runs = merged


def _kind(value: Any) -> MarkdownKind:
    return MarkdownKind.NONE if value is None else MarkdownKind(value)


def join(parts: Iterable[AttributedString | None]) -> AttributedString:
    """Concatenate the present parts in order, skipping None.

    The empty AttributedString is the identity, so joining nothing yields
    an empty buffer.
    """
    result = AttributedString()
    for part in parts:
        if part is not None:
            result.append(part)
    return result


__all__ = [
    "AttributeKey",
    "AttributedString",
    "Attributes",
    "TextRange",
    "join",
    "unify_ranges",
]
