"""Markdown kind flags for tagging styled ranges.

Every range of a rendered AttributedString carries a MarkdownKind under
``AttributeKey.MARKDOWN`` identifying which syntactic constructs produced it.
Flags combine with ``|``, so a range can be bold, italic and inside an H1 at
the same time.

Example:
    >>> kind = MarkdownKind.BOLD | MarkdownKind.ITALIC
    >>> MarkdownKind.BOLD in kind
    True
    >>> MarkdownKind.NONE in kind
    True

"""

from enum import IntFlag


class MarkdownKind(IntFlag):
    """Bit-set over the closed vocabulary of markdown constructs.

    ``NONE`` is the identity element: it is contained in every set,
    including itself.

    """

    NONE = 0
    H1 = 1 << 0
    H2 = 1 << 1
    H3 = 1 << 2
    BOLD = 1 << 3
    ITALIC = 1 << 4
    CODE = 1 << 5
    O_LIST = 1 << 6
    U_LIST = 1 << 7
    QUOTE = 1 << 8
    LINK = 1 << 9

    # Composite aliases
    HEADER = H1 | H2 | H3
    LIST = O_LIST | U_LIST


HEADER_KINDS: dict[int, MarkdownKind] = {
    1: MarkdownKind.H1,
    2: MarkdownKind.H2,
    3: MarkdownKind.H3,
}


def header_kind(level: int) -> MarkdownKind:
    """Map a heading level to its flag. Levels beyond 3 style as H3."""
    return HEADER_KINDS.get(level, MarkdownKind.H3)


__all__ = ["HEADER_KINDS", "MarkdownKind", "header_kind"]
