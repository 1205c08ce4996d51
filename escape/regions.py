"""escape.regions
=================

Parsing of textual region descriptions into :class:`~escape.types.Region`
records. Each description holds four whitespace-separated integers naming two
opposite corners of a rectangle, in either order. Blank descriptions are
skipped so that callers may pass through sparse input lists unchanged.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .types import Region, RegionKind


class RegionParseError(ValueError):
    """Raised when a region description is not four integers."""


def parse_region(text: str, kind: RegionKind) -> Region:
    """Parse ``"x1 y1 x2 y2"`` into a normalised :class:`Region`."""

    tokens = text.split()
    if len(tokens) != 4:
        raise RegionParseError(f"Expected 4 integers in region description, got {len(tokens)}: {text!r}")
    try:
        x1, y1, x2, y2 = (int(token) for token in tokens)
    except ValueError as exc:
        raise RegionParseError(f"Non-integer coordinate in region description {text!r}") from exc
    return Region.from_corners(x1, y1, x2, y2, kind)


def parse_regions(descriptions: Optional[Iterable[str]], kind: RegionKind) -> List[Region]:
    """Parse every non-blank entry of ``descriptions``; ``None`` yields ``[]``."""

    if not descriptions:
        return []
    regions: List[Region] = []
    for text in descriptions:
        if not text or not text.strip():
            continue
        regions.append(parse_region(text, kind))
    return regions


def build_regions(
    harmful: Optional[Iterable[str]],
    deadly: Optional[Iterable[str]],
) -> Tuple[List[Region], List[Region]]:
    """Return ``(penalizing, blocking)`` region lists."""

    return parse_regions(harmful, RegionKind.HARMFUL), parse_regions(deadly, RegionKind.DEADLY)


__all__ = ["RegionParseError", "parse_region", "parse_regions", "build_regions"]
