"""Event rendering – plain tab-delimited lines or feature records."""

from __future__ import annotations

import sys
from typing import Callable, Dict, Iterable, Optional, TextIO

from deltadiff.events import DiffEvent, EventType

PLAIN = "plain"
AMOS = "amos"
STYLES = (PLAIN, AMOS)


def format_plain(event: DiffEvent) -> str:
    """Render one event as a plain line (no trailing newline)."""
    kind = event.kind
    if kind is EventType.NEW_SEQUENCE:
        return f">{event.seq}"
    if event.is_indel:
        return (
            f"{kind.value} {event.start}\t{event.end}\t"
            f"{event.gap_sweep}\t{event.gap_partner}\t{event.delta}"
        )
    line = f"{kind.value} {event.start}\t{event.end}\t{event.length}"
    if kind is EventType.SEQ:
        line += f"\t{event.partner}"
    return line


def format_feature(event: DiffEvent) -> Optional[str]:
    """Render one event as a ``{FEA ... }`` record.

    Sequence headers have no feature form and return ``None``.
    """
    if event.kind is EventType.NEW_SEQUENCE:
        return None
    return (
        "{FEA\n"
        "typ:A\n"
        f"clr:{event.start},{event.end}\n"
        f"com:{format_plain(event)}\n"
        f"src:{event.seq},CTG\n"
        "}"
    )


FORMATTERS: Dict[str, Callable[[DiffEvent], Optional[str]]] = {
    PLAIN: format_plain,
    AMOS: format_feature,
}


def write_events(
    events: Iterable[DiffEvent],
    handle: Optional[TextIO] = None,
    style: str = PLAIN,
) -> int:
    """Write *events* to *handle* (stdout by default); return lines written."""
    if style not in FORMATTERS:
        raise ValueError(f"Unknown output style {style!r}; expected one of {STYLES}")
    fmt = FORMATTERS[style]
    fh = handle if handle is not None else sys.stdout

    n = 0
    for event in events:
        text = fmt(event)
        if text is None:
            continue
        fh.write(text + "\n")
        n += 1
    return n
