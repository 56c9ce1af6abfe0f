"""Classified difference events emitted by the sweep."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional


class EventType(str, Enum):
    NEW_SEQUENCE = ">"
    GAP = "GAP"
    SEQ = "SEQ"  # jump to a different partner sequence
    JMP = "JMP"  # jump within the same partner chain
    INV = "INV"
    INS = "INS"
    DEL = "DEL"
    DUP = "DUP"


@dataclass(frozen=True)
class DiffEvent:
    """One break along a sequence.

    ``start`` and ``end`` are the flanking coordinates on the swept sequence:
    for breaks they are the last base before and the first base after the
    break, for ``DUP`` they are the duplicated interval itself.
    """

    seq: str
    kind: EventType
    start: int = 0
    end: int = 0
    length: int = 0
    partner: Optional[str] = None
    gap_sweep: Optional[int] = None
    gap_partner: Optional[int] = None

    @property
    def delta(self) -> Optional[int]:
        """Length difference of an indel (swept gap minus partner gap)."""
        if self.gap_sweep is None or self.gap_partner is None:
            return None
        return self.gap_sweep - self.gap_partner

    @property
    def is_indel(self) -> bool:
        return self.kind in (EventType.INS, EventType.DEL)

    @classmethod
    def new_sequence(cls, seq: str) -> "DiffEvent":
        return cls(seq, EventType.NEW_SEQUENCE)

    @classmethod
    def gap(cls, seq: str, start: int, end: int) -> "DiffEvent":
        return cls(seq, EventType.GAP, start, end, end - start - 1)

    @classmethod
    def seq_jump(cls, seq: str, partner: str, start: int, end: int) -> "DiffEvent":
        return cls(seq, EventType.SEQ, start, end, end - start - 1, partner=partner)

    @classmethod
    def chain_jump(cls, seq: str, start: int, end: int) -> "DiffEvent":
        return cls(seq, EventType.JMP, start, end, end - start - 1)

    @classmethod
    def inversion(cls, seq: str, start: int, end: int) -> "DiffEvent":
        return cls(seq, EventType.INV, start, end, end - start - 1)

    @classmethod
    def indel(cls, seq: str, start: int, end: int, gap_sweep: int, gap_partner: int) -> "DiffEvent":
        kind = EventType.INS if gap_sweep - gap_partner > 0 else EventType.DEL
        return cls(seq, kind, start, end, end - start - 1,
                   gap_sweep=gap_sweep, gap_partner=gap_partner)

    @classmethod
    def duplication(cls, seq: str, start: int, end: int) -> "DiffEvent":
        return cls(seq, EventType.DUP, start, end, end - start + 1)

    def to_dict(self) -> Dict:
        d = {
            "seq": self.seq,
            "type": self.kind.value,
            "start": self.start,
            "end": self.end,
            "length": self.length,
        }
        if self.partner is not None:
            d["partner"] = self.partner
        if self.is_indel:
            d["gap_sweep"] = self.gap_sweep
            d["gap_partner"] = self.gap_partner
            d["delta"] = self.delta
        return d


def count_events(events: Iterable[DiffEvent]) -> Dict[str, int]:
    """Count events per type, ignoring sequence headers."""
    counts = Counter(e.kind.value for e in events if e.kind is not EventType.NEW_SEQUENCE)
    return {t.value: counts.get(t.value, 0) for t in EventType if t is not EventType.NEW_SEQUENCE}
