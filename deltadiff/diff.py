"""Sweep engine – walks each sequence's chain and classifies every break.

A sequence is swept along its own axis ("sweep axis"); the other coordinate
space is the "partner axis".  Both directions run through the same code,
parametrised by an :class:`Axis` pair.
"""

from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence

from deltadiff.events import DiffEvent
from deltadiff.exceptions import ChainConsistencyError
from deltadiff.graph import DeltaGraph, Segment, SequenceNode
from deltadiff.log import get_logger

logger = get_logger("diff")

# Partner coordinate of the right boundary; never equals a real coordinate.
FAR = sys.maxsize


@dataclass(frozen=True)
class Axis:
    """Accessors for one coordinate space."""

    name: str
    lo: Callable[[Segment], int]
    hi: Callable[[Segment], int]
    in_chain: Callable[[Segment], bool]
    node_name: Callable[[Segment], str]

    def __repr__(self) -> str:
        return f"Axis({self.name!r})"


REF = Axis(
    "ref",
    lo=lambda s: s.lo_r,
    hi=lambda s: s.hi_r,
    in_chain=lambda s: s.is_rlis,
    node_name=lambda s: s.edge.ref.name,
)

QRY = Axis(
    "qry",
    lo=lambda s: s.lo_q,
    hi=lambda s: s.hi_q,
    in_chain=lambda s: s.is_qlis,
    node_name=lambda s: s.edge.qry.name,
)


def partner_of(axis: Axis) -> Axis:
    """Return the other coordinate space."""
    return QRY if axis is REF else REF


def boundaries(length: int, axis: Axis) -> tuple:
    """Return the (left, right) boundary segments for a sweep over *axis*.

    Both sit in both chains and belong to no relationship.  The left one is
    at 0 on every axis; the right one is at ``length + 1`` on the sweep axis
    and at :data:`FAR` on the partner axis.
    """
    left = Segment(0, 0, 0, 0, is_rlis=True, is_qlis=True)
    if axis is REF:
        right = Segment(length + 1, length + 1, FAR, FAR, is_rlis=True, is_qlis=True)
    else:
        right = Segment(FAR, FAR, length + 1, length + 1, is_rlis=True, is_qlis=True)
    return left, right


def assign_ranks(aligns: Sequence[Segment], partner: Axis) -> List[int]:
    """Rank the partner-chain members of *aligns* along the partner axis.

    Segments are grouped by partner sequence (boundaries first, then by
    name) and ordered by partner-axis start inside each group; remaining
    ties fall back to sweep-axis start, then position in *aligns*.  Members
    of the partner chain get consecutive ranks from 0, everything else -1.
    The result is indexed like *aligns*.
    """
    own = partner_of(partner)

    def key(i: int):
        s = aligns[i]
        group = (0, "") if s.is_boundary else (1, partner.node_name(s))
        return group, partner.lo(s), own.lo(s), i

    ranks = [-1] * len(aligns)
    j = 0
    for i in sorted(range(len(aligns)), key=key):
        if partner.in_chain(aligns[i]):
            ranks[i] = j
            j += 1
    return ranks


def sweep_order(aligns: Sequence[Segment], axis: Axis) -> List[int]:
    """Indices of *aligns* by sweep-axis start, then end, then position."""
    return sorted(range(len(aligns)), key=lambda i: (axis.lo(aligns[i]), axis.hi(aligns[i]), i))


def diff_sequence(node: SequenceNode, axis: Axis) -> List[DiffEvent]:
    """Classify the breaks along *node*, swept on *axis*.

    The first event is always the sequence header and the last is the
    trailing gap up to the right boundary.
    """
    partner = partner_of(axis)
    name = node.name

    aligns: List[Segment] = list(node.segments())
    left, right = boundaries(node.length, axis)
    aligns.append(left)
    aligns.append(right)
    lpad, rpad = len(aligns) - 2, len(aligns) - 1

    ranks = assign_ranks(aligns, partner)
    order = sweep_order(aligns, axis)
    if order[0] != lpad or order[-1] != rpad:
        raise ChainConsistencyError(
            f"{name}: segments extend past the sequence bounds [1, {node.length}]"
        )

    events = [DiffEvent.new_sequence(name)]
    pa = pga = lpad

    for i in order[1:]:
        a = aligns[i]
        if not axis.in_chain(a):
            continue

        prev = aligns[pa]
        anchor = aligns[pga]
        start, end = axis.hi(prev), axis.lo(a)
        gap = end - start - 1

        # Right boundary: trailing gap, done
        if a.is_boundary:
            if i != rpad:
                raise ChainConsistencyError(f"{name}: unexpected boundary segment at {start}")
            events.append(DiffEvent.gap(name, start, end))
            break

        if partner.in_chain(a) and a.edge is anchor.edge:
            if a.slope() != anchor.slope():
                events.append(DiffEvent.inversion(name, start, end))
            elif ranks[i] != ranks[pga] + anchor.slope():
                events.append(DiffEvent.chain_jump(name, start, end))
            elif pa == pga:
                if a.is_positive():
                    pgap = partner.lo(a) - partner.hi(anchor) - 1
                else:
                    pgap = partner.lo(anchor) - partner.hi(a) - 1
                events.append(DiffEvent.indel(name, start, end, gap, pgap))
            else:
                # lined up, duplication in between
                events.append(DiffEvent.gap(name, start, end))
        elif not partner.in_chain(a):
            events.append(DiffEvent.gap(name, start, end))
            events.append(DiffEvent.duplication(name, axis.lo(a), axis.hi(a)))
        else:
            events.append(DiffEvent.seq_jump(name, partner.node_name(a), start, end))

        if partner.in_chain(a):
            pga = i
        pa = i
    else:
        raise ChainConsistencyError(f"{name}: sweep ended without reaching the right boundary")

    return events


def _units(graph: DeltaGraph, ref_diff: bool, qry_diff: bool) -> List[tuple]:
    units = []
    if ref_diff:
        units.extend((graph.refnodes[n], REF) for n in sorted(graph.refnodes))
    if qry_diff:
        units.extend((graph.qrynodes[n], QRY) for n in sorted(graph.qrynodes))
    return units


def diff_graph(
    graph: DeltaGraph,
    ref_diff: bool = True,
    qry_diff: bool = True,
    workers: Optional[int] = 1,
) -> Iterator[List[DiffEvent]]:
    """Yield the event list of every sequence.

    Reference sequences come first, then query sequences, each in name
    order.  With ``workers > 1`` sequences are diffed on a thread pool; the
    order of the results does not change.
    """
    units = _units(graph, ref_diff, qry_diff)
    logger.info("Diffing %d sequences", len(units))

    if not workers or workers <= 1 or len(units) <= 1:
        for node, axis in units:
            yield diff_sequence(node, axis)
        return

    with ThreadPoolExecutor(max_workers=workers) as pool:
        yield from pool.map(lambda u: diff_sequence(*u), units)
