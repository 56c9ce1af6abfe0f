"""Alignment graph – sequences, pairwise relationships and their segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from deltadiff.exceptions import DeltaFormatError
from deltadiff.io import DeltaFile, read_delta
from deltadiff.log import get_logger

logger = get_logger("graph")


@dataclass(eq=False)
class Segment:
    """One local alignment between a reference and a query interval.

    Coordinates are 1-based and inclusive with ``lo <= hi`` on both axes;
    the strand lives in ``dir_q``. ``edge`` is ``None`` only for the
    boundary segments the sweep creates for itself.
    """

    lo_r: int
    hi_r: int
    lo_q: int
    hi_q: int
    dir_q: int = 1
    idy: float = 100.0
    is_rlis: bool = False
    is_qlis: bool = False
    edge: Optional["Relationship"] = field(default=None, repr=False)

    def is_positive(self) -> bool:
        return self.dir_q > 0

    def slope(self) -> int:
        return 1 if self.dir_q > 0 else -1

    @property
    def is_boundary(self) -> bool:
        return self.edge is None

    @property
    def len_r(self) -> int:
        return self.hi_r - self.lo_r + 1

    @property
    def len_q(self) -> int:
        return self.hi_q - self.lo_q + 1


@dataclass(eq=False)
class Relationship:
    """All segments between one reference and one query sequence."""

    ref: "SequenceNode"
    qry: "SequenceNode"
    segments: List[Segment] = field(default_factory=list)

    def add(self, segment: Segment) -> Segment:
        segment.edge = self
        self.segments.append(segment)
        return segment

    def __repr__(self) -> str:
        return f"Relationship({self.ref.name!r}, {self.qry.name!r}, {len(self.segments)} segments)"


@dataclass(eq=False)
class SequenceNode:
    """A reference or query sequence and the relationships touching it."""

    name: str
    length: int
    edges: List[Relationship] = field(default_factory=list)

    def segments(self) -> Iterator[Segment]:
        for edge in self.edges:
            yield from edge.segments

    def __repr__(self) -> str:
        return f"SequenceNode({self.name!r}, length={self.length})"


class DeltaGraph:
    """Reference and query sequences linked by alignment relationships."""

    def __init__(self):
        self.refnodes: Dict[str, SequenceNode] = {}
        self.qrynodes: Dict[str, SequenceNode] = {}
        self.edges: List[Relationship] = []

    @classmethod
    def build(cls, filepath: Union[str, Path]) -> "DeltaGraph":
        """Build a graph from a delta file on disk."""
        return cls.from_delta(read_delta(filepath), source=str(filepath))

    @classmethod
    def from_delta(cls, delta: DeltaFile, source: str = "<delta>") -> "DeltaGraph":
        graph = cls()
        for rec in delta.records:
            edge = graph.add_relationship(rec.ref, rec.ref_len, rec.qry, rec.qry_len)
            for aln in rec.alignments:
                dir_q = 1 if aln.is_positive else -1
                lo_q, hi_q = sorted((aln.s_q, aln.e_q))
                lo_r, hi_r = sorted((aln.s_r, aln.e_r))
                seg = Segment(lo_r, hi_r, lo_q, hi_q, dir_q, aln.identity(delta.data_type))
                graph._check(seg, edge, source)
                edge.add(seg)
        logger.debug("Built graph: %d references, %d queries, %d relationships",
                     len(graph.refnodes), len(graph.qrynodes), len(graph.edges))
        return graph

    def add_relationship(self, ref: str, ref_len: int, qry: str, qry_len: int) -> Relationship:
        """Return a new relationship, creating either sequence on first sight."""
        refnode = self._node(self.refnodes, ref, ref_len)
        qrynode = self._node(self.qrynodes, qry, qry_len)
        edge = Relationship(refnode, qrynode)
        refnode.edges.append(edge)
        qrynode.edges.append(edge)
        self.edges.append(edge)
        return edge

    @staticmethod
    def _node(nodes: Dict[str, SequenceNode], name: str, length: int) -> SequenceNode:
        node = nodes.get(name)
        if node is None:
            if length <= 0:
                raise DeltaFormatError(f"sequence {name!r} has non-positive length {length}")
            node = nodes[name] = SequenceNode(name, length)
        elif node.length != length:
            raise DeltaFormatError(
                f"sequence {name!r} has conflicting lengths {node.length} and {length}"
            )
        return node

    @staticmethod
    def _check(seg: Segment, edge: Relationship, source: str) -> None:
        if seg.lo_r < 1 or seg.hi_r > edge.ref.length:
            raise DeltaFormatError(
                f"alignment {seg.lo_r}-{seg.hi_r} outside {edge.ref.name} (length {edge.ref.length})",
                source,
            )
        if seg.lo_q < 1 or seg.hi_q > edge.qry.length:
            raise DeltaFormatError(
                f"alignment {seg.lo_q}-{seg.hi_q} outside {edge.qry.name} (length {edge.qry.length})",
                source,
            )

    def segments(self) -> Iterator[Segment]:
        for edge in self.edges:
            yield from edge.segments

    def clean(self) -> int:
        """Drop segments outside both chains and any relationship left empty.

        Returns the number of segments removed.
        """
        removed = 0
        for edge in self.edges:
            kept = [s for s in edge.segments if s.is_rlis or s.is_qlis]
            removed += len(edge.segments) - len(kept)
            edge.segments = kept

        empty = {id(e) for e in self.edges if not e.segments}
        if empty:
            self.edges = [e for e in self.edges if id(e) not in empty]
            for node in list(self.refnodes.values()) + list(self.qrynodes.values()):
                node.edges = [e for e in node.edges if id(e) not in empty]

        logger.debug("Cleaned graph: removed %d segments, %d empty relationships",
                     removed, len(empty))
        return removed
