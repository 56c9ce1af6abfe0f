"""Shared test fixtures for deltadiff tests."""

import pytest

from deltadiff.graph import DeltaGraph, Segment


# chr1 against two contigs: an insertion on ctgA, then a reversed hit on ctgB
SIMPLE_DELTA = """\
/data/ref.fa /data/qry.fa
NUCMER
>chr1 ctgA 1000 1000
1 400 1 400 0 0 0
0
451 700 421 670 0 0 0
0
>chr1 ctgB 1000 300
751 1000 300 51 0 0 0
0
"""

SIMPLE_DIFF = """\
>chr1
SEQ 0\t1\t0\tctgA
INS 400\t451\t50\t20\t30
SEQ 700\t751\t50\tctgB
GAP 1000\t1001\t0
>ctgA
SEQ 0\t1\t0\tchr1
DEL 400\t421\t20\t50\t-30
GAP 670\t1001\t330
>ctgB
SEQ 0\t51\t50\tchr1
GAP 300\t301\t0
"""

# chr1 carries a repeat: ctgA 1-300 aligns twice
REPEAT_DELTA = """\
/data/ref.fa /data/qry.fa
NUCMER
>chr1 ctgA 1000 600
1 300 1 300 0 0 0
0
301 600 1 300 0 0 0
0
601 900 301 600 0 0 0
0
"""


# translated alignment written reversed on the reference
PROMER_DELTA = """\
/data/ref.fa /data/qry.fa
PROMER
>chr1 ctgA 1000 600
1 300 1 300 10 10 0
0
600 301 301 600 10 10 0
0
"""


def make_graph(seqs, alignments, chains=True):
    """Build a graph by hand.

    *seqs* maps ``(ref, qry)`` to ``(ref_len, qry_len)``; *alignments* is a
    list of ``(ref, qry, s_r, e_r, s_q, e_q)`` with ``s_q > e_q`` for the
    reverse strand.  When *chains* is true every segment is put in both
    chains; otherwise pass ``(..., is_rlis, is_qlis)`` 8-tuples.
    """
    graph = DeltaGraph()
    edges = {}
    for (ref, qry), (rlen, qlen) in seqs.items():
        edges[ref, qry] = graph.add_relationship(ref, rlen, qry, qlen)

    segs = []
    for aln in alignments:
        ref, qry, s_r, e_r, s_q, e_q = aln[:6]
        rlis, qlis = (True, True) if chains else aln[6:8]
        seg = Segment(
            s_r, e_r, min(s_q, e_q), max(s_q, e_q),
            dir_q=1 if s_q <= e_q else -1,
            is_rlis=rlis, is_qlis=qlis,
        )
        segs.append(edges[ref, qry].add(seg))
    return graph, segs


@pytest.fixture
def simple_delta(tmp_path):
    p = tmp_path / "simple.delta"
    p.write_text(SIMPLE_DELTA)
    return p


@pytest.fixture
def repeat_delta(tmp_path):
    p = tmp_path / "repeat.delta"
    p.write_text(REPEAT_DELTA)
    return p


@pytest.fixture
def promer_delta(tmp_path):
    p = tmp_path / "promer.delta"
    p.write_text(PROMER_DELTA)
    return p


@pytest.fixture
def lined_up_graph():
    """Two adjacent, co-linear segments of one relationship."""
    return make_graph(
        {("chr1", "ctgA"): (1000, 1000)},
        [
            ("chr1", "ctgA", 1, 500, 1, 500),
            ("chr1", "ctgA", 501, 1000, 501, 1000),
        ],
    )


@pytest.fixture
def repeat_graph():
    """ctgA 1-300 aligns twice to chr1; the second copy is off the query chain."""
    return make_graph(
        {("chr1", "ctgA"): (1000, 600)},
        [
            ("chr1", "ctgA", 1, 300, 1, 300, True, True),
            ("chr1", "ctgA", 301, 600, 1, 300, True, False),
            ("chr1", "ctgA", 601, 900, 301, 600, True, True),
        ],
        chains=False,
    )
