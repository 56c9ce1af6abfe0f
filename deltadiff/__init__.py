"""
deltadiff: classify structural breaks between two assemblies.

Reads a MUMmer alignment delta file, keeps the best reference and query
chains, and reports every break along each sequence as a gap, sequence
jump, chain jump, inversion, insertion/deletion or duplication.
"""

__version__ = "0.1.0"

from deltadiff.graph import DeltaGraph, Relationship, Segment, SequenceNode
from deltadiff.chain import flag_qlis, flag_rlis, flag_wga
from deltadiff.diff import QRY, REF, diff_graph, diff_sequence
from deltadiff.events import DiffEvent, EventType
from deltadiff.emit import format_feature, format_plain, write_events
from deltadiff.io import read_delta
from deltadiff.pipeline import DiffOptions, run_diff

__all__ = [
    "DeltaGraph",
    "Relationship",
    "Segment",
    "SequenceNode",
    "flag_rlis",
    "flag_qlis",
    "flag_wga",
    "REF",
    "QRY",
    "diff_graph",
    "diff_sequence",
    "DiffEvent",
    "EventType",
    "format_plain",
    "format_feature",
    "write_events",
    "read_delta",
    "DiffOptions",
    "run_diff",
]
