"""End-to-end diff: read, select chains, clean, sweep, emit."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, TextIO, Union

from deltadiff.chain import flag_wga
from deltadiff.diff import diff_graph
from deltadiff.emit import PLAIN, write_events
from deltadiff.events import EventType, count_events
from deltadiff.graph import DeltaGraph
from deltadiff.log import get_logger

logger = get_logger("pipeline")


@dataclass
class DiffOptions:
    """Settings for one run."""

    ref_diff: bool = True
    qry_diff: bool = True
    style: str = PLAIN
    workers: int = 1
    min_idy: float = 0.0
    min_len: int = 0
    max_olap: float = 100.0


def prepare_graph(path: Union[str, Path], options: Optional[DiffOptions] = None) -> DeltaGraph:
    """Build the graph, flag both chains and drop segments outside them."""
    options = options or DiffOptions()
    graph = DeltaGraph.build(path)
    flag_wga(graph, options.min_idy, options.min_len, options.max_olap)
    removed = graph.clean()
    logger.info("Kept %d segments (%d outside both chains removed)",
                sum(1 for _ in graph.segments()), removed)
    return graph


def run_diff(
    path: Union[str, Path],
    options: Optional[DiffOptions] = None,
    handle: Optional[TextIO] = None,
) -> Dict[str, int]:
    """Diff the delta file at *path* and write events to *handle*.

    Returns the number of events per type.
    """
    options = options or DiffOptions()
    graph = prepare_graph(path, options)

    totals = {t.value: 0 for t in EventType if t is not EventType.NEW_SEQUENCE}
    for events in diff_graph(graph, options.ref_diff, options.qry_diff, options.workers):
        write_events(events, handle, options.style)
        for kind, n in count_events(events).items():
            totals[kind] += n

    logger.info("Events: %s", ", ".join(f"{k}={v}" for k, v in totals.items()))
    return totals
