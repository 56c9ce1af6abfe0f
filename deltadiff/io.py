"""Delta file I/O – reading MUMmer alignment delta files (plain and gzipped)."""

from __future__ import annotations

import gzip
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generator, List, TextIO, Union

from deltadiff.exceptions import DeltaFormatError
from deltadiff.log import get_logger

logger = get_logger("io")

NUCMER = "NUCMER"
PROMER = "PROMER"


@dataclass
class DeltaAlignment:
    """One alignment header line plus its indel offsets.

    Coordinates are kept as written.  A span written high-to-low is
    reversed; the alignment is on the reverse strand when exactly one of
    the two spans is.
    """

    s_r: int
    e_r: int
    s_q: int
    e_q: int
    errors: int
    sim_errors: int
    stops: int
    deltas: List[int] = field(default_factory=list)

    @property
    def is_positive(self) -> bool:
        """True when the query runs the same way as the reference.

        PROMER may write either span reversed.
        """
        return (self.s_r <= self.e_r) == (self.s_q <= self.e_q)

    def identity(self, data_type: str = NUCMER) -> float:
        """Percent identity of the alignment.

        The aligned length is the reference span plus one column for every
        query insertion (negative offset). PROMER spans count amino acids.
        """
        span = abs(self.e_r - self.s_r) + 1
        if data_type == PROMER:
            span //= 3
        total = span + sum(1 for d in self.deltas if d < 0)
        if total <= 0:
            return 0.0
        return (total - self.errors) / total * 100.0


@dataclass
class DeltaRecord:
    """All alignments between one reference and one query sequence."""

    ref: str
    qry: str
    ref_len: int
    qry_len: int
    alignments: List[DeltaAlignment] = field(default_factory=list)


@dataclass
class DeltaFile:
    """Parsed delta file."""

    ref_path: str
    qry_path: str
    data_type: str
    records: List[DeltaRecord] = field(default_factory=list)


def _open(filepath: Path) -> TextIO:
    opener = gzip.open if filepath.suffix == ".gz" else open
    return opener(filepath, "rt")  # type: ignore[return-value]


def _ints(fields: List[str], path: Path, lineno: int) -> List[int]:
    try:
        return [int(f) for f in fields]
    except ValueError:
        raise DeltaFormatError(
            f"expected integers, got {' '.join(fields)!r}", path, lineno
        ) from None


def iter_records(
    fh: TextIO, path: Union[str, Path] = "<stream>"
) -> Generator[DeltaRecord, None, None]:
    """Yield :class:`DeltaRecord` objects from an open delta stream.

    The two header lines must already have been consumed.
    """
    path = Path(path)
    record: DeltaRecord | None = None
    current: DeltaAlignment | None = None

    for lineno, line in enumerate(fh, start=3):
        fields = line.split()
        if not fields:
            continue

        if line.startswith(">"):
            if current is not None:
                raise DeltaFormatError("unterminated indel list", path, lineno)
            if record is not None:
                yield record
            if len(fields) != 4:
                raise DeltaFormatError("bad sequence header", path, lineno)
            ref_len, qry_len = _ints(fields[2:], path, lineno)
            record = DeltaRecord(fields[0][1:], fields[1], ref_len, qry_len)
            continue

        if record is None:
            raise DeltaFormatError("alignment before first sequence header", path, lineno)

        if current is None:
            if len(fields) != 7:
                raise DeltaFormatError("bad alignment header", path, lineno)
            current = DeltaAlignment(*_ints(fields, path, lineno))
            continue

        if len(fields) != 1:
            raise DeltaFormatError("bad indel offset", path, lineno)
        (offset,) = _ints(fields, path, lineno)
        if offset == 0:
            record.alignments.append(current)
            current = None
        else:
            current.deltas.append(offset)

    if current is not None:
        raise DeltaFormatError("unexpected end of file inside alignment", path)
    if record is not None:
        yield record


def read_delta(filepath: Union[str, Path]) -> DeltaFile:
    """Read a delta file.

    Supports plain-text and gzip-compressed files (.gz).
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise DeltaFormatError("no such file", filepath)

    with _open(filepath) as fh:
        header = fh.readline().split()
        if len(header) != 2:
            raise DeltaFormatError("missing file name header", filepath, 1)
        data_type = fh.readline().strip()
        if data_type not in (NUCMER, PROMER):
            raise DeltaFormatError(f"unknown alignment type {data_type!r}", filepath, 2)

        delta = DeltaFile(header[0], header[1], data_type)
        delta.records = list(iter_records(fh, filepath))

    n_aligns = sum(len(r.alignments) for r in delta.records)
    logger.info("Loaded %d alignments in %d sequence pairs from %s",
                n_aligns, len(delta.records), filepath)
    return delta
