"""
Multi-file conversion run: alarm exports in, ordered rows out.

Collects input files, parses them (in parallel when there is more than
one), optionally drops rows with a blank description, and sorts the
combined rows.  A file that cannot be read or parsed is recorded in
:attr:`ConversionResult.failures` and does not affect the other files.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from lxml import etree

from . import ordering
from .models import AlarmRow
from .parser import parse_file
from .schema import DEFAULT_OUTPUT_FILENAME, XML_EXTENSION

logger = logging.getLogger(__name__)


# ===================================================================
# Options / results
# ===================================================================

@dataclass
class ConversionOptions:
    """Knobs for a conversion run.

    Attributes:
        ignore_blank_descriptions: Drop rows whose description is empty.
        max_workers: Thread count for parsing; None lets
            ``ThreadPoolExecutor`` choose.
    """
    ignore_blank_descriptions: bool = False
    max_workers: Optional[int] = None


@dataclass
class ConversionResult:
    """Outcome of :func:`convert_files`."""
    rows: List[AlarmRow] = field(default_factory=list)
    total_rows: int = 0
    exported_rows: int = 0
    skipped_rows: int = 0
    files: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when every input file parsed."""
        return not self.failures

    def summary(self) -> str:
        if self.total_rows == 0:
            return "No rows parsed yet."
        return (
            f"Rows exported: {self.exported_rows} / {self.total_rows} "
            f"(skipped {self.skipped_rows})"
        )

    def to_dict(self, include_rows: bool = False) -> dict:
        d: dict[str, Any] = {
            "files": self.files,
            "total_rows": self.total_rows,
            "exported_rows": self.exported_rows,
            "skipped_rows": self.skipped_rows,
            "failures": self.failures,
        }
        if include_rows:
            d["rows"] = [r.to_dict() for r in self.rows]
        return d


# ===================================================================
# Input discovery
# ===================================================================

def _is_xml_file(path: str) -> bool:
    return (
        bool(path.strip())
        and os.path.splitext(path)[1].lower() == XML_EXTENSION
        and os.path.isfile(path)
    )


def _expand(path: str) -> List[str]:
    """A directory stands for the XML files directly inside it."""
    if os.path.isdir(path):
        return [
            os.path.join(path, name)
            for name in sorted(os.listdir(path))
        ]
    return [path]


def collect_input_files(
    paths: Iterable[str],
    existing: Sequence[str] = (),
) -> List[str]:
    """Return the new XML files among *paths*.

    Non-XML paths and paths that do not exist are dropped.  A path already
    in *existing*, or seen earlier in *paths*, is a duplicate (compared
    case-insensitively) and dropped too.  Order is preserved.
    """
    seen = {os.path.normcase(p).lower() for p in existing}
    added: List[str] = []
    for raw in paths:
        for path in _expand(os.fspath(raw)):
            if not _is_xml_file(path):
                continue
            key = os.path.normcase(path).lower()
            if key in seen:
                continue
            seen.add(key)
            added.append(path)
    return added


def default_output_path(first_input: str) -> str:
    """``Alarm_Tags.xlsx`` next to *first_input*."""
    return os.path.join(os.path.dirname(first_input), DEFAULT_OUTPUT_FILENAME)


# ===================================================================
# Conversion
# ===================================================================

def _parse_all(
    paths: Sequence[str],
    max_workers: Optional[int],
) -> tuple[List[Optional[List[AlarmRow]]], Dict[str, str]]:
    """Parse every file; return per-file rows (None on failure) and errors."""
    results: List[Optional[List[AlarmRow]]] = [None] * len(paths)
    failures: Dict[str, str] = {}

    def _record_failure(path: str, exc: Exception) -> None:
        logger.warning("Failed to parse %s: %s", path, exc)
        failures[path] = str(exc)

    if len(paths) <= 1 or max_workers == 1:
        for i, path in enumerate(paths):
            try:
                results[i] = parse_file(path)
            except (OSError, etree.XMLSyntaxError) as exc:
                _record_failure(path, exc)
        return results, failures

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(parse_file, path): i
            for i, path in enumerate(paths)
        }
        for future in as_completed(futures):
            i = futures[future]
            try:
                results[i] = future.result()
            except (OSError, etree.XMLSyntaxError) as exc:
                _record_failure(paths[i], exc)

    # Keep failures in input order for stable reporting.
    ordered = {p: failures[p] for p in paths if p in failures}
    return results, ordered


def filter_rows(rows: Iterable[AlarmRow], ignore_blank_descriptions: bool) -> List[AlarmRow]:
    """Drop rows with a blank description when asked to."""
    if not ignore_blank_descriptions:
        return list(rows)
    return [row for row in rows if row.description.strip()]


def convert_files(
    paths: Iterable[str],
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    """Parse alarm exports and return their combined, ordered rows.

    Args:
        paths: Alarm export files.  Used as given; see
            :func:`collect_input_files` for discovery and de-duplication.
        options: Run options; defaults to :class:`ConversionOptions()`.

    Returns:
        A :class:`ConversionResult`.  Files that failed to load are listed
        in ``failures`` and contribute no rows.
    """
    options = options or ConversionOptions()
    files = [os.fspath(p) for p in paths]
    logger.info("Parsing %d alarm export(s)", len(files))

    per_file, failures = _parse_all(files, options.max_workers)

    all_rows: List[AlarmRow] = []
    for rows in per_file:
        if rows:
            all_rows.extend(rows)

    kept = filter_rows(all_rows, options.ignore_blank_descriptions)
    ordered = ordering.sort_rows(kept)

    result = ConversionResult(
        rows=ordered,
        total_rows=len(all_rows),
        exported_rows=len(ordered),
        skipped_rows=len(all_rows) - len(kept),
        files=files,
        failures=failures,
    )
    logger.info("%s", result.summary())
    return result


def export_files(
    paths: Iterable[str],
    output_path: str,
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    """Convert *paths* and write the rows to the spreadsheet *output_path*.

    Raises:
        ValueError: If *paths* is empty or *output_path* is blank.
    """
    from .exporter import export_rows

    files = list(paths)
    if not files:
        raise ValueError("No input files to export")
    if not output_path or not output_path.strip():
        raise ValueError("output_path must not be blank")

    result = convert_files(files, options)
    logger.info("Writing %d rows to %s", result.exported_rows, output_path)
    export_rows(output_path, result.rows)
    return result
