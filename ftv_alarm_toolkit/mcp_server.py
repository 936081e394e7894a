"""
MCP Server for the FactoryTalk View Alarm Toolkit.

Exposes the alarm export workflow via the Model Context Protocol so an
MCP-compatible client can queue alarm XML exports, preview the rebuilt
tags and write the Excel sheet.

The server keeps a small amount of session state: the queued input files,
the output path and the conversion options.

Usage:
    python -m ftv_alarm_toolkit.mcp_server
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import List, Optional
from urllib.parse import unquote, urlparse

from mcp.server.fastmcp import FastMCP

from .converter import (
    ConversionOptions,
    collect_input_files,
    convert_files,
    default_output_path,
    export_files,
)

# ---------------------------------------------------------------------------
# Logging (stderr only -- stdout is reserved for MCP protocol)
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    stream=sys.stderr,
)
log = logging.getLogger("ftv-alarm-mcp")

# ---------------------------------------------------------------------------
# MCP Server
# ---------------------------------------------------------------------------
mcp = FastMCP(
    "FactoryTalk View Alarm Toolkit",
    instructions=(
        "Tools that turn FactoryTalk View alarm XML exports into a sorted "
        "list of PLC tags with descriptions, written to Excel.\n\n"
        "Call add_files first, optionally preview_rows, then export_alarms."
    ),
)

# ---------------------------------------------------------------------------
# Server state
# ---------------------------------------------------------------------------
_input_files: List[str] = []
_output_path: Optional[str] = None
_options = ConversionOptions()


def _normalize_path(raw_path: str) -> str:
    """Normalize a path or ``file://`` URI into an absolute filesystem path."""
    path = raw_path.strip().strip('"').strip("'")

    if path.startswith("file:///"):
        decoded = unquote(urlparse(path).path)
        # On Windows, urlparse gives /C:/path -- strip leading slash
        if len(decoded) >= 3 and decoded[0] == '/' and decoded[2] == ':':
            decoded = decoded[1:]
        path = decoded
    elif path.startswith("file://"):
        path = unquote(path[7:])

    return os.path.abspath(os.path.normpath(path))


def _split_paths(file_paths: str) -> List[str]:
    """Accept a JSON array of paths or a newline-separated list."""
    text = file_paths.strip()
    if text.startswith("["):
        return [str(p) for p in json.loads(text)]
    return [line for line in text.splitlines() if line.strip()]


def _input_summary() -> str:
    if not _input_files:
        return "No files selected."
    if len(_input_files) == 1:
        return f"1 file selected: {os.path.basename(_input_files[0])}"
    return f"{len(_input_files)} files selected."


# ===================================================================
# Tools
# ===================================================================

@mcp.tool()
def add_files(file_paths: str) -> str:
    """Queue alarm export XML files (or folders of them) for conversion.

    Non-XML paths, missing files and files already queued are ignored.
    The first time files are added the output defaults to
    ``Alarm_Tags.xlsx`` next to the first file.

    Args:
        file_paths: JSON array of paths, or one path per line.
    """
    global _output_path
    try:
        paths = [_normalize_path(p) for p in _split_paths(file_paths)]
        added = collect_input_files(paths, existing=_input_files)
        if not added:
            return "No XML files found in the selection."
        _input_files.extend(added)
        if not _output_path:
            _output_path = default_output_path(_input_files[0])
        log.info("Queued %d file(s)", len(added))
        return (
            f"Loaded {len(_input_files)} file(s). Ready to export.\n"
            f"{_input_summary()}\nOutput: {_output_path}"
        )
    except Exception as e:
        return f"Error adding files: {e}"


@mcp.tool()
def list_files() -> str:
    """List the queued input files, output path and options."""
    return json.dumps({
        "files": _input_files,
        "summary": _input_summary(),
        "output_path": _output_path,
        "ignore_blank_descriptions": _options.ignore_blank_descriptions,
    }, indent=2)


@mcp.tool()
def clear_files() -> str:
    """Remove every queued input file."""
    _input_files.clear()
    return "Cleared files. Add more XML exports to continue."


@mcp.tool()
def set_output_path(file_path: str) -> str:
    """Set the destination .xlsx file.

    Args:
        file_path: Path of the workbook to write.  ``.xlsx`` is appended
            when the path has no extension.
    """
    global _output_path
    try:
        resolved = _normalize_path(file_path)
        if not os.path.splitext(resolved)[1]:
            resolved += ".xlsx"
        _output_path = resolved
        return f"Export location updated: {_output_path}"
    except Exception as e:
        return f"Error setting output path: {e}"


@mcp.tool()
def set_options(ignore_blank_descriptions: bool = False) -> str:
    """Change conversion options.

    Args:
        ignore_blank_descriptions: Skip alarms whose description is empty.
    """
    _options.ignore_blank_descriptions = ignore_blank_descriptions
    return f"ignore_blank_descriptions = {ignore_blank_descriptions}"


@mcp.tool()
def preview_rows(limit: int = 50) -> str:
    """Parse the queued files and return the first rows without writing.

    Args:
        limit: Maximum number of rows to include (default 50).
    """
    if not _input_files:
        return "Error: no files queued. Call add_files first."
    try:
        result = convert_files(_input_files, _options)
        data = result.to_dict()
        data["summary"] = result.summary()
        data["rows"] = [r.to_dict() for r in result.rows[:max(0, limit)]]
        return json.dumps(data, indent=2)
    except Exception as e:
        return f"Error parsing files: {e}"


@mcp.tool()
def export_alarms() -> str:
    """Parse the queued files and write the Excel sheet."""
    if not _input_files:
        return "Error: no files queued. Call add_files first."
    if not _output_path:
        return "Error: no output path set. Call set_output_path first."
    try:
        result = export_files(_input_files, _output_path, _options)
        lines = [
            f"Exported {result.exported_rows} of {result.total_rows} rows "
            f"to {_output_path}",
            result.summary(),
        ]
        for path, message in result.failures.items():
            lines.append(f"Failed: {path}: {message}")
        return "\n".join(lines)
    except Exception as e:
        return f"Export failed: {e}"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    """Run the MCP server on stdio transport."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
