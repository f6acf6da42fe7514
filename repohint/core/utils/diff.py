"""Unified diff parsing.

Parse-once pattern: raw diff text (from ``git diff`` or the GitHub diff media
type) is parsed into files and chunks, then normalized into the flat
``DiffFile`` records rules consume.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from repohint.core.models import ChangeType, DiffChange, DiffFile

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_GIT_HEADER = re.compile(r'^diff --git "?a/(.*?)"? "?b/(.*?)"?$')

DEV_NULL = "/dev/null"


@dataclass
class DiffChunk:
    """One ``@@`` section of a file diff."""

    header: str
    old_start: int
    old_length: int
    new_start: int
    new_length: int
    changes: list[DiffChange] = field(default_factory=list)


@dataclass
class ParsedFile:
    """A file section of a unified diff."""

    from_path: str | None = None
    to_path: str | None = None
    chunks: list[DiffChunk] = field(default_factory=list)


def _strip_prefix(path: str) -> str:
    path = path.split("\t", 1)[0].strip().strip('"')
    if path == DEV_NULL:
        return path
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


def parse_diff(text: str) -> list[ParsedFile]:
    """Parse unified diff text into files and chunks, keeping chunk order."""
    files: list[ParsedFile] = []
    current: ParsedFile | None = None
    chunk: DiffChunk | None = None
    old_remaining = new_remaining = 0
    old_line = new_line = 0

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for line in lines:
        # Only "\n" ends a line; other separators belong to the content.
        line = line.removesuffix("\r")
        if chunk is not None and (old_remaining > 0 or new_remaining > 0):
            if line.startswith("+"):
                chunk.changes.append(DiffChange(type=ChangeType.ADD, content=line[1:], new_line=new_line))
                new_line += 1
                new_remaining -= 1
                continue
            if line.startswith("-"):
                chunk.changes.append(DiffChange(type=ChangeType.DELETE, content=line[1:], old_line=old_line))
                old_line += 1
                old_remaining -= 1
                continue
            if line.startswith(" ") or line == "":
                chunk.changes.append(
                    DiffChange(type=ChangeType.NORMAL, content=line[1:], old_line=old_line, new_line=new_line)
                )
                old_line += 1
                new_line += 1
                old_remaining -= 1
                new_remaining -= 1
                continue
            if line.startswith("\\"):
                # "\ No newline at end of file"
                continue

        if line.startswith("diff --git"):
            current = ParsedFile()
            files.append(current)
            chunk = None
            match = _GIT_HEADER.match(line)
            if match:
                current.from_path = match.group(1)
                current.to_path = match.group(2)
        elif line.startswith("--- "):
            if current is None or current.chunks:
                current = ParsedFile()
                files.append(current)
            chunk = None
            current.from_path = _strip_prefix(line[4:])
        elif line.startswith("+++ "):
            if current is None:
                current = ParsedFile()
                files.append(current)
            current.to_path = _strip_prefix(line[4:])
        elif line.startswith("@@"):
            match = _HUNK_HEADER.match(line)
            if not match or current is None:
                continue
            old_start = int(match.group(1))
            old_length = int(match.group(2)) if match.group(2) is not None else 1
            new_start = int(match.group(3))
            new_length = int(match.group(4)) if match.group(4) is not None else 1
            chunk = DiffChunk(line, old_start, old_length, new_start, new_length)
            current.chunks.append(chunk)
            old_remaining, new_remaining = old_length, new_length
            old_line, new_line = old_start, new_start

    return files


def normalize_diff(files: list[ParsedFile]) -> list[DiffFile]:
    """Flatten each file's chunks into a single ordered change list."""
    normalized = []
    for parsed in files:
        # Deleted files are reported under their old path.
        file_name = parsed.to_path if parsed.to_path and parsed.to_path != DEV_NULL else parsed.from_path
        file_name = file_name or ""
        changes = [change for chunk in parsed.chunks for change in chunk.changes]
        normalized.append(DiffFile(file_name=file_name, changes=changes))
    return normalized


def diff_files_from_text(text: str) -> list[DiffFile]:
    """Parse and normalize unified diff text."""
    return normalize_diff(parse_diff(text))
