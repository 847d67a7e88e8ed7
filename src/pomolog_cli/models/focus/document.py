"""Markdown log document: a title, then one table per calendar day.

The on-disk layout is::

    # PomoLog Database

    ## 2024-05-02
    | Start Time | End Time   | Duration (min) | Tag        |
    |------------|------------|----------------|------------|
    | 09:00:00   | 09:25:00   | 25             | writing    |

Anything else in the file (prose, other headings, stray tables) is kept
verbatim and ignored by the scanner.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from .state import LogEntry

DEFAULT_TITLE = "# PomoLog Database"
COLUMN_HEADER = "| Start Time | End Time   | Duration (min) | Tag        |"
COLUMN_SEPARATOR = "|------------|------------|----------------|------------|"

_DATE_HEADER_RE = re.compile(r"^##\s*(\d{4}-\d{2}-\d{2})\b")
_TIME_RE = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?$")
_DURATION_RE = re.compile(r"^\d+$")
_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
_HEADER_CELLS = [
    cell.strip().casefold() for cell in COLUMN_HEADER.strip("|").split("|")
]


@dataclass
class DateSection:
    """Rows filed under one ``## YYYY-MM-DD`` header."""

    date: date
    header_line: int
    rows: list[LogEntry] = field(default_factory=list)
    last_table_line: int | None = None
    has_column_header: bool = False


@dataclass
class LogDocument:
    """Parsed view of a log document's lines."""

    lines: list[str]
    sections: list[DateSection] = field(default_factory=list)

    @property
    def entries(self) -> list[LogEntry]:
        """Every parsed row, in document order."""
        return [entry for section in self.sections for entry in section.rows]

    def find_section(self, day: date) -> DateSection | None:
        """First section for *day*; later duplicate headers are not targeted."""
        for section in self.sections:
            if section.date == day:
                return section
        return None

    def insert_entry(self, entry: LogEntry) -> None:
        """Insert *entry* into its day's table, creating the section if needed."""
        section = self.find_section(entry.date)
        row = format_row(entry)

        if section is None:
            block = [date_header(entry.date), COLUMN_HEADER, COLUMN_SEPARATOR, row, ""]
            if self.sections:
                at = self.sections[0].header_line
            else:
                at = len(self.lines)
                # Keep one blank line between the preamble and the new section.
                if self.lines and self.lines[-1].strip():
                    block.insert(0, "")
            self.lines[at:at] = block
        elif section.last_table_line is None:
            at = section.header_line + 1
            self.lines[at:at] = [COLUMN_HEADER, COLUMN_SEPARATOR, row]
        else:
            at = section.last_table_line + 1
            self.lines.insert(at, row)

        rescanned = parse_document(self.render())
        self.lines = rescanned.lines
        self.sections = rescanned.sections

    def render(self) -> str:
        text = "\n".join(self.lines)
        if not text.endswith("\n"):
            text += "\n"
        return text


def date_header(day: date) -> str:
    return f"## {day.isoformat()}"


def clean_tag(tag: str) -> str:
    """Make a tag safe to store in a single table cell."""
    tag = " ".join(tag.splitlines())
    return tag.replace("|", "/").strip()


def format_row(entry: LogEntry) -> str:
    start = entry.start_timestamp.strftime("%H:%M:%S")
    end = entry.end_timestamp.strftime("%H:%M:%S")
    return (
        f"| {start:<10} | {end:<10} | {entry.duration_minutes:<14} "
        f"| {clean_tag(entry.tag):<10} |"
    )


def new_document_text(title: str = DEFAULT_TITLE) -> str:
    return f"{title}\n\n"


def _split_cells(line: str) -> list[str] | None:
    """Cells of a ``| a | b |`` line, or None if the line is not a table row."""
    stripped = line.strip()
    if not (stripped.startswith("|") and stripped.endswith("|")) or len(stripped) < 2:
        return None
    return [cell.strip() for cell in stripped[1:-1].split("|")]


def _is_column_header(cells: list[str]) -> bool:
    if all(_SEPARATOR_CELL_RE.match(cell) for cell in cells if cell):
        return True
    return [cell.casefold() for cell in cells] == _HEADER_CELLS


def _parse_time(text: str) -> time:
    parts = [int(part) for part in text.split(":")]
    return time(*parts)


def _parse_row(day: date, cells: list[str]) -> LogEntry | None:
    if len(cells) != 4:
        return None
    start_text, end_text, duration_text, tag = cells
    if not (_TIME_RE.match(start_text) and _TIME_RE.match(end_text)):
        return None
    if not _DURATION_RE.match(duration_text):
        return None
    try:
        start = datetime.combine(day, _parse_time(start_text))
        end = datetime.combine(day, _parse_time(end_text))
    except ValueError:
        return None
    if end < start:
        end += timedelta(days=1)
    return LogEntry(
        start_timestamp=start,
        end_timestamp=end,
        duration_minutes=int(duration_text),
        tag=tag,
    )


def parse_document(text: str) -> LogDocument:
    """
    Scan a log document line by line.

    Two states: outside any day section, or inside the section opened by the
    most recent date header. Only four-cell rows inside a section become
    entries; everything else is skipped, never rejected.
    """
    doc = LogDocument(lines=text.splitlines())
    current: DateSection | None = None
    # Where the scan is relative to the section's first table:
    # "before" (none seen yet), "table" (inside it), or "after".
    table_state = "after"

    for index, line in enumerate(doc.lines):
        header = _DATE_HEADER_RE.match(line)
        if header:
            try:
                day = date.fromisoformat(header.group(1))
            except ValueError:
                current = None
                continue
            current = DateSection(date=day, header_line=index)
            doc.sections.append(current)
            table_state = "before"
            continue

        if current is None:
            continue

        cells = _split_cells(line)
        if cells is None:
            if table_state == "table":
                table_state = "after"
            continue

        if table_state != "after":
            table_state = "table"
            current.last_table_line = index
        if _is_column_header(cells):
            if table_state == "table":
                current.has_column_header = True
            continue

        entry = _parse_row(current.date, cells)
        if entry is not None:
            current.rows.append(entry)

    return doc
