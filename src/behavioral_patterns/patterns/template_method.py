"""
Template Method pattern - one export algorithm, several output formats.

``ReportExporter.export`` fixes the order of the steps; subclasses fill in
how a header and a row are rendered and may hook into the footer and the
final join.
"""
import csv
import io
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from behavioral_patterns.application.decorators import pattern_demo
from behavioral_patterns.domain.core.exceptions import ValidationError


class ReportExporter(ABC):
    """Base exporter. ``export`` is the template method and is not overridden."""

    format_name: str = "abstract"

    def export(self, rows: Sequence[Mapping[str, Any]], columns: Optional[Sequence[str]] = None) -> str:
        """
        Export rows to text.

        Template method that runs the steps in a fixed order:
        validate, resolve columns, header, rows, footer, join.
        """
        self.validate(rows)
        resolved = list(columns) if columns else self.resolve_columns(rows)
        if not rows and not resolved:
            # No columns means there is no table to render
            return ""

        parts: List[Optional[str]] = [self.render_header(resolved)]
        parts.extend(self.render_row(row, resolved) for row in rows)
        parts.append(self.render_footer(len(rows)))

        return self.join([part for part in parts if part is not None])

    def validate(self, rows: Sequence[Mapping[str, Any]]) -> None:
        """
        Validate input rows.

        Override in specific exporters for custom validation logic.
        """
        for index, row in enumerate(rows):
            if not isinstance(row, Mapping):
                raise ValidationError(f"Row {index} is not a mapping", type(row).__name__)

    def resolve_columns(self, rows: Sequence[Mapping[str, Any]]) -> List[str]:
        """Union of row keys in first-seen order."""
        columns: Dict[str, None] = {}
        for row in rows:
            for key in row:
                columns.setdefault(str(key), None)
        return list(columns)

    @abstractmethod
    def render_header(self, columns: List[str]) -> Optional[str]:
        """Render the header, or return None for formats without one."""

    @abstractmethod
    def render_row(self, row: Mapping[str, Any], columns: List[str]) -> str:
        """Render one row."""

    def render_footer(self, row_count: int) -> Optional[str]:
        """Hook: optional trailer line."""
        return None

    def join(self, parts: List[str]) -> str:
        """Hook: combine rendered parts; output ends with one newline."""
        return "\n".join(part.rstrip("\n") for part in parts) + "\n"

    @staticmethod
    def cell(row: Mapping[str, Any], column: str) -> str:
        value = row.get(column)
        return "" if value is None else str(value)


class CsvExporter(ReportExporter):
    format_name = "csv"

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def _line(self, values: List[str]) -> str:
        buffer = io.StringIO()
        csv.writer(buffer, delimiter=self.delimiter, lineterminator="\n").writerow(values)
        return buffer.getvalue()

    def render_header(self, columns: List[str]) -> Optional[str]:
        return self._line(columns)

    def render_row(self, row: Mapping[str, Any], columns: List[str]) -> str:
        return self._line([self.cell(row, c) for c in columns])


class MarkdownTableExporter(ReportExporter):
    format_name = "markdown"

    def __init__(self, show_count: bool = False):
        self.show_count = show_count

    @staticmethod
    def _escape(text: str) -> str:
        return text.replace("|", "\\|").replace("\n", " ")

    def render_header(self, columns: List[str]) -> Optional[str]:
        header = "| " + " | ".join(self._escape(c) for c in columns) + " |"
        separator = "| " + " | ".join("---" for _ in columns) + " |"
        return f"{header}\n{separator}"

    def render_row(self, row: Mapping[str, Any], columns: List[str]) -> str:
        return "| " + " | ".join(self._escape(self.cell(row, c)) for c in columns) + " |"

    def render_footer(self, row_count: int) -> Optional[str]:
        if not self.show_count:
            return None
        return f"\n_{row_count} row(s)_"


class JsonLinesExporter(ReportExporter):
    format_name = "jsonl"

    def render_header(self, columns: List[str]) -> Optional[str]:
        return None

    def render_row(self, row: Mapping[str, Any], columns: List[str]) -> str:
        return json.dumps({c: row.get(c) for c in columns}, default=str, ensure_ascii=False)

    def join(self, parts: List[str]) -> str:
        if not parts:
            return ""
        return super().join(parts)


@pattern_demo("template-method")
def demo() -> List[str]:
    """Export the same rows in three formats."""
    rows = [
        {"pattern": "Strategy", "family": "behavioral"},
        {"pattern": "Visitor", "family": "behavioral", "note": "double dispatch"},
    ]
    lines = []
    for exporter in (CsvExporter(), MarkdownTableExporter(show_count=True), JsonLinesExporter()):
        lines.append(f"[{exporter.format_name}]")
        lines.extend(exporter.export(rows).rstrip("\n").split("\n"))
    return lines
