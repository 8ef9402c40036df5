"""
CLI-specific formatting functions for human-readable output.

- JSON and YAML dumps
- Rich tables for pattern listings, demo runs and validation reports
- List formatting for detailed views
"""
import json
from typing import Any, Dict, List

import yaml
from rich.console import Console
from rich.table import Table

TABLE_WIDTH = 120


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if isinstance(data, str):
        # Rendered documents are printed as-is whatever the format
        return data
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    if format_type == "table":
        return format_table_output(data)
    if format_type == "list":
        return format_list_output(data)
    return _format_json(data)


def _format_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, dict) and "patterns" in data:
        return format_patterns_table(data["patterns"])
    if isinstance(data, dict) and "demos" in data:
        return format_demos_table(data["demos"])
    if isinstance(data, dict) and "lines" in data:
        return format_demos_table([data])
    if isinstance(data, dict) and "issues" in data:
        return format_issues_table(data)
    # Fallback to JSON for unknown data structures
    return _format_json(data)


def format_list_output(data: Any) -> str:
    """Format data as a detailed list."""
    if isinstance(data, dict) and "patterns" in data:
        return "\n\n".join(format_pattern_details(p) for p in data["patterns"]) or "No patterns found."
    if isinstance(data, dict) and "demos" in data:
        return "\n\n".join(format_demo_transcript(d) for d in data["demos"]) or "No demos found."
    if isinstance(data, dict) and "lines" in data:
        return format_demo_transcript(data)
    if isinstance(data, dict) and "intent" in data:
        return format_pattern_details(data)
    return _format_json(data)


def _render(table: Table) -> str:
    console = Console(width=TABLE_WIDTH, legacy_windows=False, force_terminal=False)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def format_patterns_table(patterns: List[Dict]) -> str:
    """Format pattern summaries as a Rich table."""
    if not patterns:
        return "No patterns found."

    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    table.add_column("Slug", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Category", style="blue", width=11)
    table.add_column("Demo", style="yellow", justify="center", width=5)
    table.add_column("Intent")

    for pattern in patterns:
        table.add_row(
            pattern.get("slug", "N/A"),
            pattern.get("name", "N/A"),
            pattern.get("category", "N/A"),
            "yes" if pattern.get("has_demo") else "no",
            pattern.get("intent", ""),
        )
    return _render(table)


def format_demos_table(demos: List[Dict]) -> str:
    if not demos:
        return "No demos found."

    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    table.add_column("Pattern", style="green", no_wrap=True)
    table.add_column("ms", style="yellow", justify="right", width=8)
    table.add_column("Transcript")

    for demo in demos:
        table.add_row(
            demo.get("name", demo.get("slug", "N/A")),
            f"{demo.get('duration_ms', 0):.1f}",
            "\n".join(demo.get("lines", [])),
        )
    return _render(table)


def format_issues_table(report: Dict) -> str:
    summary = (
        f"{'VALID' if report.get('valid') else 'INVALID'}: {report.get('checked', 0)} pattern(s) checked, "
        f"{report.get('error_count', 0)} error(s), {report.get('warning_count', 0)} warning(s)"
    )
    issues = report.get("issues", [])
    if not issues:
        return summary + "\n"

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Severity", style="red", width=8)
    table.add_column("Check", style="cyan", width=8)
    table.add_column("Pattern", style="green")
    table.add_column("Message")
    for issue in issues:
        table.add_row(
            issue.get("severity", ""),
            issue.get("check", ""),
            issue.get("slug") or "-",
            issue.get("message", ""),
        )
    return summary + "\n" + _render(table)


def format_pattern_details(pattern: Dict) -> str:
    """Format one pattern as an indented list."""
    lines = [
        f"{pattern.get('name', 'N/A')} ({pattern.get('slug', 'N/A')})",
        f"  Category: {pattern.get('category', 'N/A')}",
        f"  Intent:   {pattern.get('intent', '')}",
    ]
    for field, label in (
        ("applicability", "Applicability"),
        ("participants", "Participants"),
        ("consequences", "Consequences"),
        ("related", "Related"),
    ):
        values = pattern.get(field)
        if values:
            lines.append(f"  {label}:")
            lines.extend(f"    - {value}" for value in values)

    snippets = pattern.get("snippets") or {}
    for reference, source in snippets.items():
        lines.append(f"  Source of {reference}:")
        lines.extend(f"    {line}" if line else "" for line in source.rstrip("\n").splitlines())
    return "\n".join(lines)


def format_demo_transcript(demo: Dict) -> str:
    header = f"== {demo.get('name', demo.get('slug', 'N/A'))} =="
    return "\n".join([header, *demo.get("lines", [])])
