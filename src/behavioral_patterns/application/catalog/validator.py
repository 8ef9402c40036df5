"""Catalog validation.

Two properties are checked for every catalog:

* every pattern section has a non-empty purpose statement;
* every code block, both the referenced snippets and the python blocks of the
  rendered README, is syntactically valid Python.

Dangling ``related`` links and missing demos are reported as warnings.
"""
import ast
from typing import Callable, List, Mapping, Optional

from behavioral_patterns.domain.catalog import (
    CatalogDocument,
    CatalogIssue,
    CatalogValidationReport,
    IssueSeverity,
    PatternEntry,
)
from behavioral_patterns.domain.core.exceptions import DomainException
from behavioral_patterns.infrastructure.catalog.snippets import resolve_snippet
from behavioral_patterns.infrastructure.logging.logger import get_logger
from behavioral_patterns.infrastructure.rendering.readme_renderer import extract_code_blocks

ReadmeRenderFn = Callable[[CatalogDocument], str]


class CatalogValidator:
    """Checks a catalog document against its implementations."""

    def __init__(
        self,
        snippet_resolver: Callable[[str], str] = resolve_snippet,
        render_readme: Optional[ReadmeRenderFn] = None,
    ):
        self._resolve = snippet_resolver
        self._render_readme = render_readme
        self._logger = get_logger(__name__)

    def validate(self, document: CatalogDocument, demos: Optional[Mapping[str, object]] = None) -> CatalogValidationReport:
        demos = demos or {}
        known = set(document.slugs)
        issues: List[CatalogIssue] = []

        for entry in document.patterns:
            issues.extend(self._check_purpose(entry))
            issues.extend(self._check_snippets(entry))
            issues.extend(self._check_related(entry, known))
            if entry.slug not in demos:
                issues.append(self._issue(entry.slug, IssueSeverity.WARNING, "demo", "No demo registered"))

        if self._render_readme is not None:
            issues.extend(self._check_readme(document))

        report = CatalogValidationReport(checked=len(document.patterns), issues=issues)
        self._logger.info(
            f"Catalog validation: {len(report.errors)} error(s), {len(report.warnings)} warning(s)"
        )
        return report

    def _check_purpose(self, entry: PatternEntry) -> List[CatalogIssue]:
        if entry.intent and entry.intent.strip():
            return []
        return [self._issue(entry.slug, IssueSeverity.ERROR, "purpose", "Purpose statement is empty")]

    def _check_snippets(self, entry: PatternEntry) -> List[CatalogIssue]:
        issues = []
        for reference in entry.snippets:
            try:
                source = self._resolve(str(reference))
            except DomainException as e:
                issues.append(self._issue(entry.slug, IssueSeverity.ERROR, "snippet", str(e)))
                continue
            error = _syntax_error(source)
            if error:
                issues.append(
                    self._issue(entry.slug, IssueSeverity.ERROR, "snippet", f"{reference}: {error}")
                )
        return issues

    def _check_related(self, entry: PatternEntry, known: set) -> List[CatalogIssue]:
        return [
            self._issue(entry.slug, IssueSeverity.WARNING, "related", f"Unknown related pattern '{slug}'")
            for slug in entry.related
            if slug not in known
        ]

    def _check_readme(self, document: CatalogDocument) -> List[CatalogIssue]:
        try:
            markdown = self._render_readme(document)
        except DomainException as e:
            return [self._issue(None, IssueSeverity.ERROR, "readme", f"README could not be rendered: {e}")]

        issues = []
        python_blocks = [code for language, code in extract_code_blocks(markdown) if language in ("python", "py")]
        for index, code in enumerate(python_blocks, start=1):
            error = _syntax_error(code)
            if error:
                issues.append(
                    self._issue(None, IssueSeverity.ERROR, "readme", f"Python block {index}: {error}")
                )
        return issues

    @staticmethod
    def _issue(slug: Optional[str], severity: IssueSeverity, check: str, message: str) -> CatalogIssue:
        return CatalogIssue(slug=slug, severity=severity, check=check, message=message)


def _syntax_error(source: str) -> Optional[str]:
    try:
        ast.parse(source)
    except SyntaxError as e:
        return f"line {e.lineno}: {e.msg}"
    return None
