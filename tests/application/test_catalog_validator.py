"""Tests for catalog validation."""
from unittest.mock import Mock

import pytest

from behavioral_patterns.application.catalog.validator import CatalogValidator
from behavioral_patterns.application.decorators import get_registered_demos
from behavioral_patterns.domain.catalog import CatalogDocument, PatternEntry
from behavioral_patterns.domain.core.exceptions import ConfigurationError, SnippetResolutionError


def _document(**overrides):
    entry = dict(slug="state", name="State", intent="Alter behaviour.", snippets=["pkg.mod:Thing"])
    entry.update(overrides)
    return CatalogDocument(patterns=[PatternEntry(**entry)])


def _issues(report, check):
    return [issue for issue in report.issues if issue.check == check]


class TestCatalogValidator:
    def test_bundled_catalog_is_clean(self, catalog_document, catalog_service):
        validator = CatalogValidator(
            render_readme=lambda document: catalog_service.render_readme()
        )

        report = validator.validate(catalog_document, get_registered_demos())

        assert report.valid, report.issues
        assert report.checked == 8
        assert report.issues == []

    def test_unresolvable_snippet_is_an_error(self):
        def resolver(reference):
            raise SnippetResolutionError(reference, "module not importable")

        report = CatalogValidator(snippet_resolver=resolver).validate(_document(), {"state": Mock()})

        assert not report.valid
        [issue] = _issues(report, "snippet")
        assert issue.slug == "state"
        assert "module not importable" in issue.message

    def test_snippet_with_syntax_error(self):
        validator = CatalogValidator(snippet_resolver=lambda ref: "def broken(:\n    pass\n")

        report = validator.validate(_document(), {"state": Mock()})

        [issue] = _issues(report, "snippet")
        assert issue.message.startswith("pkg.mod:Thing: line 1:")

    def test_dangling_related_link_is_a_warning(self):
        validator = CatalogValidator(snippet_resolver=lambda ref: "x = 1\n")

        report = validator.validate(_document(related=["ghost"]), {"state": Mock()})

        assert report.valid
        [issue] = report.warnings
        assert issue.check == "related"
        assert issue.message == "Unknown related pattern 'ghost'"

    def test_missing_demo_is_a_warning(self):
        validator = CatalogValidator(snippet_resolver=lambda ref: "x = 1\n")

        report = validator.validate(_document())

        assert report.valid
        assert [i.check for i in report.warnings] == ["demo"]

    def test_empty_purpose_is_an_error(self):
        # model_construct skips validation, so an empty intent gets through
        entry = PatternEntry.model_construct(
            slug="state", name="State", intent="", snippets=[], related=[],
            applicability=[], participants=[], consequences=[],
        )
        document = CatalogDocument.model_construct(title="t", introduction="", patterns=[entry])

        report = CatalogValidator().validate(document, {"state": Mock()})

        [issue] = report.errors
        assert issue.check == "purpose"

    def test_readme_python_blocks_are_parsed(self):
        markdown = "# T\n\n```python\nok = 1\n```\n\n```py\nnot valid(\n```\n\n```text\nnot valid(\n```\n"
        validator = CatalogValidator(snippet_resolver=lambda ref: "x = 1\n",
                                     render_readme=lambda document: markdown)

        report = validator.validate(_document(), {"state": Mock()})

        [issue] = _issues(report, "readme")
        assert issue.slug is None
        assert issue.message.startswith("Python block 2:")

    def test_readme_render_failure(self):
        def render(document):
            raise ConfigurationError("template missing")

        validator = CatalogValidator(snippet_resolver=lambda ref: "x = 1\n", render_readme=render)
        report = validator.validate(_document(), {"state": Mock()})

        [issue] = _issues(report, "readme")
        assert "template missing" in issue.message

    def test_readme_not_checked_without_renderer(self):
        validator = CatalogValidator(snippet_resolver=lambda ref: "x = 1\n")
        report = validator.validate(_document(), {"state": Mock()})
        assert _issues(report, "readme") == []


@pytest.mark.parametrize("source,expected", [("x = 1\n", True), ("def f(:\n", False)])
def test_snippet_syntax_decides_validity(source, expected):
    report = CatalogValidator(snippet_resolver=lambda ref: source).validate(_document(), {"state": Mock()})
    assert report.valid is expected
