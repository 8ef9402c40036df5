"""Tests for README rendering."""
import ast
from unittest.mock import Mock

import pytest

from behavioral_patterns.domain.catalog import CatalogDocument, PatternEntry
from behavioral_patterns.domain.core.exceptions import ConfigurationError
from behavioral_patterns.infrastructure.rendering.readme_renderer import (
    ReadmeRenderer,
    extract_code_blocks,
)


@pytest.fixture
def mock_logger():
    return Mock()


@pytest.fixture
def small_document():
    return CatalogDocument(
        title="Mini Catalog",
        introduction="Two patterns.",
        patterns=[
            PatternEntry(
                slug="state",
                name="State",
                intent="Alter behaviour when state changes.",
                applicability=["Behaviour depends on state."],
                related=["strategy"],
                snippets=["pkg.mod:StateThing"],
            ),
            PatternEntry(slug="strategy", name="Strategy", intent="Swap algorithms."),
        ],
    )


class RecordingResolver:
    def __init__(self, source="class StateThing:\n    pass\n"):
        self.source = source
        self.calls = []

    def __call__(self, reference):
        self.calls.append(str(reference))
        return self.source


@pytest.fixture
def fake_resolver():
    return RecordingResolver()


class TestExtractCodeBlocks:
    def test_finds_blocks_with_language(self):
        markdown = "text\n```python\nx = 1\n```\n\n```\nplain\n```\n"
        assert extract_code_blocks(markdown) == [("python", "x = 1\n"), ("", "plain\n")]

    def test_no_blocks(self):
        assert extract_code_blocks("# Title\n") == []


class TestReadmeRenderer:
    def test_render_structure(self, mock_logger, small_document, fake_resolver):
        renderer = ReadmeRenderer(logger=mock_logger, snippet_resolver=fake_resolver)

        markdown = renderer.render(small_document)

        assert markdown.startswith("# Mini Catalog\n\nTwo patterns.\n\n## Contents\n")
        assert "- [State](#state)\n- [Strategy](#strategy)" in markdown
        assert '<a id="state"></a>\n## State' in markdown
        assert "**Purpose.** Alter behaviour when state changes." in markdown
        assert "### When to use\n\n- Behaviour depends on state." in markdown
        assert "Related: [strategy](#strategy)" in markdown
        assert "`pkg.mod:StateThing`\n\n```python\nclass StateThing:\n    pass\n```" in markdown
        assert fake_resolver.calls == ["pkg.mod:StateThing"]
        mock_logger.debug.assert_called_once()

    def test_patterns_in_catalog_order(self, mock_logger, small_document, fake_resolver):
        markdown = ReadmeRenderer(logger=mock_logger, snippet_resolver=fake_resolver).render(small_document)
        assert markdown.index("## State") < markdown.index("## Strategy")

    def test_output_is_normalised(self, mock_logger, small_document, fake_resolver):
        markdown = ReadmeRenderer(logger=mock_logger, snippet_resolver=fake_resolver).render(small_document)

        assert markdown.endswith("\n")
        assert not markdown.endswith("\n\n")
        assert "\n\n\n" not in markdown

    def test_snippet_blank_lines_are_kept(self, mock_logger, small_document):
        source = "class StateThing:\n    pass\n\n\n\nHELPER = StateThing()\n"
        renderer = ReadmeRenderer(logger=mock_logger, snippet_resolver=RecordingResolver(source))

        markdown = renderer.render(small_document)

        assert f"```python\n{source}```" in markdown

    def test_text_fields_with_trailing_newlines(self, mock_logger, fake_resolver):
        document = CatalogDocument(
            title="Mini Catalog",
            introduction="Two patterns.\n\n",
            patterns=[PatternEntry(slug="state", name="State", intent="Alter behaviour.\n\n")],
        )

        markdown = ReadmeRenderer(logger=mock_logger, snippet_resolver=fake_resolver).render(document)

        assert markdown.startswith("# Mini Catalog\n\nTwo patterns.\n\n## Contents\n")
        assert "**Purpose.** Alter behaviour.\n" in markdown
        assert "\n\n\n" not in markdown

    def test_title_override(self, mock_logger, small_document, fake_resolver):
        markdown = ReadmeRenderer(logger=mock_logger, snippet_resolver=fake_resolver).render(
            small_document, title="Custom"
        )
        assert markdown.startswith("# Custom\n")

    def test_snippets_can_be_left_out(self, mock_logger, small_document, fake_resolver):
        markdown = ReadmeRenderer(logger=mock_logger, snippet_resolver=fake_resolver).render(
            small_document, include_snippets=False
        )

        assert "### Implementation" not in markdown
        assert fake_resolver.calls == []

    def test_empty_sections_are_omitted(self, mock_logger, fake_resolver):
        document = CatalogDocument(patterns=[PatternEntry(slug="state", name="State", intent="x")])
        markdown = ReadmeRenderer(logger=mock_logger, snippet_resolver=fake_resolver).render(document)

        assert "### When to use" not in markdown
        assert "Related:" not in markdown

    def test_resolver_errors_propagate(self, mock_logger, small_document):
        def resolver(reference):
            raise RuntimeError("unresolvable")

        renderer = ReadmeRenderer(logger=mock_logger, snippet_resolver=resolver)

        with pytest.raises(RuntimeError, match="unresolvable"):
            renderer.render(small_document)

    def test_template_directory_override(self, tmp_path, mock_logger, small_document):
        (tmp_path / "readme.md.j2").write_text("# {{ title }} ({{ patterns | length }})\n")

        markdown = ReadmeRenderer(logger=mock_logger, template_dir=tmp_path).render(small_document)

        assert markdown == "# Mini Catalog (2)\n"

    def test_broken_template_is_a_configuration_error(self, tmp_path, mock_logger, small_document):
        (tmp_path / "readme.md.j2").write_text("{{ undefined_variable }}\n")

        with pytest.raises(ConfigurationError, match="Failed to render"):
            ReadmeRenderer(logger=mock_logger, template_dir=tmp_path).render(small_document)

    def test_missing_template_directory(self, tmp_path, mock_logger):
        with pytest.raises(ConfigurationError, match="Template directory not found"):
            ReadmeRenderer(logger=mock_logger, template_dir=tmp_path / "missing")

    def test_bundled_catalog_renders_valid_python(self, mock_logger, catalog_document):
        markdown = ReadmeRenderer(logger=mock_logger).render(catalog_document)
        blocks = extract_code_blocks(markdown)

        assert len(blocks) == sum(len(entry.snippets) for entry in catalog_document.patterns)
        for language, code in blocks:
            assert language == "python"
            ast.parse(code)
