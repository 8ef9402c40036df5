"""README rendering with Jinja2."""
import re
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
)

from behavioral_patterns.domain.catalog import CatalogDocument, SnippetReference
from behavioral_patterns.domain.core.exceptions import ConfigurationError
from behavioral_patterns.infrastructure.catalog.snippets import resolve_snippet
from behavioral_patterns.infrastructure.logging.logger import get_logger

README_TEMPLATE = "readme.md.j2"

_FENCE = re.compile(r"^```[ \t]*([\w+-]*)[ \t]*\n(.*?)^```[ \t]*$", re.MULTILINE | re.DOTALL)

SnippetResolver = Callable[[Union[str, SnippetReference]], str]


def extract_code_blocks(markdown: str) -> List[Tuple[str, str]]:
    """Return ``(language, code)`` for every fenced block in a Markdown text.

    Blocks without an info string get an empty language.
    """
    return [(match.group(1).lower(), match.group(2)) for match in _FENCE.finditer(markdown)]


class ReadmeRenderer:
    """Renders the catalog README from ``readme.md.j2``.

    A configured template directory takes precedence over the bundled
    templates, so a project can override the layout without forking.
    """

    def __init__(
        self,
        logger: Optional[Any] = None,
        template_dir: Optional[Union[str, Path]] = None,
        snippet_resolver: SnippetResolver = resolve_snippet,
    ):
        self._logger = logger or get_logger(__name__)
        self._resolve = snippet_resolver

        loaders = [PackageLoader("behavioral_patterns", "templates")]
        if template_dir:
            template_path = Path(template_dir)
            if not template_path.is_dir():
                raise ConfigurationError(f"Template directory not found: {template_path}")
            loaders.insert(0, FileSystemLoader(str(template_path)))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )
        self._env.filters["snippet"] = self._resolve

    def render(
        self,
        document: CatalogDocument,
        title: Optional[str] = None,
        include_snippets: bool = True,
    ) -> str:
        """
        Render the README for a catalog.

        Args:
            document: Catalog to render
            title: Overrides the catalog title
            include_snippets: Whether to embed implementation source

        Returns:
            Markdown text ending with a single newline
        """
        try:
            template = self._env.get_template(README_TEMPLATE)
            markdown = template.render(
                title=title or document.title,
                introduction=document.introduction,
                patterns=document.patterns,
                include_snippets=include_snippets,
            )
        except TemplateError as e:
            raise ConfigurationError(f"Failed to render {README_TEMPLATE}: {e}")

        # Only the ends are trimmed; snippet source keeps its blank lines
        markdown = markdown.strip() + "\n"
        self._logger.debug(f"Rendered README for {len(document.patterns)} pattern(s)")
        return markdown
