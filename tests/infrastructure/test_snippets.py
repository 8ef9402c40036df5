"""Tests for snippet reference resolution."""
import pytest

from behavioral_patterns.domain.catalog import SnippetReference
from behavioral_patterns.domain.core.exceptions import SnippetResolutionError
from behavioral_patterns.infrastructure.catalog.snippets import resolve_object, resolve_snippet
from behavioral_patterns.patterns.strategy import LoadBalancer


class TestResolveObject:
    def test_resolves_nested_attribute(self):
        target = resolve_object("behavioral_patterns.patterns.strategy:LoadBalancer.route")
        assert target is LoadBalancer.route

    def test_property_resolves_to_getter(self):
        target = resolve_object("behavioral_patterns.patterns.strategy:LoadBalancer.strategy")
        assert target is LoadBalancer.strategy.fget

    def test_accepts_reference_object(self):
        reference = SnippetReference(module="behavioral_patterns.patterns.strategy", qualname="LoadBalancer")
        assert resolve_object(reference) is LoadBalancer

    def test_unknown_module(self):
        with pytest.raises(SnippetResolutionError, match="module not importable"):
            resolve_object("behavioral_patterns.no_such_module:Thing")

    def test_unknown_attribute(self):
        with pytest.raises(SnippetResolutionError, match="no attribute 'Missing'"):
            resolve_object("behavioral_patterns.patterns.strategy:Missing")

    def test_malformed_reference(self):
        with pytest.raises(SnippetResolutionError):
            resolve_object("not a reference")


class TestResolveSnippet:
    def test_method_source_is_dedented(self):
        source = resolve_snippet("behavioral_patterns.patterns.strategy:LoadBalancer.route")

        assert source.startswith("def route(self)")
        assert source.endswith("\n")
        assert not source.endswith("\n\n")

    def test_class_source(self):
        source = resolve_snippet("behavioral_patterns.patterns.visitor:ConstantFolder")
        assert source.startswith("class ConstantFolder(ExpressionVisitor):")
        assert "def visit_binary" in source

    def test_object_without_source(self):
        with pytest.raises(SnippetResolutionError, match="source not available"):
            resolve_snippet("behavioral_patterns.patterns.observer:WILDCARD")

    def test_every_catalog_snippet_resolves(self, catalog_document):
        for entry in catalog_document.patterns:
            for reference in entry.snippets:
                assert resolve_snippet(reference).strip()
