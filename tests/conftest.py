"""Shared test fixtures for the drafthtml test suite."""

from __future__ import annotations

import pytest

from drafthtml.config import ConverterConfig
from drafthtml.converter.from_html import HtmlImporter
from drafthtml.converter.to_html import HtmlExporter


@pytest.fixture
def config() -> ConverterConfig:
    """Default test configuration."""
    return ConverterConfig()


@pytest.fixture
def exporter(config: ConverterConfig) -> HtmlExporter:
    """Content-state-to-HTML exporter using the default test config."""
    return HtmlExporter(config)


@pytest.fixture
def importer(config: ConverterConfig) -> HtmlImporter:
    """HTML-to-content-state importer using the default test config."""
    return HtmlImporter(config)
