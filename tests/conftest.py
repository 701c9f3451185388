"""
Shared fixtures for csv2json tests.
"""

import json

import pytest

from csv2json import ConverterConfig, CsvToJsonConverter


@pytest.fixture
def convert():
    """Convert text with the given options and return the result."""

    def _convert(text, **options):
        return CsvToJsonConverter(ConverterConfig(**options)).convert(text)

    return _convert


@pytest.fixture
def convert_json(convert):
    """Convert text and return the decoded JSON output."""

    def _convert_json(text, **options):
        result = convert(text, **options)
        assert result.success, result.error
        return json.loads(result.output)

    return _convert_json


@pytest.fixture
def people_csv():
    return "name,age,active\nJohn,30,yes\nJane,25,no\nBob,35,true"
