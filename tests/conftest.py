"""Shared test fixtures."""

import pytest

from pyjson2obj import JsonDeserializer, SchemaRegistry, STRICT_MAPPING


@pytest.fixture
def registry():
    return SchemaRegistry()


@pytest.fixture
def strict_deserializer(registry):
    return JsonDeserializer(policy=STRICT_MAPPING, registry=registry)
