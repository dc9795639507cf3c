"""Shared fixtures for the typeflow test suite."""

from pathlib import Path

import pytest

import typeflow as tf

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def country_names():
    """Country names, one per line, as the search tests use them."""
    with open(FIXTURES / "countries.txt", encoding="utf-8") as f:
        return [line.rstrip("\n") for line in f if line.strip()]


@pytest.fixture(params=list(tf.DistanceStrategy), ids=lambda s: s.value)
def strategy(request):
    """Run a test once per edit distance strategy."""
    return request.param


@pytest.fixture
def country_engine(country_names, strategy):
    engine = tf.FuzzySearchEngine(strategy=strategy, filters=[tf.lowercase_filter])
    engine.set_source(country_names)
    return engine
