"""Shared test fixtures for the reflow test suite.

WHY: Several test modules build word lists, and every test
that touches configuration must not see the developer's own PARINIT or
.env settings.

HOW: An autouse fixture strips the PAR* variables from the environment.
A helper fixture builds Word lists from plain strings.

RULES:
- Tests never depend on the real environment.
- make_words places all words on one line, one space apart, so the
  adjacency rules of the guess heuristic see realistic positions.
"""

from typing import List

import pytest

from reflow.models import Word

PAR_ENV_VARS = ("PARINIT", "PARBODY", "PARPROTECT", "PARQUOTE")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove option-bearing variables from the environment."""
    for name in PAR_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def build_words(texts, shifted=()):
    """Create Word objects laid out on a single line."""
    words = []  # type: List[Word]
    pos = 0
    for i, text in enumerate(texts):
        words.append(Word(text=text, line=0, start=pos, shifted=i in shifted))
        pos += len(text) + 1
    return words


@pytest.fixture
def make_words():
    """Factory fixture: make_words(["a", "b"]) -> list of Word."""
    return build_words
