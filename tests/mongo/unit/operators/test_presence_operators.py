"""Unit tests for the exists operator."""

from __future__ import annotations

from docmap_mongo.operators.presence import compile_presence


def test_exists_true() -> None:
    assert compile_presence("email", "exists", True) == {"email": {"$exists": True}}


def test_exists_false() -> None:
    assert compile_presence("email", "exists", 0) == {"email": {"$exists": False}}


def test_other_operators_ignored() -> None:
    assert compile_presence("email", "eq", True) is None
