"""Conformance fixture loader and shared fixtures.

Loads YAML fixtures from tests/fixtures/ and converts them to
parametrized cases for match_path() and generate_path().
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from routepath import MatchOptions, PatternCache, TemplateCache

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class MatchCase:
    """A single match case from a conformance fixture."""

    fixture_name: str
    case_name: str
    options: MatchOptions
    pathname: str
    expect: dict[str, Any] | None


@dataclass
class GenerateCase:
    """A single generate case from a conformance fixture."""

    fixture_name: str
    case_name: str
    pattern: str
    params: dict[str, Any]
    expect: str | None
    error: str | None


# ─── Fixture loading ────────────────────────────────────────────────────────


def _load_documents(name: str) -> list[dict[str, Any]]:
    path = FIXTURE_DIR / name
    with path.open() as f:
        return [doc for doc in yaml.safe_load_all(f) if doc is not None]


def load_match_fixtures() -> list[MatchCase]:
    """Load every case of fixtures/match.yaml."""
    cases: list[MatchCase] = []
    for doc in _load_documents("match.yaml"):
        options = MatchOptions(path=doc["pattern"], **doc.get("options", {}))
        for case in doc["cases"]:
            cases.append(
                MatchCase(
                    fixture_name=doc["name"],
                    case_name=case["name"],
                    options=options,
                    pathname=case["pathname"],
                    expect=case["expect"],
                )
            )
    return cases


def load_generate_fixtures() -> list[GenerateCase]:
    """Load every case of fixtures/generate.yaml."""
    cases: list[GenerateCase] = []
    for doc in _load_documents("generate.yaml"):
        for case in doc["cases"]:
            cases.append(
                GenerateCase(
                    fixture_name=doc["name"],
                    case_name=case["name"],
                    pattern=doc["pattern"],
                    params=case["params"],
                    expect=case.get("expect"),
                    error=case.get("error"),
                )
            )
    return cases


# ─── Shared fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def cache() -> PatternCache:
    """A fresh PatternCache, isolated from the process-wide one."""
    return PatternCache()


@pytest.fixture
def template_cache() -> TemplateCache:
    """A fresh TemplateCache, isolated from the process-wide one."""
    return TemplateCache()
