"""Conformance fixture loader for sire.

Loads YAML fixtures from tests/fixtures/ and converts them to pattern trees
for parametrized testing. Each document holds one pattern (in the config
dict shape) and the cases it must pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from sire import Pattern, parse_pattern

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single test case from a conformance fixture."""

    fixture_name: str
    case_name: str
    pattern: Pattern
    input: str
    pos: int
    expect: int | None

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_fixtures() -> list[FixtureCase]:
    """Load all conformance fixtures, in file order."""
    cases: list[FixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file))
    return cases


def _load_file(path: Path) -> list[FixtureCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[FixtureCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            fixture_name = doc["name"]
            pattern = parse_pattern(doc["pattern"])
            for case in doc["cases"]:
                cases.append(
                    FixtureCase(
                        fixture_name=fixture_name,
                        case_name=case["name"],
                        pattern=pattern,
                        input=str(case["input"]),
                        pos=case.get("pos", 0),
                        expect=case["expect"],
                    )
                )
    return cases
