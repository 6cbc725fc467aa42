"""Rule types and the pattern registry."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from hookguard.errors import ConfigError


@dataclass(frozen=True)
class Rule:
    """A named sensitive-data pattern."""

    name: str
    pattern: re.Pattern
    description: str = ""

    @classmethod
    def compile(cls, name: str, expression: str, description: str = "") -> "Rule":
        return cls(name=name, pattern=re.compile(expression, re.IGNORECASE), description=description)

    def matches(self, content: str) -> bool:
        """Search each line on its own, so no part of a match spans a newline."""

        return any(self.pattern.search(line) for line in content.split("\n"))


@dataclass(frozen=True)
class Exclusion:
    """Skip one rule for paths containing any of ``path_substrings``."""

    rule_name: str
    path_substrings: Tuple[str, ...]

    def applies(self, rule: Rule, file_path: str) -> bool:
        if rule.name != self.rule_name:
            return False
        return any(fragment in file_path for fragment in self.path_substrings)


@dataclass(frozen=True)
class ScanContext:
    """Bundle the files to scan with a human-readable label."""

    label: str
    files: Tuple[str, ...] = ()

    @classmethod
    def of(cls, label: str, files: Iterable[str]) -> "ScanContext":
        return cls(label=label, files=tuple(files))


class PatternRegistry:
    """Read-only, ordered catalog of rules plus their exclusions."""

    def __init__(self, rules: Iterable[Rule], exclusions: Iterable[Exclusion] = ()) -> None:
        self._rules: Tuple[Rule, ...] = tuple(rules)
        self._by_name: Dict[str, Rule] = {}
        for rule in self._rules:
            if rule.name in self._by_name:
                raise ValueError(f"Duplicate rule name: {rule.name}")
            self._by_name[rule.name] = rule
        self._exclusions: Tuple[Exclusion, ...] = tuple(exclusions)
        for exclusion in self._exclusions:
            if exclusion.rule_name not in self._by_name:
                raise ConfigError(f"Exclusion references unknown rule: {exclusion.rule_name}")

    def rules(self) -> Tuple[Rule, ...]:
        """Return every rule in declaration order."""

        return self._rules

    @property
    def exclusions(self) -> Tuple[Exclusion, ...]:
        return self._exclusions

    def get_rule(self, name: str) -> Rule:
        return self._by_name[name]

    def is_excluded(self, rule: Rule, file_path: str) -> bool:
        return any(exclusion.applies(rule, file_path) for exclusion in self._exclusions)

    def with_exclusions(self, extra: Iterable[Exclusion]) -> "PatternRegistry":
        """Return a new registry with ``extra`` appended to the exclusion table."""

        return PatternRegistry(self._rules, self._exclusions + tuple(extra))

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)
