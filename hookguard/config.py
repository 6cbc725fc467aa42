"""Load ``.hookguard.yml`` into a typed configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Tuple

import yaml

from .errors import ConfigError
from .report import COLOR_MODES
from .rules import Exclusion
from .utils import read_yaml_file

CONFIG_FILENAME = ".hookguard.yml"
DEFAULT_MAIN_BRANCHES = ("main", "master")
DEFAULT_DEV_SERVER_URL = "http://localhost:3000"


class Capability(str, Enum):
    """Quality checks a repository may opt out of."""

    TYPECHECK = "typecheck"
    LINT = "lint"
    BUILD = "build"
    E2E = "e2e"


@dataclass(frozen=True)
class HookConfig:
    """Settings shared by every hook invocation."""

    color: str = "auto"
    skip: Dict[str, FrozenSet[Capability]] = field(default_factory=dict)
    exclusions: Tuple[Exclusion, ...] = ()
    main_branches: Tuple[str, ...] = DEFAULT_MAIN_BRANCHES
    dev_server_url: str = DEFAULT_DEV_SERVER_URL

    def skipped_for(self, repo_name: str) -> FrozenSet[Capability]:
        return self.skip.get(repo_name, frozenset())

    def is_main_branch(self, branch: str) -> bool:
        return branch in self.main_branches


def load_config(path: Path) -> HookConfig:
    """Read ``path``; a missing file yields the defaults."""

    try:
        data = read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return HookConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return parse_config(data, source=str(path))


def parse_config(data: Dict[str, Any], source: str = CONFIG_FILENAME) -> HookConfig:
    unknown = set(data) - {"color", "skip", "exclusions", "main_branches", "dev_server_url"}
    if unknown:
        raise ConfigError(f"{source}: unknown keys: {', '.join(sorted(unknown))}")

    color = str(data.get("color", "auto"))
    if color not in COLOR_MODES:
        raise ConfigError(f"{source}: color must be one of {', '.join(COLOR_MODES)}")

    return HookConfig(
        color=color,
        skip=_parse_skip(data.get("skip") or {}, source),
        exclusions=_parse_exclusions(data.get("exclusions") or [], source),
        main_branches=_string_tuple(data.get("main_branches", DEFAULT_MAIN_BRANCHES), "main_branches", source),
        dev_server_url=str(data.get("dev_server_url", DEFAULT_DEV_SERVER_URL)),
    )


def _parse_skip(raw: Any, source: str) -> Dict[str, FrozenSet[Capability]]:
    if not isinstance(raw, dict):
        raise ConfigError(f"{source}: skip must map repository names to capability lists")
    skip: Dict[str, FrozenSet[Capability]] = {}
    for repo_name, names in raw.items():
        capabilities = set()
        for name in _string_tuple(names, f"skip.{repo_name}", source):
            try:
                capabilities.add(Capability(name))
            except ValueError as exc:
                choices = ", ".join(capability.value for capability in Capability)
                raise ConfigError(f"{source}: skip.{repo_name}: unknown capability {name!r} ({choices})") from exc
        skip[str(repo_name)] = frozenset(capabilities)
    return skip


def _parse_exclusions(raw: Any, source: str) -> Tuple[Exclusion, ...]:
    if not isinstance(raw, list):
        raise ConfigError(f"{source}: exclusions must be a list")
    exclusions = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict) or "rule" not in entry or "paths" not in entry:
            raise ConfigError(f"{source}: exclusions[{index}] needs 'rule' and 'paths'")
        paths = _string_tuple(entry["paths"], f"exclusions[{index}].paths", source)
        exclusions.append(Exclusion(rule_name=str(entry["rule"]), path_substrings=paths))
    return tuple(exclusions)


def _string_tuple(value: Any, key: str, source: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable) and not isinstance(value, dict):
        return tuple(str(item) for item in value)
    raise ConfigError(f"{source}: {key} must be a string or a list of strings")
