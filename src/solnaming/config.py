"""Rule configuration: parse and validate ``.solnaming.yml``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import yaml

from solnaming.naming.base import ConfigurationError
from solnaming.naming.reporter import VALID_SEVERITIES
from solnaming.naming.rules import RULES_BY_ID

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_CONFIG_NAME = ".solnaming.yml"
SUPPORTED_SCHEMA_VERSIONS: frozenset[int] = frozenset({1})
OFF = "off"
VALID_RULE_SETTINGS: frozenset[str] = VALID_SEVERITIES | {OFF}


@dataclass(frozen=True)
class LintConfig:
    """Per-rule settings: a severity, or ``"off"``.

    Rules missing from *rules* run at the severity they report with.
    """

    rules: dict[str, str] = field(default_factory=dict)

    @classmethod
    def default(cls) -> LintConfig:
        return cls()

    @property
    def enabled_rules(self) -> list[str]:
        return [rule_id for rule_id in RULES_BY_ID if self.rules.get(rule_id) != OFF]

    @property
    def severity_overrides(self) -> dict[str, str]:
        return {rule_id: value for rule_id, value in self.rules.items() if value != OFF}


def _parse_setting(rule_id: str, raw: object, source: str) -> str:
    # YAML 1.1 reads a bare ``off`` as False.
    if raw is False:
        return OFF
    setting = str(raw)
    if setting not in VALID_RULE_SETTINGS:
        msg = (
            f"{source}: rule '{rule_id}' has invalid setting '{setting}', "
            f"must be one of {sorted(VALID_RULE_SETTINGS)}"
        )
        raise ConfigurationError(msg)
    return setting


def parse_config(data: object, source: str = DEFAULT_CONFIG_NAME) -> LintConfig:
    """Validate an already-loaded YAML document.

    Raises ``ConfigurationError`` on schema errors.
    """
    if data is None:
        return LintConfig.default()
    if not isinstance(data, dict):
        msg = f"{source} must be a YAML mapping"
        raise ConfigurationError(msg)

    version = data.get("version")
    if version is None:
        msg = f"{source}: missing required 'version' field"
        raise ConfigurationError(msg)
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        expected = sorted(SUPPORTED_SCHEMA_VERSIONS)
        msg = f"{source}: unsupported version {version}, expected one of {expected}"
        raise ConfigurationError(msg)

    rules_data = data.get("rules", {})
    if rules_data is None:
        rules_data = {}
    if not isinstance(rules_data, dict):
        msg = f"{source}: 'rules' must be a mapping of rule id to setting"
        raise ConfigurationError(msg)

    rules: dict[str, str] = {}
    for rule_id, raw in rules_data.items():
        rule_id = str(rule_id)
        if rule_id not in RULES_BY_ID:
            msg = f"{source}: unknown rule '{rule_id}', must be one of {sorted(RULES_BY_ID)}"
            raise ConfigurationError(msg)
        rules[rule_id] = _parse_setting(rule_id, raw, source)

    return LintConfig(rules=rules)


def load_config(config_path: Path) -> LintConfig:
    """Load *config_path*; a missing file yields the default configuration."""
    if not config_path.is_file():
        return LintConfig.default()
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        msg = f"{config_path.name}: invalid YAML: {exc}"
        raise ConfigurationError(msg) from exc
    return parse_config(data, config_path.name)
