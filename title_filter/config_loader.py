"""Config loading helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import RuleSet, RuleSetOverride


@dataclass
class ConfigBundle:
    rules: RuleSet
    card_sets: Dict[str, RuleSetOverride] = field(default_factory=dict)

    def override_for(self, card_set: Optional[str]) -> Optional[RuleSetOverride]:
        if not card_set:
            return None
        if card_set not in self.card_sets:
            raise ValueError(f"Unknown card set: {card_set}")
        return self.card_sets[card_set]


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")
    return data


def load_rule_set(path: Path) -> RuleSet:
    return RuleSet.from_dict(load_yaml(path))


def load_card_sets(path: Path) -> Dict[str, RuleSetOverride]:
    """Per card-set overrides; a missing file means no overrides."""
    if not path.exists():
        return {}
    card_sets = load_yaml(path).get("card_sets") or {}
    return {str(name): RuleSetOverride.from_dict(data) for name, data in card_sets.items()}


def load_all_configs(base_dir: str = "config") -> ConfigBundle:
    base = Path(base_dir)
    return ConfigBundle(
        rules=load_rule_set(base / "uel_settings.yaml"),
        card_sets=load_card_sets(base / "card_sets.yaml"),
    )
