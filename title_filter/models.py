"""Data models used across modules."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, List, Mapping, Optional, Tuple


LIST_FIELDS = ("blacklist", "whitelist", "words_to_strip", "grades_to_strip")


def _as_tuple(values: Any) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values)


@dataclass(frozen=True)
class RuleSet:
    """Full set of title filtering parameters (a "UEL setting")."""

    blacklist: Tuple[str, ...]
    whitelist: Tuple[str, ...]
    words_to_strip: Tuple[str, ...]
    grades_to_strip: Tuple[str, ...]
    emoji_regex: str
    punctuation_to_strip_regex: str
    punctuation_pattern_regex: str
    grade_punctuation_pattern_regex: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleSet":
        values = {}
        for f in fields(cls):
            # every field is required
            raw = data[f.name]
            if f.name in LIST_FIELDS:
                values[f.name] = _as_tuple(raw)
            else:
                values[f.name] = "" if raw is None else str(raw)
        return cls(**values)


@dataclass(frozen=True)
class RuleSetOverride:
    """Per card-set additions to the list fields of a RuleSet. None means absent."""

    blacklist: Optional[Tuple[str, ...]] = None
    whitelist: Optional[Tuple[str, ...]] = None
    words_to_strip: Optional[Tuple[str, ...]] = None
    grades_to_strip: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RuleSetOverride":
        data = data or {}
        return cls(**{name: _as_tuple(data[name]) for name in LIST_FIELDS if data.get(name) is not None})


@dataclass
class Verdict:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def merge_rule_sets(base: RuleSet, override: Optional[RuleSetOverride]) -> RuleSet:
    """Append override list entries after the base entries.

    Absent override fields keep the base list. The base RuleSet is never changed.
    """
    if override is None:
        return base
    changes = {}
    for name in LIST_FIELDS:
        extra = getattr(override, name)
        if extra is not None:
            changes[name] = tuple(getattr(base, name)) + tuple(extra)
    return replace(base, **changes)
