"""Listing title filter."""

from .models import RuleSet, RuleSetOverride, Verdict, merge_rule_sets
from .regex_parser import PatternError
from .validators import evaluate_title, filter_titles, passes_filter

__all__ = [
    "PatternError",
    "RuleSet",
    "RuleSetOverride",
    "Verdict",
    "evaluate_title",
    "filter_titles",
    "merge_rule_sets",
    "passes_filter",
]
