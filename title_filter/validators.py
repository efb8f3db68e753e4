"""Listing title validation rules."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple

from .models import RuleSet, RuleSetOverride, Verdict, merge_rule_sets
from .regex_parser import compile_native, compile_regex

logger = logging.getLogger(__name__)

# (2) .. (9) usually marks a lot of several cards; (1) and (10) do not.
SINGLE_DIGIT_PARENTHESIS_RE = re.compile(r"\([2-9]\)", re.IGNORECASE)


def find_single_digit_parenthesis(title: str) -> List[str]:
    return SINGLE_DIGIT_PARENTHESIS_RE.findall(title)


def find_blacklisted_terms(title: str, blacklist: Iterable[str]) -> List[str]:
    """Return every blacklist term found literally (case-sensitive) in the title."""
    return [term for term in blacklist if term in title]


def strip_whitelisted(title: str, whitelist: Iterable[str]) -> str:
    """Delete whitelisted phrases so they cannot trip the word and grade checks."""
    for term in whitelist:
        title = compile_regex(f"/{term}/gi").sub("", title)
    return title


def strip_emoji(title: str, emoji_regex: str) -> str:
    return compile_regex(emoji_regex, "g").sub("", title)


def normalize_punctuation(title: str, punctuation_to_strip_regex: str) -> str:
    """Replace word-splitting punctuation with spaces and pad both ends.

    The padding lets the boundary patterns match words at the very start or
    end of the title.
    """
    pattern = compile_regex(punctuation_to_strip_regex, "g", double=True)
    return " " + pattern.sub(" ", title) + " "


def build_whole_word_pattern(words: Iterable[str], punctuation_pattern: str) -> Optional[re.Pattern]:
    """Alternation of ``words`` bounded by ``\\b`` and the punctuation fragment.

    Returns None when there are no words to look for.
    """
    alternation = "|".join(words)
    if not alternation:
        return None
    source = r"\b" + punctuation_pattern + "(" + alternation + ")" + punctuation_pattern + r"\b"
    return compile_native(source, re.IGNORECASE)


def find_whole_words(title: str, words: Iterable[str], punctuation_pattern: str) -> Optional[List[str]]:
    """Return the whole-word matches, or None when nothing matched."""
    pattern = build_whole_word_pattern(words, punctuation_pattern)
    if pattern is None:
        return None
    found = [m.group(0) for m in pattern.finditer(title)]
    return found or None


def evaluate_title(
    title: str,
    rules: RuleSet,
    override: Optional[RuleSetOverride] = None,
) -> Verdict:
    """Run every rule stage against the title and collect the diagnostics."""
    errors: List[str] = []

    parenthesis_matches = find_single_digit_parenthesis(title)
    if parenthesis_matches:
        errors.append(f"Matched with single digit between parenthesis: {','.join(parenthesis_matches)}")

    setting = merge_rule_sets(rules, override)

    for term in find_blacklisted_terms(title, setting.blacklist):
        errors.append(f"Matched with blacklisted term: {term}.")

    title = strip_whitelisted(title, setting.whitelist)

    title_to_check = strip_emoji(title, setting.emoji_regex)
    title_to_check = normalize_punctuation(title_to_check, setting.punctuation_to_strip_regex)

    word_matches = find_whole_words(title_to_check, setting.words_to_strip, setting.punctuation_pattern_regex)
    if word_matches is not None:
        errors.append(f"Matched with wordsToStrip: {','.join(word_matches)}.")

    # Grade tokens carry digits, so "PSA 1" must not match inside "PSA 10".
    grade_matches = find_whole_words(
        title_to_check, setting.grades_to_strip, setting.grade_punctuation_pattern_regex
    )
    if grade_matches is not None:
        errors.append(f"Matched with gradesToStrip: {','.join(grade_matches)}.")

    is_valid = len(errors) == 0 and grade_matches is None

    return Verdict(is_valid=is_valid, errors=errors)


def passes_filter(
    title: str,
    rules: RuleSet,
    override: Optional[RuleSetOverride] = None,
    debug: bool = False,
) -> Verdict:
    """Evaluate a title, logging each diagnostic when ``debug`` is set."""
    verdict = evaluate_title(title, rules, override)
    if debug:
        for message in verdict.errors:
            logger.info(message)
    return verdict


def filter_titles(
    titles: Iterable[str],
    rules: RuleSet,
    override: Optional[RuleSetOverride] = None,
    debug: bool = False,
) -> List[Tuple[str, Verdict]]:
    return [(title, passes_filter(title, rules, override, debug)) for title in titles]
