"""
Phrase Rule Definitions
Immutable records describing one category of weak or unconfident phrasing,
and the loader that turns a parsed catalog mapping into compiled rules.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

# \b, \w and \s are ASCII-only; a non-ASCII letter next to a phrase is a word boundary
PATTERN_FLAGS = re.IGNORECASE | re.ASCII


class PhraseCatalogError(ValueError):
    """Raised when a phrase catalog entry cannot be turned into a rule."""


@dataclass(frozen=True)
class PhrasePattern:
    """A compiled, case-insensitive detection pattern.

    ``exhaustive`` patterns report every non-overlapping occurrence; all
    other patterns stop after the first match.
    """
    regex: re.Pattern
    exhaustive: bool = False

    @property
    def source(self) -> str:
        return self.regex.pattern

    def to_dict(self) -> Dict[str, Any]:
        return {'pattern': self.source, 'exhaustive': self.exhaustive}


@dataclass(frozen=True)
class PhraseRule:
    """A named pattern-plus-metadata definition for one kind of weak phrasing."""
    id: str
    patterns: Tuple[PhrasePattern, ...]
    category: str
    severity: int
    replacements: Tuple[str, ...]
    rationale: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'category': self.category,
            'severity': self.severity,
            'patterns': [p.to_dict() for p in self.patterns],
            'replacements': list(self.replacements),
            'rationale': self.rationale,
        }


def _compile_pattern(rule_id: str, entry: Any) -> PhrasePattern:
    # Bare strings are accepted as shorthand for {'pattern': ...}
    if isinstance(entry, str):
        entry = {'pattern': entry}
    if not isinstance(entry, dict) or not entry.get('pattern'):
        raise PhraseCatalogError(f"Rule '{rule_id}' has a pattern entry without a 'pattern' value")

    try:
        regex = re.compile(entry['pattern'], PATTERN_FLAGS)
    except re.error as e:
        raise PhraseCatalogError(f"Rule '{rule_id}' has an invalid pattern {entry['pattern']!r}: {e}") from e

    return PhrasePattern(regex=regex, exhaustive=bool(entry.get('exhaustive', False)))


def build_phrase_rule(entry: Dict[str, Any]) -> PhraseRule:
    """Validate one catalog entry and compile it into a PhraseRule."""
    if not isinstance(entry, dict):
        raise PhraseCatalogError(f"Catalog entry must be a mapping, got {type(entry).__name__}")

    rule_id = entry.get('id')
    if not rule_id or not isinstance(rule_id, str):
        raise PhraseCatalogError("Catalog entry is missing an 'id'")

    raw_patterns = entry.get('patterns') or []
    if not raw_patterns:
        raise PhraseCatalogError(f"Rule '{rule_id}' defines no patterns")

    replacements = [str(r) for r in (entry.get('replacements') or [])]
    if not replacements:
        raise PhraseCatalogError(f"Rule '{rule_id}' defines no replacements")

    severity = entry.get('severity', 1)
    if isinstance(severity, bool) or not isinstance(severity, int) or severity < 1:
        raise PhraseCatalogError(f"Rule '{rule_id}' has invalid severity {severity!r}")

    return PhraseRule(
        id=rule_id,
        patterns=tuple(_compile_pattern(rule_id, p) for p in raw_patterns),
        category=str(entry.get('category', 'uncategorized')),
        severity=severity,
        replacements=tuple(replacements),
        rationale=str(entry.get('rationale', '')).strip(),
    )


def load_phrase_rules(data: Optional[Dict[str, Any]]) -> Tuple[PhraseRule, ...]:
    """
    Compile a parsed catalog mapping into an ordered tuple of rules.

    Args:
        data: Mapping with a ``phrases`` list, as loaded from the YAML catalog

    Returns:
        Rules in catalog order

    Raises:
        PhraseCatalogError: If any entry is malformed or an id repeats
    """
    entries: List[Any] = (data or {}).get('phrases') or []
    rules = []
    seen = set()
    for entry in entries:
        rule = build_phrase_rule(entry)
        if rule.id in seen:
            raise PhraseCatalogError(f"Duplicate rule id '{rule.id}'")
        seen.add(rule.id)
        rules.append(rule)
    return tuple(rules)
