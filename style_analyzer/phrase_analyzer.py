"""
Phrase Analyzer Module
Scans text for weak or unconfident phrasing and proposes a best-effort rewrite.
"""

import re
import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from rules import PhrasePattern, PhraseRule, get_phrase_rules

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3
GENERIC_NOTE = "Generic (no profile provided)."
NOTE_SEPARATOR = " · "


@dataclass(frozen=True)
class Finding:
    """A single detected occurrence of a weak phrase."""
    rule_id: str
    matched_text: str
    start: int
    end: int
    category: str
    severity: int
    suggestions: Tuple[str, ...]
    rationale: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire format returned by the analyze endpoint"""
        return {
            'id': self.rule_id,
            'match': self.matched_text,
            'start': self.start,
            'end': self.end,
            'category': self.category,
            'severity': self.severity,
            'suggestions': list(self.suggestions),
            'rationale': self.rationale,
        }


@dataclass(frozen=True)
class AnalysisResult:
    input_text: str
    findings: Tuple[Finding, ...] = field(default_factory=tuple)
    suggested_rewrite: str = ''
    tailoring_note: str = GENERIC_NOTE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'input': self.input_text,
            'findings': [f.to_dict() for f in self.findings],
            'suggestion': self.suggested_rewrite,
            'personalization_note': self.tailoring_note,
        }


def _note_text(value: Any) -> str:
    # Render JSON scalars the way they appear on the wire (true, 5 rather than True, 5.0)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join(_note_text(v) for v in value)
    return str(value)


def build_tailoring_note(industry: Any = None, goal: Any = None) -> str:
    parts = [_note_text(part) for part in (industry, goal) if part]
    if not parts:
        return GENERIC_NOTE
    return f"Tailored for {NOTE_SEPARATOR.join(parts)} (v1 heuristic)."


def replace_first_literal(text: str, literal: str, replacement: str) -> str:
    """
    Replace the first case-insensitive occurrence of ``literal`` in ``text``.

    Returns the text unchanged when the literal no longer occurs or the
    substitution cannot be performed.
    """
    try:
        return re.sub(re.escape(literal), lambda _m: replacement, text, count=1, flags=re.IGNORECASE)
    except re.error as e:
        logger.debug(f"Skipping rewrite step for {literal!r}: {e}")
        return text


class PhraseAnalyzer:
    """
    Applies an ordered phrase rule set to text.

    Findings come out in rule/pattern evaluation order rather than by position.
    A pattern reports only its first match unless it is marked exhaustive.
    """

    def __init__(self, rules: Optional[Sequence[PhraseRule]] = None):
        self.rules: Tuple[PhraseRule, ...] = tuple(rules) if rules is not None else get_phrase_rules()

    def _iter_matches(self, pattern: PhrasePattern, text: str) -> Iterator[re.Match]:
        if pattern.exhaustive:
            yield from pattern.regex.finditer(text)
            return
        match = pattern.regex.search(text)
        if match is not None:
            yield match

    def find_phrases(self, text: str) -> List[Finding]:
        findings = []
        for rule in self.rules:
            suggestions = rule.replacements[:MAX_SUGGESTIONS]
            for pattern in rule.patterns:
                for match in self._iter_matches(pattern, text):
                    findings.append(Finding(
                        rule_id=rule.id,
                        matched_text=match.group(0),
                        start=match.start(),
                        end=match.end(),
                        category=rule.category,
                        severity=rule.severity,
                        suggestions=suggestions,
                        rationale=rule.rationale,
                    ))
        return findings

    def build_rewrite(self, text: str, findings: Sequence[Finding]) -> str:
        """Substitute each finding's top suggestion, in order, skipping phrases already consumed."""
        return reduce(
            lambda current, f: replace_first_literal(current, f.matched_text, f.suggestions[0]),
            findings,
            text,
        )

    def analyze(self, text: str, context: Optional[Mapping[str, Any]] = None) -> AnalysisResult:
        """
        Analyze text for weak phrasing.

        Args:
            text: Raw input text
            context: Optional tailoring context with ``industry`` and/or ``goal``

        Returns:
            AnalysisResult holding findings, the suggested rewrite and a tailoring note
        """
        context = context or {}
        findings = self.find_phrases(text)
        suggestion = self.build_rewrite(text, findings)
        note = build_tailoring_note(context.get('industry'), context.get('goal'))

        logger.debug(f"Phrase analysis: {len(findings)} findings over {len(text)} chars")
        return AnalysisResult(
            input_text=text,
            findings=tuple(findings),
            suggested_rewrite=suggestion,
            tailoring_note=note,
        )
