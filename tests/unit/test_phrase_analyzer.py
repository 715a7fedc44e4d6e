"""
Unit tests for the Phrase Analyzer.

Covers finding offsets and ordering, the first-occurrence scanning behavior,
the best-effort rewrite, and tailoring notes.
"""

import pytest

from rules import PhraseConfigService, load_phrase_rules
from style_analyzer import PhraseAnalyzer, build_tailoring_note
from style_analyzer.phrase_analyzer import GENERIC_NOTE, replace_first_literal


@pytest.fixture(scope="module")
def analyzer():
    """Analyzer over the packaged catalog."""
    PhraseConfigService.reset()
    yield PhraseAnalyzer()
    PhraseConfigService.reset()


def _custom_analyzer(*entries):
    return PhraseAnalyzer(load_phrase_rules({'phrases': list(entries)}))


class TestFindings:
    """Findings carry correct offsets and rule metadata."""

    SAMPLE = "I just wanted to say, to be honest, I feel like this is late"

    def test_sample_sentence_reports_three_rules(self, analyzer):
        result = analyzer.analyze(self.SAMPLE)

        by_id = {f.rule_id: f for f in result.findings}
        assert set(by_id) == {'just', 'to_be_honest', 'i_feel_like'}
        assert (by_id['just'].start, by_id['just'].end) == (2, 6)
        assert (by_id['to_be_honest'].start, by_id['to_be_honest'].end) == (22, 34)
        assert (by_id['i_feel_like'].start, by_id['i_feel_like'].end) == (36, 47)

    def test_spans_slice_back_to_matched_text(self, analyzer):
        result = analyzer.analyze(self.SAMPLE)

        for finding in result.findings:
            assert self.SAMPLE[finding.start:finding.end] == finding.matched_text

    def test_findings_follow_catalog_order_not_position(self, analyzer):
        result = analyzer.analyze(self.SAMPLE)

        assert [f.rule_id for f in result.findings] == ['to_be_honest', 'i_feel_like', 'just']

    def test_matched_text_keeps_original_case(self, analyzer):
        result = analyzer.analyze("No Worries at all.")

        assert result.findings[0].matched_text == "No Worries"
        assert result.findings[0].category == 'casualism'

    def test_suggestions_are_prefix_of_replacements(self, analyzer):
        result = analyzer.analyze(self.SAMPLE)

        rules = {rule.id: rule for rule in analyzer.rules}
        for finding in result.findings:
            replacements = rules[finding.rule_id].replacements
            assert 1 <= len(finding.suggestions) <= 3
            assert finding.suggestions == replacements[:len(finding.suggestions)]

    def test_four_replacements_truncated_to_three(self, analyzer):
        result = analyzer.analyze("to be honest")

        assert result.findings[0].suggestions == ("Candidly,", "I want to be clear:", "Here’s my view:")

    def test_no_catalog_phrase_returns_input_unchanged(self, analyzer):
        text = "The quarterly report is ready for review."
        result = analyzer.analyze(text)

        assert result.findings == ()
        assert result.suggested_rewrite == text

    def test_empty_string(self, analyzer):
        result = analyzer.analyze("")

        assert result.findings == ()
        assert result.suggested_rewrite == ""
        assert result.tailoring_note == GENERIC_NOTE


class TestScanningBehavior:
    """Only exhaustive patterns report repeated occurrences."""

    def test_repeated_phrase_reported_once(self, analyzer):
        text = "Just checking, I just need the file."
        result = analyzer.analyze(text)

        just = [f for f in result.findings if f.rule_id == 'just']
        assert len(just) == 1
        assert just[0].start == 0

    def test_leading_opener_matched_by_both_patterns(self, analyzer):
        result = analyzer.analyze("To be honest, the launch slipped.")

        honest = [f for f in result.findings if f.rule_id == 'to_be_honest']
        assert len(honest) == 2
        assert all(f.start == 0 for f in honest)

    def test_non_ascii_letter_counts_as_word_boundary(self, analyzer):
        text = "éjust déjà vu"
        result = analyzer.analyze(text)

        just = [f for f in result.findings if f.rule_id == 'just']
        assert [(f.start, f.end) for f in just] == [(1, 5)]
        assert text[1:5] == "just"

    def test_exhaustive_pattern_reports_every_occurrence(self):
        analyzer = _custom_analyzer({
            'id': 'actually',
            'category': 'filler',
            'severity': 1,
            'patterns': [{'pattern': r'\bactually\b', 'exhaustive': True}],
            'replacements': ['In fact'],
        })
        text = "Actually, it actually works"

        result = analyzer.analyze(text)

        assert [f.start for f in result.findings] == [0, 13]
        assert [text[f.start:f.end] for f in result.findings] == ['Actually', 'actually']


class TestSuggestedRewrite:
    """The rewrite substitutes top suggestions once each, in finding order."""

    def test_top_suggestion_replaces_phrase(self, analyzer):
        result = analyzer.analyze("Well, to be honest, we missed it.")

        assert "Candidly," in result.suggested_rewrite
        assert "to be honest" not in result.suggested_rewrite

    def test_replacement_is_case_insensitive(self, analyzer):
        result = analyzer.analyze("Well, TO BE HONEST, we missed it.")

        assert result.suggested_rewrite == "Well, Candidly,, we missed it."

    def test_sample_sentence_rewrite(self, analyzer):
        result = analyzer.analyze(TestFindings.SAMPLE)

        assert result.suggested_rewrite == (
            "I I’m following up on wanted to say, Candidly,, The data indicates this is late"
        )

    def test_consumed_phrase_is_skipped(self, analyzer):
        result = analyzer.analyze("To be honest, the launch slipped.")

        assert result.suggested_rewrite == "Candidly,, the launch slipped."

    def test_only_first_occurrence_rewritten(self, analyzer):
        result = analyzer.analyze("no worries, no worries")

        assert result.suggested_rewrite == "All good., no worries"

    def test_exhaustive_findings_rewrite_each_occurrence(self):
        analyzer = _custom_analyzer({
            'id': 'actually',
            'patterns': [{'pattern': r'\bactually\b', 'exhaustive': True}],
            'replacements': ['In fact'],
        })

        result = analyzer.analyze("Actually, it actually works")

        assert result.suggested_rewrite == "In fact, it In fact works"

    def test_replacement_text_is_literal(self):
        analyzer = _custom_analyzer({
            'id': 'path',
            'patterns': [r'\bsomewhere\b'],
            'replacements': [r'C:\new\1'],
        })

        result = analyzer.analyze("Save it somewhere.")

        assert result.suggested_rewrite == r"Save it C:\new\1."

    def test_regex_metacharacters_in_match(self):
        analyzer = _custom_analyzer({
            'id': 'question',
            'patterns': [r'right\?'],
            'replacements': ['correct.'],
        })

        result = analyzer.analyze("That works, right? Yes.")

        assert result.suggested_rewrite == "That works, correct. Yes."

    def test_analyze_is_idempotent(self, analyzer):
        first = analyzer.analyze(TestFindings.SAMPLE, {'industry': 'Finance'})
        second = analyzer.analyze(TestFindings.SAMPLE, {'industry': 'Finance'})

        assert first.findings == second.findings
        assert first.suggested_rewrite == second.suggested_rewrite


class TestReplaceFirstLiteral:

    def test_missing_literal_leaves_text_unchanged(self):
        assert replace_first_literal("nothing here", "just", "x") == "nothing here"

    def test_replaces_once(self):
        assert replace_first_literal("Just just", "just", "x") == "x just"


class TestTailoringNote:

    @pytest.mark.parametrize("industry, goal, expected", [
        ("Finance", "Promotion", "Tailored for Finance · Promotion (v1 heuristic)."),
        ("Finance", None, "Tailored for Finance (v1 heuristic)."),
        (None, "Promotion", "Tailored for Promotion (v1 heuristic)."),
        ("", "", GENERIC_NOTE),
        (None, None, GENERIC_NOTE),
        (5, None, "Tailored for 5 (v1 heuristic)."),
        (True, 2.0, "Tailored for true · 2 (v1 heuristic)."),
        (["Sales", "Ops"], None, "Tailored for Sales,Ops (v1 heuristic)."),
        (0, False, GENERIC_NOTE),
    ])
    def test_note(self, industry, goal, expected):
        assert build_tailoring_note(industry, goal) == expected

    def test_context_flows_into_result(self, analyzer):
        result = analyzer.analyze("", {'industry': 'Healthcare', 'goal': 'Lead meetings'})

        assert result.tailoring_note == "Tailored for Healthcare · Lead meetings (v1 heuristic)."

    def test_to_dict_wire_format(self, analyzer):
        payload = analyzer.analyze("Sorry to bother you").to_dict()

        assert set(payload) == {'input', 'findings', 'suggestion', 'personalization_note'}
        assert payload['findings'][0] == {
            'id': 'sorry_to_bother',
            'match': 'Sorry to bother',
            'start': 0,
            'end': 15,
            'category': 'apology',
            'severity': 2,
            'suggestions': ['Quick question:', 'When you have a moment:', 'Request:'],
            'rationale': 'Unnecessary apology reduces authority. Be courteous without diminishing yourself.',
        }
        assert payload['suggestion'] == "Quick question: you"
