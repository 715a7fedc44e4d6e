"""Weak-phrase analysis and rewrite suggestions."""

from .phrase_analyzer import AnalysisResult, Finding, PhraseAnalyzer, build_tailoring_note

__all__ = ['AnalysisResult', 'Finding', 'PhraseAnalyzer', 'build_tailoring_note']
