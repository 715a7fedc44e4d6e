"""
Phrase Rules Package

This package provides:
- PhraseRule / PhrasePattern: immutable rule records
- load_phrase_rules: compiles a parsed catalog into ordered rules
- PhraseConfigService: loads the packaged YAML catalog once per process
"""

from .phrase_rule import PhraseCatalogError, PhrasePattern, PhraseRule, build_phrase_rule, load_phrase_rules
from .services.phrase_config_service import PhraseConfigService, get_phrase_rules

__all__ = [
    'PhraseCatalogError',
    'PhrasePattern',
    'PhraseRule',
    'build_phrase_rule',
    'load_phrase_rules',
    'PhraseConfigService',
    'get_phrase_rules',
]
