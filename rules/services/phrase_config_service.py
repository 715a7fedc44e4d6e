"""
Phrase Configuration Service
Loads YAML phrase catalogs and serves the compiled rules, cached per catalog path.
"""

import os
import logging
import threading
from typing import Any, Dict, Optional, Tuple

import yaml

from ..phrase_rule import PhraseRule, load_phrase_rules

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = os.path.join(os.path.dirname(__file__), '..', 'config', 'weak_phrases.yaml')


class PhraseConfigService:
    """
    Service for managing weak-phrase catalogs from YAML.
    Compiled rule sets are cached per resolved catalog path and shared by all
    instances, so each catalog file is read at most once per process.
    """

    _lock = threading.Lock()
    _config_cache: Dict[str, Tuple[PhraseRule, ...]] = {}

    def __init__(self, catalog_path: Optional[str] = None):
        self._catalog_path = os.path.realpath(catalog_path or DEFAULT_CATALOG_PATH)

    @classmethod
    def reset(cls):
        """Drop every cached catalog so the next lookup reloads from disk."""
        with cls._lock:
            cls._config_cache.clear()

    @property
    def catalog_path(self) -> str:
        return self._catalog_path

    def _load_yaml_config(self) -> Dict[str, Any]:
        if not os.path.exists(self._catalog_path):
            logger.warning(f"Phrase catalog not found at {self._catalog_path}; no phrases will be flagged")
            return {}

        with open(self._catalog_path, 'r', encoding='utf-8') as file:
            return yaml.safe_load(file) or {}

    def get_phrase_rules(self) -> Tuple[PhraseRule, ...]:
        """Get the compiled phrase rules in catalog order."""
        rules = self._config_cache.get(self._catalog_path)
        if rules is None:
            with self._lock:
                rules = self._config_cache.get(self._catalog_path)
                if rules is None:
                    rules = load_phrase_rules(self._load_yaml_config())
                    self._config_cache[self._catalog_path] = rules
                    logger.info(f"Loaded {len(rules)} phrase rules from {self._catalog_path}")
        return rules

    def get_rule(self, rule_id: str) -> Optional[PhraseRule]:
        for rule in self.get_phrase_rules():
            if rule.id == rule_id:
                return rule
        return None


def get_phrase_rules(catalog_path: Optional[str] = None) -> Tuple[PhraseRule, ...]:
    """Convenience accessor for a cached catalog (the packaged one by default)."""
    return PhraseConfigService(catalog_path).get_phrase_rules()
