# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Model name classification.

Some providers expose thinking capability only through their model naming
scheme, so these predicates are expressed as ordered rule tables per provider.
Matching is case-sensitive and never normalizes the model name.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class MatchKind(Enum):
    """How a rule value is compared against a model name"""
    SUFFIX = "suffix"
    EXACT = "exact"
    PREFIX = "prefix"
    CONTAINS = "contains"


@dataclass(frozen=True)
class ThinkingRule:
    """A single (match kind, pattern) classification rule"""
    kind: MatchKind
    value: str

    def matches(self, model_name: str) -> bool:
        if self.kind == MatchKind.SUFFIX:
            return model_name.endswith(self.value)
        if self.kind == MatchKind.EXACT:
            return model_name == self.value
        if self.kind == MatchKind.PREFIX:
            return model_name.startswith(self.value)
        return self.value in model_name


ANTIGRAVITY_PROVIDER = "antigravity"

# Thinking is enabled for "-thinking" variants, gemini-2.5-pro (and its image
# variant) and the gemini-3-pro family.
ANTIGRAVITY_THINKING_RULES = (
    ThinkingRule(MatchKind.SUFFIX, "-thinking"),
    ThinkingRule(MatchKind.EXACT, "gemini-2.5-pro"),
    ThinkingRule(MatchKind.EXACT, "gemini-2.5-pro-image"),
    ThinkingRule(MatchKind.PREFIX, "gemini-3-pro-"),
)

# Claude models need top_p removed when thinking is enabled
SPECIAL_HANDLING_RULE = ThinkingRule(MatchKind.CONTAINS, "claude")


class ModelClassifier:
    """
    Per-provider thinking rule tables.

    Tables are replaced, never edited in place, under a lock, so a lookup
    always sees a complete table.
    """

    def __init__(self, rules: Optional[Dict[str, Iterable[ThinkingRule]]] = None):
        self._lock = threading.RLock()
        self._rules: Dict[str, Tuple[ThinkingRule, ...]] = {
            ANTIGRAVITY_PROVIDER: ANTIGRAVITY_THINKING_RULES,
        }
        for provider, provider_rules in (rules or {}).items():
            self.register_rules(provider, provider_rules)

    def register_rules(self, provider: str, rules: Iterable[ThinkingRule], replace: bool = False):
        """
        Add thinking rules for a provider.

        Args:
            provider: Provider identifier
            rules: Rules appended to the provider's table, in order
            replace: Drop the provider's existing rules first
        """
        rules = tuple(rules)
        with self._lock:
            existing = () if replace else self._rules.get(provider, ())
            self._rules[provider] = existing + rules
        logger.info(f"Registered {len(rules)} thinking rules for provider: {provider}")

    def _table(self, provider: str) -> Tuple[ThinkingRule, ...]:
        with self._lock:
            return self._rules.get(provider, ())

    def get_rules(self, provider: str) -> List[ThinkingRule]:
        return list(self._table(provider))

    def get_providers(self) -> List[str]:
        with self._lock:
            return list(self._rules.keys())

    def is_thinking_enabled(self, provider: str, model_name: str) -> bool:
        """Return True when any of the provider's rules matches the model name"""
        for rule in self._table(provider):
            if rule.matches(model_name):
                logger.debug(f"Model '{model_name}' matched {provider} rule {rule.kind.value}:{rule.value}")
                return True
        return False

    def providers_enabling(self, model_name: str) -> List[str]:
        """List providers whose rules enable thinking for the model"""
        return [p for p in self.get_providers() if self.is_thinking_enabled(p, model_name)]


# Global classifier instance
_global_classifier: Optional[ModelClassifier] = None
_global_lock = threading.Lock()


def get_global_classifier() -> ModelClassifier:
    """Get the global model classifier"""
    global _global_classifier
    with _global_lock:
        if _global_classifier is None:
            _global_classifier = ModelClassifier()
        return _global_classifier


def set_global_classifier(classifier: ModelClassifier):
    """Set the global model classifier"""
    global _global_classifier
    with _global_lock:
        _global_classifier = classifier


def is_thinking_enabled_for_provider(
    provider: str,
    model_name: str,
    classifier: Optional[ModelClassifier] = None
) -> bool:
    """Decide whether thinking should be enabled for a model under a provider."""
    return (classifier or get_global_classifier()).is_thinking_enabled(provider, model_name)


def is_antigravity_thinking_model(model_name: str) -> bool:
    """
    Determine if a model should have thinking enabled on the Antigravity provider.

    Matches names ending with "-thinking", gemini-2.5-pro, gemini-2.5-pro-image
    and names starting with "gemini-3-pro-".
    """
    return any(rule.matches(model_name) for rule in ANTIGRAVITY_THINKING_RULES)


def is_special_handling_model_family(model_name: str) -> bool:
    """Check whether the model belongs to a family whose payload needs adjusting when thinking is on."""
    return SPECIAL_HANDLING_RULE.matches(model_name)


def is_antigravity_claude_model(model_name: str) -> bool:
    """Claude models served through Antigravity require removal of top_p when thinking."""
    return is_special_handling_model_family(model_name)
