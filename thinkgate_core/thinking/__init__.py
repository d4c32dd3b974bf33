# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Thinking support: model classification and thinking budget normalization.
"""

from .budget import (
    DEFAULT_THINKING_BUDGET,
    DYNAMIC_BUDGET,
    ThinkingRange,
    ThinkingBudgetNormalizer,
    lookup_thinking_range,
    model_supports_thinking,
    normalize_thinking_budget,
)
from .classifier import (
    MatchKind,
    ThinkingRule,
    ModelClassifier,
    get_global_classifier,
    set_global_classifier,
    is_thinking_enabled_for_provider,
    is_antigravity_thinking_model,
    is_antigravity_claude_model,
    is_special_handling_model_family,
)
from .effort import ReasoningEffortConverter, get_global_converter, set_global_converter

__all__ = [
    'DEFAULT_THINKING_BUDGET',
    'DYNAMIC_BUDGET',
    'ThinkingRange',
    'ThinkingBudgetNormalizer',
    'lookup_thinking_range',
    'model_supports_thinking',
    'normalize_thinking_budget',
    'MatchKind',
    'ThinkingRule',
    'ModelClassifier',
    'get_global_classifier',
    'set_global_classifier',
    'is_thinking_enabled_for_provider',
    'is_antigravity_thinking_model',
    'is_antigravity_claude_model',
    'is_special_handling_model_family',
    'ReasoningEffortConverter',
    'get_global_converter',
    'set_global_converter',
]
