# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Reasoning effort conversion.
Converts between OpenAI-style reasoning_effort levels and thinking token budgets.
"""

from typing import Dict, Optional
import logging

from ..registry import ModelRegistry
from .budget import DEFAULT_THINKING_BUDGET, DYNAMIC_BUDGET, ThinkingBudgetNormalizer

logger = logging.getLogger(__name__)

DISABLED_EFFORTS = ("none", "off")
DYNAMIC_EFFORTS = ("auto", "dynamic")


class ReasoningEffortConverter:
    """
    Converter between reasoning effort levels and thinking budgets.

    Effort levels: "none", "auto", "low", "medium", "high".
    Budgets produced by resolve_budget() are normalized for the target model.
    """

    # Default mappings (can be overridden in config)
    DEFAULT_EFFORT_BUDGETS = {
        "low": 2048,
        "medium": 8192,
        "high": 16384
    }

    DEFAULT_EFFORT_THRESHOLDS = {
        "low": 2048,      # tokens <= 2048 = low
        "high": 16384     # tokens >= 16384 = high, otherwise medium
    }

    def __init__(
        self,
        effort_budgets: Optional[Dict[str, int]] = None,
        effort_thresholds: Optional[Dict[str, int]] = None,
        default_budget: int = DEFAULT_THINKING_BUDGET,
        registry: Optional[ModelRegistry] = None
    ):
        """
        Initialize converter with custom mappings.

        Args:
            effort_budgets: Mapping from effort levels to thinking tokens
            effort_thresholds: Thresholds for converting thinking tokens back to effort levels
            default_budget: Budget used when neither a budget nor an effort is requested
            registry: Registry used for normalization, defaults to the global registry
        """
        self._effort_budgets = {**self.DEFAULT_EFFORT_BUDGETS, **(effort_budgets or {})}
        self._effort_thresholds = {**self.DEFAULT_EFFORT_THRESHOLDS, **(effort_thresholds or {})}
        self.default_budget = default_budget
        self._normalizer = ThinkingBudgetNormalizer(registry)

    def effort_to_budget(self, reasoning_effort: str) -> int:
        """
        Convert a reasoning effort level to a thinking token budget.

        Args:
            reasoning_effort: Effort level ("none", "auto", "low", "medium", "high")

        Returns:
            Number of thinking tokens, 0 for disabled or -1 for dynamic
        """
        effort = reasoning_effort.strip().lower()
        if effort in DISABLED_EFFORTS:
            return 0
        if effort in DYNAMIC_EFFORTS:
            return DYNAMIC_BUDGET

        tokens = self._effort_budgets.get(effort)
        if tokens is None:
            logger.warning(f"Unknown reasoning_effort: {reasoning_effort}, using medium")
            tokens = self._effort_budgets["medium"]

        logger.debug(f"Converted reasoning_effort '{reasoning_effort}' to {tokens} tokens")
        return tokens

    def budget_to_effort(self, thinking_budget: int) -> str:
        """
        Convert a thinking token budget to a reasoning effort level.

        Args:
            thinking_budget: Number of thinking tokens

        Returns:
            Effort level ("none", "auto", "low", "medium", "high")
        """
        if thinking_budget == DYNAMIC_BUDGET:
            return "auto"
        if thinking_budget == 0:
            return "none"
        if thinking_budget <= self._effort_thresholds["low"]:
            effort = "low"
        elif thinking_budget >= self._effort_thresholds["high"]:
            effort = "high"
        else:
            effort = "medium"

        logger.debug(f"Converted {thinking_budget} tokens to reasoning_effort '{effort}'")
        return effort

    def requested_budget(
        self,
        reasoning_effort: Optional[str] = None,
        budget: Optional[int] = None
    ) -> int:
        """
        Pick the budget a caller asked for, before normalization.

        An explicit budget wins over an effort level; with neither, the
        default budget is used.
        """
        if budget is not None:
            return budget
        if reasoning_effort:
            return self.effort_to_budget(reasoning_effort)
        return self.default_budget

    def resolve_budget(
        self,
        model_name: str,
        reasoning_effort: Optional[str] = None,
        budget: Optional[int] = None
    ) -> int:
        """Pick the requested budget and normalize it for the model."""
        requested = self.requested_budget(reasoning_effort, budget)
        return self._normalizer.normalize(model_name, requested)


# Global converter instance
_global_converter: Optional[ReasoningEffortConverter] = None


def get_global_converter() -> ReasoningEffortConverter:
    """Get the global reasoning effort converter"""
    global _global_converter
    if _global_converter is None:
        _global_converter = ReasoningEffortConverter()
    return _global_converter


def set_global_converter(converter: ReasoningEffortConverter):
    """Set the global reasoning effort converter"""
    global _global_converter
    _global_converter = converter
