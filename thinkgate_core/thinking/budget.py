# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Thinking budget normalization.
Clamps a requested thinking budget to the range a model declares in the registry.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from ..registry import ModelRegistry, get_global_registry

logger = logging.getLogger(__name__)

# Default budget used when enabling thinking without a requested value
DEFAULT_THINKING_BUDGET = 1024

# Sentinel meaning "let the model decide"
DYNAMIC_BUDGET = -1


@dataclass(frozen=True)
class ThinkingRange:
    """Thinking limits read from a model's registry metadata"""
    min: int
    max: int
    zero_allowed: bool
    dynamic_allowed: bool


def lookup_thinking_range(
    model_name: str,
    registry: Optional[ModelRegistry] = None
) -> Optional[ThinkingRange]:
    """
    Read the thinking range for a model from the registry.

    Args:
        model_name: Exact model identifier
        registry: Registry to query, defaults to the global registry

    Returns:
        ThinkingRange, or None when the model is unknown or has no thinking metadata
    """
    if not model_name:
        return None
    if registry is None:
        registry = get_global_registry()
    info = registry.get_model_info(model_name)
    if info is None or info.thinking is None:
        return None
    thinking = info.thinking
    return ThinkingRange(
        min=thinking.min,
        max=thinking.max,
        zero_allowed=thinking.zero_allowed,
        dynamic_allowed=thinking.dynamic_allowed,
    )


def model_supports_thinking(model_name: str, registry: Optional[ModelRegistry] = None) -> bool:
    """Report whether the registry declares thinking capability for the model."""
    return lookup_thinking_range(model_name, registry) is not None


class ThinkingBudgetNormalizer:
    """
    Normalizes thinking budgets against a model registry.

    Normalization never fails: unknown models pass the requested budget through
    and out-of-range values are corrected rather than rejected.
    """

    def __init__(self, registry: Optional[ModelRegistry] = None):
        self._registry = registry

    @property
    def registry(self) -> ModelRegistry:
        if self._registry is None:
            return get_global_registry()
        return self._registry

    def normalize(self, model_name: str, budget: int) -> int:
        """
        Compute the budget that is legal to send for a model.

        Args:
            model_name: Exact model identifier
            budget: Requested budget, -1 for dynamic

        Returns:
            Effective thinking budget
        """
        limits = lookup_thinking_range(model_name, self.registry)
        if limits is None:
            return budget

        if budget == DYNAMIC_BUDGET:
            effective = self._resolve_dynamic(limits)
        elif budget == 0:
            effective = 0 if limits.zero_allowed else limits.min
        elif budget < limits.min:
            effective = limits.min
        elif budget > limits.max:
            effective = limits.max
        else:
            effective = budget

        if effective != budget:
            logger.debug(f"Normalized thinking budget for '{model_name}': {budget} -> {effective}")
        return effective

    @staticmethod
    def _resolve_dynamic(limits: ThinkingRange) -> int:
        if limits.dynamic_allowed:
            return DYNAMIC_BUDGET
        # Provider needs an explicit value: approximate with the mid-range
        mid = (limits.min + limits.max) // 2
        if mid <= 0:
            return 0 if limits.zero_allowed else limits.min
        return mid


def normalize_thinking_budget(
    model_name: str,
    budget: int,
    registry: Optional[ModelRegistry] = None
) -> int:
    """
    Clamp the requested thinking budget to the model's supported range.

    For dynamic (-1) requests, returns -1 if the model allows dynamic budgets,
    otherwise the mid-range value (or 0/min when the mid-range is not positive).
    Unknown models and models without thinking metadata get the budget back unchanged.
    """
    return ThinkingBudgetNormalizer(registry).normalize(model_name, budget)
