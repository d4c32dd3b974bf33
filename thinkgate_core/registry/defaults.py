# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Built-in model definitions with their thinking ranges.
"""

from typing import Dict, List

from ..models import ModelInfo, ThinkingSupport
from .model_registry import ModelRegistry

GEMINI_MODELS: List[ModelInfo] = [
    ModelInfo(
        id="gemini-2.5-pro",
        owned_by="google",
        display_name="Gemini 2.5 Pro",
        thinking=ThinkingSupport(min=128, max=32768, zero_allowed=False, dynamic_allowed=True),
    ),
    ModelInfo(
        id="gemini-2.5-flash",
        owned_by="google",
        display_name="Gemini 2.5 Flash",
        thinking=ThinkingSupport(min=0, max=24576, zero_allowed=True, dynamic_allowed=True),
    ),
    ModelInfo(
        id="gemini-2.5-flash-lite",
        owned_by="google",
        display_name="Gemini 2.5 Flash Lite",
        thinking=ThinkingSupport(min=512, max=24576, zero_allowed=True, dynamic_allowed=True),
    ),
    ModelInfo(
        id="gemini-3-pro-preview",
        owned_by="google",
        display_name="Gemini 3 Pro Preview",
        thinking=ThinkingSupport(min=128, max=32768, zero_allowed=False, dynamic_allowed=True),
    ),
    # Image model: thinking is driven by naming convention only
    ModelInfo(id="gemini-2.5-pro-image", owned_by="google", display_name="Gemini 2.5 Pro Image"),
]

CLAUDE_MODELS: List[ModelInfo] = [
    ModelInfo(
        id="claude-sonnet-4-5-20250929",
        owned_by="anthropic",
        display_name="Claude Sonnet 4.5",
        thinking=ThinkingSupport(min=1024, max=100000, zero_allowed=False, dynamic_allowed=False),
    ),
    ModelInfo(
        id="claude-opus-4-1-20250805",
        owned_by="anthropic",
        display_name="Claude Opus 4.1",
        thinking=ThinkingSupport(min=1024, max=100000, zero_allowed=False, dynamic_allowed=False),
    ),
    ModelInfo(
        id="gemini-claude-sonnet-4-5-thinking",
        owned_by="antigravity",
        display_name="Claude Sonnet 4.5 Thinking (Antigravity)",
        thinking=ThinkingSupport(min=1024, max=200000, zero_allowed=False, dynamic_allowed=True),
    ),
]

BUILTIN_MODELS: Dict[str, List[ModelInfo]] = {
    "gemini": GEMINI_MODELS,
    "claude": CLAUDE_MODELS,
}


def register_builtin_models(registry: ModelRegistry):
    """Register every built-in provider model list with the registry."""
    for provider, models in BUILTIN_MODELS.items():
        registry.register_models(provider, models)
