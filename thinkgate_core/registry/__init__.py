# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Model capability registry.
Single source of truth for per-model thinking ranges.
"""

from .model_registry import ModelRegistry, get_global_registry, set_global_registry
from .defaults import BUILTIN_MODELS, register_builtin_models

__all__ = [
    'ModelRegistry',
    'get_global_registry',
    'set_global_registry',
    'BUILTIN_MODELS',
    'register_builtin_models',
]
