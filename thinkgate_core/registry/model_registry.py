# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Model capability registry.
Maps model identifiers to capability metadata, including thinking ranges.
"""

import threading
from typing import Dict, Iterable, List, Optional
import logging

from ..models import ModelInfo

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Thread-safe registry of model capabilities.

    Models are registered per provider so a provider's models can be replaced
    or removed as a group. When two providers register the same model id, the
    most recent registration wins for lookups.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._models: Dict[str, ModelInfo] = {}
        # Insertion order is registration order, most recent last
        self._provider_models: Dict[str, Dict[str, ModelInfo]] = {}

    def register_models(self, provider: str, models: Iterable[ModelInfo]):
        """
        Register (or replace) the models offered by a provider.

        Args:
            provider: Provider identifier (gemini, claude, config, ...)
            models: Model metadata to register
        """
        models = list(models)
        with self._lock:
            self._drop_provider(provider)
            self._provider_models[provider] = {info.id: info for info in models}
            for info in models:
                self._models[info.id] = info
        logger.info(f"Registered {len(models)} models for provider: {provider}")

    def unregister_provider(self, provider: str) -> int:
        """
        Remove every model registered by a provider.

        Returns:
            Number of models removed
        """
        with self._lock:
            removed = self._drop_provider(provider)
        if removed:
            logger.info(f"Unregistered {removed} models for provider: {provider}")
        return removed

    def _drop_provider(self, provider: str) -> int:
        dropped = self._provider_models.pop(provider, {})
        for model_id in dropped:
            fallback = self._latest_registration(model_id)
            if fallback is None:
                self._models.pop(model_id, None)
            else:
                self._models[model_id] = fallback
        return len(dropped)

    def _latest_registration(self, model_id: str) -> Optional[ModelInfo]:
        for models in reversed(list(self._provider_models.values())):
            if model_id in models:
                return models[model_id]
        return None

    def get_model_info(self, model_id: str) -> Optional[ModelInfo]:
        """Look up capability metadata by exact model id"""
        with self._lock:
            return self._models.get(model_id)

    def list_models(self) -> List[ModelInfo]:
        """Return all registered models sorted by id"""
        with self._lock:
            return [self._models[k] for k in sorted(self._models)]

    def get_providers(self) -> List[str]:
        with self._lock:
            return list(self._provider_models.keys())

    def clear(self):
        """Remove all models (useful for testing)"""
        with self._lock:
            self._models.clear()
            self._provider_models.clear()
        logger.debug("Cleared model registry")

    def __len__(self) -> int:
        with self._lock:
            return len(self._models)


# Global registry instance
_global_registry: Optional[ModelRegistry] = None
_global_lock = threading.Lock()


def get_global_registry() -> ModelRegistry:
    """Get the global model registry"""
    global _global_registry
    with _global_lock:
        if _global_registry is None:
            _global_registry = ModelRegistry()
        return _global_registry


def set_global_registry(registry: ModelRegistry):
    """Set the global model registry"""
    global _global_registry
    with _global_lock:
        _global_registry = registry
