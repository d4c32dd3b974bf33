# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Configuration loading and validation.
Reads config.yaml with PyYAML and validates it with Pydantic.
"""

import os
from typing import List, Dict, Optional, Literal
import logging

import yaml
from pydantic import BaseModel, Field, field_validator

from thinkgate_core.models import ModelInfo
from thinkgate_core.registry import ModelRegistry, register_builtin_models
from thinkgate_core.thinking import (
    DEFAULT_THINKING_BUDGET,
    MatchKind,
    ModelClassifier,
    ReasoningEffortConverter,
    ThinkingRule,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "THINKGATE_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"
CONFIG_PROVIDER = "config"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "DISABLED")


class ServerConfig(BaseModel):
    """HTTP server settings."""
    host: str = "0.0.0.0"
    port: int = Field(8000, gt=0, lt=65536)
    timeout: int = Field(60, gt=0)


class ClientAuthConfig(BaseModel):
    """Client API key settings."""
    allowed_keys: List[str] = Field(default_factory=list)


class FeaturesConfig(BaseModel):
    """Feature switches."""
    log_level: str = "INFO"
    key_passthrough: bool = False
    load_builtin_models: bool = True

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value


class ThinkingRuleConfig(BaseModel):
    """Classification rule as written in YAML."""
    kind: Literal["suffix", "exact", "prefix", "contains"]
    value: str = Field(..., min_length=1)

    def to_rule(self) -> ThinkingRule:
        return ThinkingRule(MatchKind(self.kind), self.value)


class ThinkingConfig(BaseModel):
    """Thinking budget settings."""
    default_budget: int = DEFAULT_THINKING_BUDGET
    effort_budgets: Dict[str, int] = Field(default_factory=dict)
    effort_thresholds: Dict[str, int] = Field(default_factory=dict)
    provider_rules: Dict[str, List[ThinkingRuleConfig]] = Field(default_factory=dict)


class AppConfig(BaseModel):
    """Root configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    client_authentication: ClientAuthConfig = Field(default_factory=ClientAuthConfig)
    features: FeaturesConfig = Field(default_factory=FeaturesConfig)
    thinking: ThinkingConfig = Field(default_factory=ThinkingConfig)
    models: List[ModelInfo] = Field(default_factory=list)


class ConfigLoader:
    """Loads config.yaml and applies it to the registry and classifier."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
        self._config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """
        Load configuration, parsing the file only once.

        Raises:
            FileNotFoundError: If the config file does not exist
            yaml.YAMLError: If the file is not valid YAML
            pydantic.ValidationError: If the content does not match the schema
        """
        if self._config is None:
            self._config = self._read_config()
        return self._config

    def reload_config(self) -> AppConfig:
        """Re-read the configuration file from disk."""
        self._config = self._read_config()
        return self._config

    def _read_config(self) -> AppConfig:
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}

        config = AppConfig(**raw)
        logger.debug(f"Parsed configuration from {self.config_path}: {len(config.models)} models")
        return config

    def get_allowed_client_keys(self) -> List[str]:
        return list(self.load_config().client_authentication.allowed_keys)

    def build_converter(self, registry: Optional[ModelRegistry] = None) -> ReasoningEffortConverter:
        """Create an effort converter using the configured budgets."""
        thinking = self.load_config().thinking
        return ReasoningEffortConverter(
            effort_budgets=thinking.effort_budgets,
            effort_thresholds=thinking.effort_thresholds,
            default_budget=thinking.default_budget,
            registry=registry,
        )

    def apply_to(self, registry: ModelRegistry, classifier: ModelClassifier):
        """
        Populate the registry and classifier from configuration.

        Configured models are registered under the "config" provider after the
        built-in models, so they override built-in entries with the same id.
        """
        config = self.load_config()

        if config.features.load_builtin_models:
            register_builtin_models(registry)
        registry.register_models(CONFIG_PROVIDER, config.models)

        for provider, rules in config.thinking.provider_rules.items():
            classifier.register_rules(provider, [r.to_rule() for r in rules])


# Global loader instance
config_loader = ConfigLoader()
