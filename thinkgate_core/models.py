# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Pydantic models for model capabilities and API requests/responses.
"""

from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, model_validator


class ThinkingSupport(BaseModel):
    """Thinking budget range declared for a model."""
    model_config = ConfigDict(frozen=True)

    min: int
    max: int
    zero_allowed: bool = False
    dynamic_allowed: bool = False

    @model_validator(mode="after")
    def check_range(self) -> "ThinkingSupport":
        if self.min > self.max:
            raise ValueError(f"thinking min ({self.min}) must not exceed max ({self.max})")
        return self


class ModelInfo(BaseModel):
    """Capability metadata for a single model."""
    model_config = ConfigDict(extra="allow")

    id: str
    owned_by: str = "unknown"
    display_name: Optional[str] = None
    thinking: Optional[ThinkingSupport] = None

    def to_openai_dict(self) -> Dict[str, Any]:
        """Render as an OpenAI-style model list entry"""
        entry = {
            "id": self.id,
            "object": "model",
            "owned_by": self.owned_by,
        }
        if self.display_name:
            entry["display_name"] = self.display_name
        if self.thinking is not None:
            entry["thinking"] = self.thinking.model_dump()
        return entry


class NormalizeRequest(BaseModel):
    """Thinking budget normalization request."""
    model: str
    budget: Optional[int] = None
    reasoning_effort: Optional[str] = None
    provider: Optional[str] = None


class NormalizeResponse(BaseModel):
    """Thinking budget normalization result."""
    model: str
    requested_budget: int
    effective_budget: int
    reasoning_effort: str
    supports_thinking: bool
    thinking_enabled: Optional[bool] = None  # Only set when a provider is given
    special_handling: bool = False


class ModelThinkingResponse(BaseModel):
    """Thinking capability summary for one model."""
    model: str
    owned_by: str
    supports_thinking: bool
    thinking: Optional[ThinkingSupport] = None
    special_handling: bool = False
    enabled_for_providers: List[str] = []
