"""Shared fixtures for thinkgate tests."""

import pytest

from thinkgate_core.models import ModelInfo, ThinkingSupport
from thinkgate_core.registry import ModelRegistry, get_global_registry, set_global_registry


def make_model(model_id, lo=None, hi=None, zero_allowed=False, dynamic_allowed=False, owned_by="test"):
    """Build a ModelInfo, with thinking metadata when a range is given."""
    thinking = None
    if lo is not None:
        thinking = ThinkingSupport(
            min=lo, max=hi, zero_allowed=zero_allowed, dynamic_allowed=dynamic_allowed
        )
    return ModelInfo(id=model_id, owned_by=owned_by, thinking=thinking)


@pytest.fixture
def registry():
    """Registry populated with models covering each range/flag combination."""
    reg = ModelRegistry()
    reg.register_models("test", [
        make_model("range-10-100", 10, 100),
        make_model("zero-ok", 0, 100, zero_allowed=True),
        make_model("zero-forbidden", 5, 100),
        make_model("dynamic-ok", 128, 32768, dynamic_allowed=True),
        make_model("mid-positive", 0, 100, zero_allowed=True),
        make_model("negative-range", -10, -2),
        make_model("negative-range-zero-ok", -10, -2, zero_allowed=True),
        make_model("no-thinking"),
    ])
    return reg


@pytest.fixture
def global_registry(registry):
    """Install the test registry as the global registry for the duration of a test."""
    previous = get_global_registry()
    set_global_registry(registry)
    yield registry
    set_global_registry(previous)
