# SPDX-License-Identifier: GPL-3.0-or-later
#
# Thinkgate: Thinking budget normalization for multi-provider LLM proxies.
# Copyright (C) 2025 FunnyCups (https://github.com/funnycups)

"""
Main FastAPI application for Thinkgate.
Exposes model thinking capabilities and budget normalization to request builders.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Header, HTTPException, Depends

from config_loader import config_loader, AppConfig
from thinkgate_core.models import (
    ModelThinkingResponse,
    NormalizeRequest,
    NormalizeResponse,
)
from thinkgate_core.registry import ModelRegistry, set_global_registry
from thinkgate_core.thinking import (
    ModelClassifier,
    ReasoningEffortConverter,
    ThinkingBudgetNormalizer,
    is_special_handling_model_family,
    model_supports_thinking,
    set_global_classifier,
    set_global_converter,
)

logger = logging.getLogger(__name__)


# Global variables
app_config: AppConfig = None
ALLOWED_CLIENT_KEYS: List[str] = []
registry: ModelRegistry = ModelRegistry()
classifier: ModelClassifier = ModelClassifier()
converter: ReasoningEffortConverter = ReasoningEffortConverter(registry=registry)


def load_runtime_config(reload: bool = False):
    """Load or reload runtime configuration and derived globals."""
    global app_config, ALLOWED_CLIENT_KEYS, registry, classifier, converter

    if reload:
        app_config = config_loader.reload_config()
        logger.info("🔄 Reloaded configuration from disk")
    else:
        app_config = config_loader.load_config()

    log_level_str = app_config.features.log_level
    if log_level_str == "DISABLED":
        log_level = logging.CRITICAL + 1
    else:
        log_level = getattr(logging, log_level_str, logging.INFO)

    # Configure logging (avoid adding duplicate handlers on reload)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        root_logger.setLevel(log_level)

    logger.info(f"✅ Configuration loaded successfully: {config_loader.config_path}")

    # Build fresh instances so a reload never mixes old and new rules
    new_registry = ModelRegistry()
    new_classifier = ModelClassifier()
    config_loader.apply_to(new_registry, new_classifier)

    registry = new_registry
    classifier = new_classifier
    converter = config_loader.build_converter(registry)
    set_global_registry(registry)
    set_global_classifier(classifier)
    set_global_converter(converter)

    ALLOWED_CLIENT_KEYS = config_loader.get_allowed_client_keys()

    logger.info(f"📊 Registered {len(registry)} models from {len(registry.get_providers())} providers")
    logger.info(f"🧠 Thinking rules configured for providers: {classifier.get_providers()}")
    logger.info(f"🔑 Configured {len(ALLOWED_CLIENT_KEYS)} client keys")


app = FastAPI()

# Flag to track if configuration is loaded
_config_loaded = False


def ensure_config_loaded():
    """Ensure configuration is loaded before handling requests."""
    global _config_loaded
    if not _config_loaded:
        try:
            load_runtime_config()
            _config_loaded = True
            logger.info("✅ Configuration loaded successfully on first request")
        except Exception as e:
            logger.error(f"❌ Configuration loading failed: {type(e).__name__}")
            logger.error(f"❌ Error details: {str(e)}")
            logger.error("💡 Please ensure config.yaml file exists and is properly formatted")
            raise HTTPException(
                status_code=500,
                detail=f"Server configuration error: {str(e)}"
            )


async def verify_api_key(authorization: Optional[str] = Header(None)):
    """Dependency: verify client API key."""
    ensure_config_loaded()

    if not authorization:
        logger.error("❌ Missing Authorization header")
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    # Some clients omit the "Bearer " prefix
    if authorization.startswith("Bearer "):
        client_key = authorization[7:]
    else:
        client_key = authorization

    if app_config.features.key_passthrough:
        logger.debug("   Mode: Key passthrough (validation skipped)")
        return client_key

    if client_key not in ALLOWED_CLIENT_KEYS:
        logger.error(f"❌ Unauthorized key: ***{client_key[-8:]}")
        raise HTTPException(status_code=401, detail="Unauthorized")

    logger.debug("✅ Key validated successfully")
    return client_key


@app.get("/")
def read_root():
    """Root endpoint showing service status."""
    ensure_config_loaded()
    return {
        "status": "Thinkgate is running",
        "config": {
            "models_count": len(registry),
            "providers": registry.get_providers(),
            "client_keys_count": len(ALLOWED_CLIENT_KEYS),
            "features": {
                "log_level": app_config.features.log_level,
                "key_passthrough": app_config.features.key_passthrough,
                "default_thinking_budget": app_config.thinking.default_budget,
            }
        }
    }


@app.get("/v1/models")
async def list_models(_api_key: str = Depends(verify_api_key)):
    """List registered models with their thinking metadata."""
    return {
        "object": "list",
        "data": [info.to_openai_dict() for info in registry.list_models()]
    }


@app.get("/v1/models/{model_id:path}/thinking", response_model=ModelThinkingResponse)
async def get_model_thinking(model_id: str, _api_key: str = Depends(verify_api_key)):
    """Describe the thinking capability of a single model."""
    info = registry.get_model_info(model_id)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Model not found: {model_id}")

    return ModelThinkingResponse(
        model=info.id,
        owned_by=info.owned_by,
        supports_thinking=info.thinking is not None,
        thinking=info.thinking,
        special_handling=is_special_handling_model_family(info.id),
        enabled_for_providers=classifier.providers_enabling(info.id),
    )


@app.post("/v1/thinking/normalize", response_model=NormalizeResponse)
async def normalize_budget(body: NormalizeRequest, _api_key: str = Depends(verify_api_key)):
    """
    Compute the thinking budget that is legal to send for a model.
    Request body: {"model": "...", "budget": 4096, "reasoning_effort": "high", "provider": "antigravity"}
    """
    requested = converter.requested_budget(body.reasoning_effort, body.budget)
    effective = ThinkingBudgetNormalizer(registry).normalize(body.model, requested)
    logger.debug(f"🧠 Thinking budget for '{body.model}': requested={requested}, effective={effective}")

    thinking_enabled = None
    if body.provider:
        thinking_enabled = classifier.is_thinking_enabled(body.provider, body.model)

    return NormalizeResponse(
        model=body.model,
        requested_budget=requested,
        effective_budget=effective,
        reasoning_effort=converter.budget_to_effort(effective),
        supports_thinking=model_supports_thinking(body.model, registry),
        thinking_enabled=thinking_enabled,
        special_handling=is_special_handling_model_family(body.model),
    )


def main():
    """
    Main entry point for running the server.
    """
    import uvicorn
    import sys

    # Setup basic logging for startup
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    print("=" * 80)
    print("🧠 Thinkgate - Thinking Budget Normalization Service")
    print("=" * 80)

    try:
        load_runtime_config()
        host = app_config.server.host
        port = app_config.server.port
        log_level = app_config.features.log_level.lower() if app_config.features.log_level != "DISABLED" else "critical"

        print(f"📋 Configuration loaded from: {config_loader.config_path}")
        print(f"🌐 Server will start on: http://{host}:{port}")
        print(f"📊 Registered models: {len(registry)}")
        print(f"📝 Log level: {app_config.features.log_level}")
        print("=" * 80)
        print()

    except FileNotFoundError:
        print("❌ ERROR: config.yaml not found!")
        print("💡 Please copy config.example.yaml to config.yaml and configure it")
        print("=" * 80)
        sys.exit(1)
    except Exception as e:
        print(f"❌ ERROR: Failed to load configuration: {type(e).__name__}")
        print(f"   Details: {str(e)}")
        print("💡 Please check your config.yaml file for syntax errors")
        print("=" * 80)
        sys.exit(1)

    global _config_loaded
    _config_loaded = True

    try:
        logger.info(f"🚀 Starting Uvicorn server on {host}:{port}")
        uvicorn.run(
            app,
            host=host,
            port=port,
            log_level=log_level,
            access_log=True
        )
    except KeyboardInterrupt:
        print("\n" + "=" * 80)
        print("👋 Server stopped by user")
        print("=" * 80)


if __name__ == "__main__":
    main()
