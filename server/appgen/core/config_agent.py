# appgen/core/config_agent.py
"""
App Config Agent
- Exposes:
    async def generate_app_config(request, invoker) -> GenerationResult
    async def modify_app_config(request, invoker) -> AppConfig
- Pipeline: prompt -> model -> normalize -> reconcile.

Generation never fails: any error falls back to the deterministic default
config. Modification has no fallback; errors are surfaced so the caller keeps
the previous config.
"""
import logging

from appgen.core.app_config import AppConfig, default_app_config
from appgen.core.errors import MalformedModelOutput, ModelUnavailable, ModificationFailed
from appgen.core.llm_client import ModelInvoker
from appgen.core.normalizer import parse_model_output
from appgen.core.prompts import build_generation_prompt, build_modification_prompt
from appgen.core.reconciler import reconcile_app_config
from appgen.models import GenerateRequest, GenerationResult, ModifyRequest

logger = logging.getLogger(__name__)


def fallback_app_config(request: GenerateRequest) -> AppConfig:
    """Same input, same config: depends only on the app name and color."""
    return default_app_config(request.app_name, request.primary_color)


async def generate_app_config(request: GenerateRequest, invoker: ModelInvoker) -> GenerationResult:
    baseline = fallback_app_config(request)
    try:
        prompt = build_generation_prompt(
            request.prompt,
            request.app_name,
            request.primary_color,
            request.resolved_store_context(),
        )
        raw = await invoker.invoke(prompt)
        candidate = parse_model_output(raw)
        config = reconcile_app_config(candidate, baseline)
    except Exception as e:
        logger.exception("App generation failed for %r, using fallback configuration", request.app_name)
        return GenerationResult(
            config=baseline,
            preview=baseline.preview_summary(),
            fallback_used=True,
            fallback_reason=f"{type(e).__name__}: {e}",
        )

    return GenerationResult(config=config, preview=config.preview_summary())


async def modify_app_config(request: ModifyRequest, invoker: ModelInvoker) -> AppConfig:
    try:
        prompt = build_modification_prompt(
            request.current_config,
            request.modification_prompt,
            request.resolved_store_context(),
        )
        raw = await invoker.invoke(prompt)
        candidate = parse_model_output(raw)
        return reconcile_app_config(candidate, request.current_config)
    except (ModelUnavailable, MalformedModelOutput) as e:
        logger.warning("App modification failed: %s", e)
        raise
    except Exception as e:
        logger.exception("App modification failed")
        raise ModificationFailed(f"modification failed: {e}") from e
