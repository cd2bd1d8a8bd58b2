# appgen/api/generate.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from appgen.core.app_config import AppConfig, HEX_COLOR_PATTERN, app_config_json_schema, default_app_config
from appgen.core.config_agent import generate_app_config, modify_app_config
from appgen.core.errors import MalformedModelOutput, ModelUnavailable, ModificationFailed
from appgen.core.llm_client import ModelInvoker
from appgen.models import GenerateRequest, GenerationResult, ModifyRequest
from appgen.utils.config import DEFAULT_PRIMARY_COLOR

logger = logging.getLogger(__name__)

router = APIRouter()


def get_invoker(request: Request) -> ModelInvoker:
    return request.app.state.invoker


def _log_incoming_request(tag: str, payload: BaseModel):
    logger.info("[%s] incoming request: %s", tag, payload.model_dump_json(by_alias=True)[:2000])


@router.post("/", response_model=GenerationResult)
async def generate(req: GenerateRequest, invoker: ModelInvoker = Depends(get_invoker)):
    """
    Generate a fresh app config. Always answers 200 with a usable config;
    `fallbackUsed` tells whether the model output was used.
    """
    _log_incoming_request("generate", req)
    return await generate_app_config(req, invoker)


@router.post("/modify", response_model=AppConfig)
async def modify(req: ModifyRequest, invoker: ModelInvoker = Depends(get_invoker)):
    """
    Apply a natural-language modification to an existing config. On failure
    the caller keeps its previous config.
    """
    _log_incoming_request("modify", req)
    try:
        return await modify_app_config(req, invoker)
    except ModelUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except MalformedModelOutput as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ModificationFailed as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/defaults", response_model=AppConfig)
async def defaults(app_name: str = Query(..., alias="appName", min_length=1),
                   primary_color: str = Query(DEFAULT_PRIMARY_COLOR, alias="primaryColor",
                                              pattern=HEX_COLOR_PATTERN)):
    return default_app_config(app_name, primary_color)


@router.get("/schema", response_model=Dict[str, Any])
async def schema():
    return app_config_json_schema()
