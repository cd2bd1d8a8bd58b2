# appgen/core/llm_client.py
import os
import json
import time
import logging
from typing import Any, Dict, Optional, Protocol

from langchain_google_genai import ChatGoogleGenerativeAI

from appgen.core.errors import ModelUnavailable
from appgen.utils import config
from appgen.utils.config import get_gemini_api_key

logger = logging.getLogger(__name__)

RAW_LOG_CHARS = 2000


class ModelInvoker(Protocol):
    async def invoke(self, prompt: str) -> str:
        ...


# -------------------------
# LLM init
# -------------------------
def get_llm(model: str,
            temperature: float,
            json_mode: bool = True,
            response_schema: Optional[Dict[str, Any]] = None) -> ChatGoogleGenerativeAI:
    api_key = get_gemini_api_key()
    if not api_key:
        raise RuntimeError("Please set GOOGLE_API_KEY_GEMINI environment variable for Gemini access.")
    kwargs: Dict[str, Any] = {"model": model, "temperature": temperature, "google_api_key": api_key}
    if json_mode:
        kwargs["response_mime_type"] = "application/json"
    if response_schema is not None:
        kwargs["response_schema"] = response_schema
    return ChatGoogleGenerativeAI(**kwargs)


def _save_debug_log(prefix: str, payload: Dict[str, Any]):
    if not config.DEBUG_LOGS:
        return
    try:
        os.makedirs(config.LOG_DIR, exist_ok=True)
        fname = f"{int(time.time() * 1000)}_{prefix}.json"
        with open(os.path.join(config.LOG_DIR, fname), "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False)
    except OSError:
        logger.exception("Failed to write debug log")


def _message_text(result: Any) -> str:
    """
    Chat models return an AIMessage whose content is either a string or a list
    of parts ({"type": "text", "text": ...} or plain strings).
    """
    content = getattr(result, "content", result)
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    return str(content)


class GeminiInvoker:
    """
    Sends one prompt to Gemini and returns the raw text.

    One instance is created per process and passed to the pipeline. The chat
    model itself is built on first use, so a missing key shows up as
    ModelUnavailable on the request rather than as a startup failure. No
    retries: retry policy belongs to the caller.
    """

    def __init__(self,
                 model: Optional[str] = None,
                 temperature: Optional[float] = None,
                 json_mode: Optional[bool] = None,
                 response_schema: Optional[Dict[str, Any]] = None,
                 llm: Any = None):
        self.model = model or config.GEMINI_MODEL
        self.temperature = config.TEMPERATURE if temperature is None else temperature
        self.json_mode = config.JSON_MODE if json_mode is None else json_mode
        self.response_schema = response_schema
        self._llm = llm

    def _get_llm(self):
        if self._llm is None:
            self._llm = get_llm(self.model, self.temperature, self.json_mode, self.response_schema)
        return self._llm

    async def invoke(self, prompt: str) -> str:
        start_ts = time.time()
        try:
            result = await self._get_llm().ainvoke(prompt)
        except Exception as e:
            logger.exception("Gemini call failed: %s", e)
            _save_debug_log("llm_error", {"prompt": prompt, "error": repr(e)})
            raise ModelUnavailable(f"generation unavailable: {e}") from e

        text = _message_text(result)
        duration = time.time() - start_ts
        logger.info("Raw Gemini response (%.2fs, %d chars): %s",
                    duration, len(text), text[:RAW_LOG_CHARS])
        _save_debug_log("llm_response", {"model": self.model, "duration_s": duration,
                                         "prompt": prompt, "raw_result": text})

        if not text.strip():
            raise ModelUnavailable("Empty response from Gemini model")
        return text
