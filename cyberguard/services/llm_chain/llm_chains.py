# cyberguard/services/llm_chain/llm_chains.py
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Type
from pydantic import BaseModel, ValidationError
from openai import AsyncOpenAI
from openai import BadRequestError, InternalServerError
from cyberguard.utils.logger import get_logger
from cyberguard.config import ServiceConfigs
from .llm_utils import (
    extract_assistant_text_chat,
    extract_parsed_chat,
    extract_refusal_chat,
    json_schema_from_pydantic,
    pydantic_parse,
    short_str,
)

logger = get_logger(__name__)


class LLMRefusal(RuntimeError):
    """Model menolak menjawab (structured output refusal)."""


class LLMChains:
    def __init__(
        self,
        model: str,
        *,
        client: Optional[AsyncOpenAI] = None,
        llm_base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        request_timeout: float = 60.0,
    ):
        self.model = model
        self.temperature = float(temperature or 0.0)
        self.max_tokens = int(max_tokens) or 256
        self.request_timeout = float(request_timeout)
        self.client = client or AsyncOpenAI(base_url=llm_base_url, api_key=api_key)

    @classmethod
    def from_configs(cls, cfg: ServiceConfigs, **kwargs: Any) -> "LLMChains":
        return cls(
            cfg.llm_model,
            llm_base_url=cfg.llm_base_url,
            api_key=cfg.llm_api_key or "missing-api-key",
            temperature=cfg.llm_temperature,
            max_tokens=cfg.max_token,
            request_timeout=cfg.llm_request_timeout,
            **kwargs,
        )

    # ====================================================
    # Helper low-level untuk panggil API OpenAI SDK
    # ====================================================
    async def chat_completions(self, **kwargs) -> Any:
        return await asyncio.wait_for(
            self.client.chat.completions.create(**kwargs), timeout=self.request_timeout
        )

    # =====================================================
    # Structure Output helpers (Pydantic)
    # =====================================================
    async def chat_completions_parse(
        self,
        messages: List[Dict[str, Any]],
        *,
        pydantic_model: Type[BaseModel],
        max_tokens: Optional[int] = None,
    ) -> Optional[BaseModel]:
        """
        1) Coba native: client.chat.completions.parse(..., response_format=YourModel)
        2) Jika SDK/endpoint tidak mendukung: fallback ke .create + schema JSON, lalu parse manual.
        Mengembalikan None jika model tidak mengeluarkan output apa pun.
        """
        # --- Native-first ---
        try:
            resp = await asyncio.wait_for(
                self.client.chat.completions.parse(
                    model=self.model,
                    messages=messages,  # type: ignore
                    response_format=pydantic_model,
                    temperature=self.temperature,
                    max_tokens=max_tokens or self.max_tokens,
                ),
                timeout=self.request_timeout,
            )
            refusal = extract_refusal_chat(resp)
            if refusal:
                raise LLMRefusal(refusal)
            parsed = extract_parsed_chat(resp)
            if parsed is not None:
                return pydantic_parse(pydantic_model, parsed)
            text = extract_assistant_text_chat(resp)
            return pydantic_parse(pydantic_model, text) if text else None
        except (AttributeError, TypeError) as e:
            logger.debug(
                "chat.completions.parse tidak tersedia/kompatibel, fallback. err=%s", e
            )
        except (BadRequestError, InternalServerError) as e:
            # endpoint OpenAI-compatible kadang tidak mendukung response_format=model
            logger.info(
                "chat.parse error (%s), coba fallback create+schema.", type(e).__name__
            )

        # --- Fallback: create + JSON schema dari Pydantic, lalu parse manual ---
        resp = await self.chat_completions(
            model=self.model,
            messages=messages,
            response_format=json_schema_from_pydantic(pydantic_model),
            temperature=self.temperature,
            max_tokens=max_tokens or self.max_tokens,
        )
        text = extract_assistant_text_chat(resp)
        if not text:
            return None
        try:
            return pydantic_parse(pydantic_model, text)
        except ValidationError:
            logger.warning("Output LLM tidak sesuai schema: %s", short_str(text))
            raise
