# cyberguard/services/llm_chain/llm_utils.py
from __future__ import annotations

import json
from pydantic import BaseModel
from typing import Any, Dict, Optional, Type, TypeVar


T = TypeVar("T", bound=BaseModel)


# ---------------- Pydantic ↔ JSON Schema & Parsing ----------------
def json_schema_from_pydantic(model: Type[T], *, strict: bool = False) -> dict:
    """Bentuk response_format JSON Schema dari Pydantic (fallback)."""
    schema = model.model_json_schema()
    return {
        "type": "json_schema",
        "json_schema": {
            "name": getattr(model, "__name__", "Schema"),
            "schema": schema,
            "strict": bool(strict),
        },
    }


def pydantic_parse(model: Type[T], payload: object) -> T:
    """Parse payload (str/dict/serializable) ke instance Pydantic."""
    if isinstance(payload, model):
        return payload
    if isinstance(payload, str):
        return model.model_validate_json(payload)
    if isinstance(payload, dict):
        return model.model_validate(payload)
    return model.model_validate_json(json.dumps(payload, ensure_ascii=False))


# ---------------- Small utils ----------------
def short_str(obj: Any, n: int = 400) -> str:
    try:
        s = obj if isinstance(obj, str) else json.dumps(obj, ensure_ascii=False)
    except (TypeError, ValueError):
        s = str(obj)
    return s if len(s) <= n else s[: n - 3] + "..."


def shape_user(content: str) -> Dict[str, Any]:
    return {"role": "user", "content": content}


# ---------------- Extractors (raw SDK) ----------------
def _first_message(resp: Any) -> Any:
    choice0 = (getattr(resp, "choices", None) or [None])[0]
    if not choice0:
        return None
    return getattr(choice0, "message", None)


def extract_assistant_text_chat(resp: Any) -> str:
    msg = _first_message(resp)
    return (getattr(msg, "content", None) or "").strip()


def extract_parsed_chat(resp: Any) -> Optional[Any]:
    """Ambil hasil structured output dari chat.completions.parse (message.parsed)."""
    return getattr(_first_message(resp), "parsed", None)


def extract_refusal_chat(resp: Any) -> Optional[str]:
    return getattr(_first_message(resp), "refusal", None) or None
