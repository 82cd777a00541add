# cyberguard/services/flows/flow.py
from __future__ import annotations

import time
from typing import Any, Dict, Generic, Type, TypeVar
from pydantic import BaseModel

from cyberguard.utils.logger import get_logger
from cyberguard.services.llm_chain.llm_chains import LLMChains
from cyberguard.services.llm_chain.llm_utils import shape_user


logger = get_logger(__name__)

InT = TypeVar("InT", bound=BaseModel)
OutT = TypeVar("OutT", bound=BaseModel)


class FlowError(RuntimeError):
    """The model returned no usable output for a flow."""


class PromptFlow(Generic[InT, OutT]):
    """Validate input → fill the prompt template → ask the LLM for structured output.

    Args:
        name: Flow name used in logs and error messages.
        input_model: Pydantic schema the input must satisfy.
        output_model: Pydantic schema the LLM output is parsed into.
        template: Prompt with ``{field}`` placeholders named after the
            input model's fields.
        empty_output_message: Message of the :class:`FlowError` raised when
            the model emits nothing.
    """

    def __init__(
        self,
        name: str,
        input_model: Type[InT],
        output_model: Type[OutT],
        template: str,
        *,
        empty_output_message: str | None = None,
    ):
        self.name = name
        self.input_model = input_model
        self.output_model = output_model
        self.template = template
        self.empty_output_message = (
            empty_output_message or f"AI failed to generate {name} output."
        )

    def render(self, data: InT) -> str:
        return self.template.format(**data.model_dump())

    async def run(self, llm: LLMChains, data: InT | Dict[str, Any]) -> OutT:
        if not isinstance(data, self.input_model):
            data = self.input_model.model_validate(data)

        started = time.perf_counter()
        output = await llm.chat_completions_parse(
            [shape_user(self.render(data))], pydantic_model=self.output_model
        )
        if output is None:
            logger.warning("[%s] LLM tidak mengembalikan output", self.name)
            raise FlowError(self.empty_output_message)

        logger.info(
            "[%s] selesai dalam %.2fs", self.name, time.perf_counter() - started
        )
        return output  # type: ignore[return-value]

    __call__ = run
