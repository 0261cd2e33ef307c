"""Product description suggestions from OpenAI, with a fixed fallback text."""

import logging
from dataclasses import dataclass
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from admin_loja.config import OpenAIConfig

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "diversos"

SYSTEM_MESSAGE = (
    "Você é um especialista em e-commerce que cria descrições persuasivas "
    "e atrativas para produtos."
)

USER_PROMPT = """Crie uma descrição curta e atrativa (2-3 frases) para um produto chamado "{0}" da categoria "{1}".
A descrição deve ser em português, persuasiva e destacar benefícios."""

FALLBACK_TEMPLATE = (
    "{0} é um produto de alta qualidade da categoria {1}. "
    "Ideal para quem busca excelência e durabilidade. "
    "Produto com ótimo custo-benefício e acabamento premium."
)


@dataclass(frozen=True)
class DescriptionResult:
    """Generated text plus whether it is the fixed fallback."""

    description: str
    is_default: bool

    def to_dict(self) -> dict:
        return {"description": self.description, "isDefault": self.is_default}


def fallback_description(name: str, category: Optional[str] = None) -> DescriptionResult:
    """Deterministic description used when the provider is unavailable."""
    return DescriptionResult(
        description=FALLBACK_TEMPLATE.format(name, category or DEFAULT_CATEGORY),
        is_default=True,
    )


class DescriptionGenerator:
    """Asks the chat completion API for a short product description.

    Without a client (no API key configured) every call returns the fallback.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: str = "gpt-3.5-turbo",
        temperature: float = 0.7,
        max_tokens: int = 150,
    ):
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    @classmethod
    def from_config(cls, config: OpenAIConfig) -> "DescriptionGenerator":
        client = AsyncOpenAI(api_key=config.api_key) if config.api_key else None
        return cls(
            client,
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def generate(self, name: str, category: Optional[str] = None) -> DescriptionResult:
        """
        Generate a description for a product.

        Args:
            name: Product name.
            category: Category name, "diversos" when empty.

        Returns:
            DescriptionResult, flagged ``is_default`` when the fallback was used.
        """
        if self._client is None:
            logger.info("OpenAI not configured, using fallback description")
            return fallback_description(name, category)

        prompt = USER_PROMPT.format(name, category or DEFAULT_CATEGORY)

        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_MESSAGE},
                    {"role": "user", "content": prompt},
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except OpenAIError as e:
            logger.warning(f"Description generation failed for '{name}': {e}")
            return fallback_description(name, category)

        content = (completion.choices[0].message.content or "").strip() if completion.choices else ""
        if not content:
            logger.warning(f"Empty description returned for '{name}'")
            return fallback_description(name, category)

        return DescriptionResult(description=content, is_default=False)
