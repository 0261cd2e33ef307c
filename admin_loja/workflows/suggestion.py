"""Cancelable description suggestion for the product form.

At most one request is in flight: a new request cancels the previous one and
the superseded result is dropped without error. A finished suggestion is kept
as pending until the user accepts or rejects it.
"""

import asyncio
import logging
from typing import Optional

from admin_loja.services.description_service import DescriptionGenerator, DescriptionResult

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3
NAME_TOO_SHORT = "Digite o nome do produto (mínimo 3 caracteres) para gerar uma descrição"


class NameTooShortError(ValueError):
    """Raised when a suggestion is requested for a name below the minimum length."""

    pass


class DescriptionSuggester:
    """Requests description suggestions on behalf of one form."""

    def __init__(self, generator: DescriptionGenerator, min_name_length: int = MIN_NAME_LENGTH):
        self._generator = generator
        self._min_name_length = min_name_length
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self.pending: Optional[DescriptionResult] = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Cancel the in-flight request, if any."""
        if self.in_flight:
            logger.debug("Cancelling superseded description request")
            self._task.cancel()
        self._task = None

    async def request(self, name: str, category: Optional[str] = None) -> Optional[DescriptionResult]:
        """
        Ask for a suggestion, superseding any request in flight.

        Args:
            name: Product name, at least ``min_name_length`` characters.
            category: Optional category name.

        Returns:
            The suggestion, now pending review, or None if this request was
            superseded before it finished.

        Raises:
            NameTooShortError: If the name is too short.
        """
        name = (name or "").strip()
        if len(name) < self._min_name_length:
            raise NameTooShortError(NAME_TOO_SHORT)

        self.cancel()
        self._generation += 1
        generation = self._generation
        task = asyncio.create_task(self._generator.generate(name, category))
        self._task = task

        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return None
            raise
        finally:
            if self._task is task:
                self._task = None

        if generation != self._generation:
            return None

        self.pending = result
        return result

    def accept(self) -> Optional[str]:
        """Take the pending suggestion as the description text."""
        if self.pending is None:
            return None
        description = self.pending.description
        self.pending = None
        return description

    def reject(self) -> None:
        self.pending = None
