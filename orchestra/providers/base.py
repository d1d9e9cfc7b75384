"""Base provider contract for Orchestra."""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from orchestra.core.models import QueryOptions, Response


class Provider(ABC):
    """
    Abstract base class for all text-generation providers.

    Subclasses implement `complete`. Streaming and health probing have
    working defaults built on top of it, so a minimal adapter only needs a
    name and a completion call.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """Registry name of this provider."""
        return self._name

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> Response:
        """
        Produce a single completion for prompt.

        Args:
            prompt: User prompt text
            options: Optional per-call overrides (max_tokens, temperature)

        Returns:
            Response attributed to this provider
        """
        pass

    async def stream(
        self,
        prompt: str,
        options: QueryOptions | None = None,
    ) -> AsyncIterator[str]:
        """Yield the completion in chunks. Default: the whole content at once."""
        response = await self.complete(prompt, options)
        yield response.content

    async def health_check(self) -> bool:
        """Check provider reachability with a minimal completion."""
        try:
            await self.complete("test", QueryOptions(max_tokens=1))
            return True
        except Exception:
            return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
