"""
Notes AI Proxy - Abstract LLM Service Interface
===============================================

What:  Abstract base class for the upstream completion provider.
Why:   TaskExecutor only needs "instruction + content in, text out", so the
       provider (Groq today) can be swapped or faked in tests without touching
       the executor.
How:   Concrete implementations inherit from LLMService and implement
       complete() and is_configured().
"""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """
    Contract:
        - complete() performs exactly one request/response exchange
        - All provider-specific errors are wrapped in UpstreamError
        - No retry: a failed attempt is surfaced immediately
    """

    @abstractmethod
    async def complete(self, instruction: str, content: str) -> str:
        """
        Send one system instruction and one user message, return the reply.

        Args:
            instruction: The task's system prompt.
            content:     The user's note text, sent verbatim.

        Returns:
            str: Text of the first completion choice, unmodified.

        Raises:
            UpstreamError: Network failure, rejected credential, or a response
                without the expected fields.
        """
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        """True when the provider has a usable credential. Makes no network call."""
        ...
