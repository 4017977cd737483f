"""Link source interface."""

from typing import Protocol

from ..core.types import PageLinks


class LinkSourceError(Exception):
    """Raised when a link source cannot resolve a topic."""

    def __init__(self, message: str, topic: str | None = None):
        super().__init__(message)
        self.topic = topic


class LinkSource(Protocol):
    """Resolves a topic to its canonical name and outbound links."""

    async def resolve(self, topic: str) -> PageLinks:
        """
        Fetch the links of ``topic``.

        Follows at most one redirect; ``canonical_name`` is the redirect
        target, or ``topic`` itself when there is none.

        Raises:
            LinkSourceError: The service is unreachable or the answer is malformed.
        """
        ...
