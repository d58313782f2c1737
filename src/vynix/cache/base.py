"""Cache data types."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ContextMessage:
    """A prior conversation turn supplied alongside a new prompt.

    Attributes:
        role: Speaker role ("user", "assistant", "system").
        content: Message text.
    """

    role: str = "user"
    content: str = ""

    @classmethod
    def coerce(cls, message: "ContextMessage | Mapping[str, Any]") -> "ContextMessage":
        """Build a message from a mapping, defaulting missing fields.

        A missing, ``None`` or empty role becomes ``"user"``; a missing or
        ``None`` content becomes ``""``.
        """
        if isinstance(message, ContextMessage):
            role, content = message.role, message.content
        else:
            role, content = message.get("role"), message.get("content")
        return cls(role=role or "user", content=content or "")


@dataclass(frozen=True)
class CachedResponse:
    """Normalized generation result as stored in the cache.

    Timing information and the raw request are never stored; callers
    recompute response time on every retrieval.

    Attributes:
        id: Identifier of the generated response.
        content: Generated text.
        tokens: Token count reported by the provider (0 when unknown).
        provider: Provider that produced the response.
        model: Resolved model name.
    """

    id: str | None
    content: str | None
    tokens: int
    provider: str | None
    model: str | None

    @classmethod
    def normalize(cls, response: Any, requested_model: str | None) -> "CachedResponse":
        """Normalize a raw response (mapping or object) into a payload."""

        def field_of(name: str) -> Any:
            if isinstance(response, Mapping):
                return response.get(name)
            return getattr(response, name, None)

        return cls(
            id=field_of("id"),
            content=field_of("content"),
            tokens=field_of("tokens") or 0,
            provider=field_of("provider"),
            model=field_of("model") or requested_model,
        )

    def copy(self) -> "CachedResponse":
        """Return a detached copy of this payload."""
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "tokens": self.tokens,
            "provider": self.provider,
            "model": self.model,
        }


@dataclass
class CacheEntry:
    """A stored payload and the time it was inserted.

    Attributes:
        key: Fingerprint the entry is stored under.
        payload: Normalized response.
        inserted_at: Insertion time in milliseconds, from the cache clock.
    """

    key: str
    payload: CachedResponse
    inserted_at: float

    def is_expired(self, now: float, ttl_ms: float) -> bool:
        """Check whether the entry is past its time-to-live at ``now``."""
        return now - self.inserted_at > ttl_ms
