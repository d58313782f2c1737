"""Cache key derivation.

A key is the SHA-256 digest of a canonical record built from the
provider, the model, the trimmed prompt and a fingerprint of the
conversation context. Identical requests map to the same key across
process restarts; any difference in those four inputs maps to a
different key.
"""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from vynix.cache.base import ContextMessage
from vynix.utils.hashing import hash_content

EMPTY_CONTEXT = "empty"
CONTEXT_HASH_LENGTH = 16
CONTEXT_SEPARATOR = "|"

ContextLike = Sequence[ContextMessage | Mapping[str, Any]]


def generate_context_hash(context: ContextLike | None) -> str:
    """Fingerprint an ordered conversation context.

    Args:
        context: Prior turns, as ``ContextMessage`` objects or mappings
            with optional ``role`` and ``content`` keys.

    Returns:
        ``"empty"`` for an empty context, otherwise the first 16 hex
        characters of the SHA-256 of the ``role:content`` pairs joined
        with ``|``.
    """
    if not context:
        return EMPTY_CONTEXT

    messages = (ContextMessage.coerce(message) for message in context)
    context_string = CONTEXT_SEPARATOR.join(
        f"{message.role}:{message.content}" for message in messages
    )
    return hash_content(context_string, CONTEXT_HASH_LENGTH)


def generate_cache_key(
    provider: str,
    model: str | None,
    prompt: str,
    context: ContextLike | None = None,
) -> str:
    """Generate the cache key for a generation request.

    Args:
        provider: Provider identifier, treated as an opaque string.
        model: Model name; ``None`` serializes as ``null`` and never
            collides with an empty-string model.
        prompt: Prompt text; surrounding whitespace is ignored.
        context: Ordered prior turns.

    Returns:
        64-character hex digest.

    Raises:
        TypeError: If provider or model cannot be serialized to JSON.
    """
    key_data = {
        "provider": provider,
        "model": model,
        "prompt": prompt.strip(),
        "contextHash": generate_context_hash(context),
    }
    return hash_content(json.dumps(key_data))
