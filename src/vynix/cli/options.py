"""Shared CLI options for vynix commands."""

from typing import Annotated

import typer

from vynix.config.schema import ProviderType

ProviderOption = Annotated[
    str | None,
    typer.Option(
        "--provider",
        "-p",
        help="AI provider (lmstudio, openai, google, groq, openrouter).",
    ),
]

ModelOption = Annotated[
    str | None,
    typer.Option(
        "--model",
        "-m",
        help="Model to use. Defaults to the provider's default model.",
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
]


def get_provider_name(provider: str | None, default: str = "lmstudio") -> str:
    """Validate a CLI provider name.

    Args:
        provider: Provider name string or None.
        default: Default provider if none specified.

    Returns:
        The normalized provider identifier.

    Raises:
        typer.BadParameter: If provider name is invalid.
    """
    provider_str = (provider or default).lower()
    try:
        return ProviderType(provider_str).value
    except ValueError as e:
        valid = [p.value for p in ProviderType]
        raise typer.BadParameter(
            f"Invalid provider '{provider_str}'. Valid options: {', '.join(valid)}"
        ) from e
