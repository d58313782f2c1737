"""CLI layer for vynix.

Built on Typer with Rich formatting.

Usage:
    vynix generate "Explain closures" --provider openrouter
    vynix chat
"""

from vynix.cli.app import app, main
from vynix.cli.options import ModelOption, ProviderOption, VerboseOption

__all__ = [
    "app",
    "main",
    "ModelOption",
    "ProviderOption",
    "VerboseOption",
]
