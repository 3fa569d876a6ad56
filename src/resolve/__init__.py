"""Definition resolution: the orchestrator and its host-facing provider."""

from resolve.cancellation import CancellationToken
from resolve.provider import (
    DefinitionProvider,
    LanguageBinding,
    ProviderOptions,
    create_definition_provider,
    provider_from_config,
)
from resolve.resolver import DefinitionResolver, select_local_definition

__all__ = [
    "CancellationToken",
    "DefinitionProvider",
    "DefinitionResolver",
    "LanguageBinding",
    "ProviderOptions",
    "create_definition_provider",
    "provider_from_config",
    "select_local_definition",
]
