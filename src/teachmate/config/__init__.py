"""Teachmate configuration module."""

from teachmate.config.provider_modes import (
    ProviderMode,
    effective_knowledge_provider,
    effective_llama_stack_provider,
    provider_modes,
)
from teachmate.config.settings import Settings, get_settings, reset_settings_cache, settings

__all__ = [
    "settings",
    "Settings",
    "get_settings",
    "reset_settings_cache",
    "ProviderMode",
    "effective_knowledge_provider",
    "effective_llama_stack_provider",
    "provider_modes",
]
