"""Effective mode of each external collaborator.

Teachmate has two: ``llama_stack`` (text generation for the respond node)
and ``knowledge`` (the notebook tool behind the research branch and the
research routes). Each is ``real``, ``fake`` (deterministic in-process
stand-in) or ``off``. With ``knowledge`` off the research branch skips its
lookup and the research routes answer 503; with ``llama_stack`` off no
workflow is built.

``USE_FAKE_PROVIDERS=true`` turns every ``real`` collaborator into ``fake``
but leaves ``off`` alone.
"""

from __future__ import annotations

from typing import Literal

from teachmate.config.settings import Settings

ProviderMode = Literal["real", "fake", "off"]


def _resolve(mode: ProviderMode, settings: Settings) -> ProviderMode:
    if mode == "real" and settings.use_fake_providers:
        return "fake"
    return mode


def effective_llama_stack_provider(settings: Settings) -> ProviderMode:
    return _resolve(settings.llama_stack_provider, settings)


def effective_knowledge_provider(settings: Settings) -> ProviderMode:
    return _resolve(settings.knowledge_provider, settings)


def provider_modes(settings: Settings) -> dict[str, ProviderMode]:
    """Effective mode per collaborator, keyed as reported by ``/health``."""
    return {
        "llama_stack": effective_llama_stack_provider(settings),
        "knowledge": effective_knowledge_provider(settings),
    }
