"""Dividend data provider registry."""

from __future__ import annotations

from divly.config import PayoutProviderType
from divly.providers.base import BaseDividendProvider

# Lazy registry: classes are imported on demand so optional dependencies
# are only loaded for the providers actually used.
PROVIDER_CLASSES: dict[PayoutProviderType, str] = {
    PayoutProviderType.MOCK: "divly.providers.mock.MockProvider",
}


def create_provider(
    provider_type: PayoutProviderType,
    **kwargs,
) -> BaseDividendProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseDividendProvider", "PROVIDER_CLASSES", "create_provider"]
