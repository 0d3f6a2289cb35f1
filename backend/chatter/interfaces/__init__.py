"""Abstract interfaces for infrastructure abstraction."""

from chatter.interfaces.llm_provider import ILLMProvider, ProviderConfig
from chatter.interfaces.object_store import IObjectStore, ObjectInfo, StoredObject

__all__ = [
    "ILLMProvider",
    "IObjectStore",
    "ObjectInfo",
    "ProviderConfig",
    "StoredObject",
]
