"""Model and factory definitions for mockforge."""

from mockforge.schema.factory import Factory, Trait, sequence
from mockforge.schema.registry import FactoryRegistry, ModelRegistry, resolve_type

__all__ = [
    "Factory",
    "FactoryRegistry",
    "ModelRegistry",
    "Trait",
    "resolve_type",
    "sequence",
]
