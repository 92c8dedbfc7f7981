"""Name normalization for mockforge."""

from mockforge.naming.inflector import (
    DEFAULT_UNCOUNTABLE,
    InflectPluralizer,
    Pluralizer,
    underscore,
)
from mockforge.naming.resolver import SINGULARIZED_WARNING, NameResolver

__all__ = [
    "DEFAULT_UNCOUNTABLE",
    "InflectPluralizer",
    "NameResolver",
    "Pluralizer",
    "SINGULARIZED_WARNING",
    "underscore",
]
