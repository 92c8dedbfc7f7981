"""Pluralization rules and name casing helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

import inflect

# Nouns whose singular and plural forms are identical.
DEFAULT_UNCOUNTABLE = frozenset(
    {
        "equipment",
        "information",
        "rice",
        "money",
        "species",
        "series",
        "fish",
        "sheep",
        "jeans",
        "police",
    }
)

_ACRONYM_BOUNDARY = re.compile(r"(?<=[A-Z])(?=[A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[-\s_]+")


def underscore(name: str) -> str:
    """Convert a model name to its canonical snake_case form.

    Examples:
        "amazing-contact" -> "amazing_contact"
        "amazingContact"  -> "amazing_contact"
        "AmazingContact"  -> "amazing_contact"
    """
    result = _ACRONYM_BOUNDARY.sub("_", name.strip())
    result = _CAMEL_BOUNDARY.sub("_", result)
    return _SEPARATORS.sub("_", result).strip("_").lower()


@runtime_checkable
class Pluralizer(Protocol):
    """Inflection rules used by the name resolver."""

    def singularize(self, word: str) -> str: ...

    def pluralize(self, word: str) -> str: ...

    def is_uncountable(self, word: str) -> bool: ...


class InflectPluralizer:
    """Pluralizer backed by the ``inflect`` engine.

    ``inflect`` has no public notion of uncountable nouns, so this class keeps
    its own override list on top of it, plus a table of irregular forms that
    take precedence over the engine's rules.
    """

    def __init__(
        self,
        uncountable: Iterable[str] | None = None,
        irregular: Mapping[str, str] | None = None,
    ) -> None:
        self._engine = inflect.engine()
        self._uncountable: set[str] = set(DEFAULT_UNCOUNTABLE)
        self._plurals: dict[str, str] = {}
        self._singulars: dict[str, str] = {}

        for word in uncountable or ():
            self.uncountable(word)
        for singular, plural in (irregular or {}).items():
            self.irregular(singular, plural)

    def uncountable(self, word: str) -> None:
        """Mark ``word`` as having identical singular and plural forms."""
        self._uncountable.add(word.lower())

    def irregular(self, singular: str, plural: str) -> None:
        """Register an irregular singular/plural pair."""
        self._plurals[singular.lower()] = plural.lower()
        self._singulars[plural.lower()] = singular.lower()

    def is_uncountable(self, word: str) -> bool:
        return word.lower() in self._uncountable

    def singularize(self, word: str) -> str:
        if not word or self.is_uncountable(word):
            return word
        lowered = word.lower()
        if lowered in self._singulars:
            return self._singulars[lowered]
        if lowered in self._plurals:
            return word

        singular = self._engine.singular_noun(word)
        # singular_noun returns False when the word is already singular
        return singular or word

    def pluralize(self, word: str) -> str:
        if not word or self.is_uncountable(word):
            return word
        lowered = word.lower()
        if lowered in self._plurals:
            return self._plurals[lowered]
        if lowered in self._singulars:
            return word

        return self._engine.plural_noun(word)
