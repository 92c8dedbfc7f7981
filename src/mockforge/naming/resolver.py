"""Normalization of requested model names to canonical names."""

from __future__ import annotations

import logging
from collections.abc import Callable

from mockforge.core.types import NormalizedName
from mockforge.naming.inflector import Pluralizer, underscore

logger = logging.getLogger(__name__)

SINGULARIZED_WARNING = (
    "server.{method} was intended to be used with the singularized version of the model"
)


class NameResolver:
    """Maps whatever a caller typed to the canonical singular name.

    Compound names are matched as whole strings; only their last segment is
    ever inflected ("amazing_contacts" -> "amazing_contact").
    """

    def __init__(self, pluralizer: Pluralizer, is_known: Callable[[str], bool]) -> None:
        """Initialize resolver.

        Args:
            pluralizer: Inflection rules
            is_known: Predicate telling whether a canonical name is registered
        """
        self._pluralizer = pluralizer
        self._is_known = is_known

    @property
    def pluralizer(self) -> Pluralizer:
        return self._pluralizer

    def normalize(self, requested: str, method: str = "create") -> NormalizedName:
        """Normalize a requested name.

        Args:
            requested: Name as passed by the caller
            method: Public method being served, used in the warning text

        Returns:
            NormalizedName with the canonical name and an optional warning
        """
        canonical = underscore(requested)
        head, _, last = canonical.rpartition("_")

        if self._pluralizer.is_uncountable(last) or self._is_known(canonical):
            return NormalizedName(requested=requested, canonical=canonical)

        singular_last = self._pluralizer.singularize(last)
        singular = f"{head}_{singular_last}" if head else singular_last
        if singular != canonical and self._is_known(singular):
            logger.debug("Normalized '%s' to '%s'", requested, singular)
            return NormalizedName(
                requested=requested,
                canonical=singular,
                warning=SINGULARIZED_WARNING.format(method=method),
            )

        return NormalizedName(requested=requested, canonical=canonical)

    def singularize(self, name: str) -> str:
        """Canonical singular form of ``name`` without consulting the registry."""
        canonical = underscore(name)
        head, _, last = canonical.rpartition("_")
        singular_last = self._pluralizer.singularize(last)
        return f"{head}_{singular_last}" if head else singular_last

    def pluralize(self, name: str) -> str:
        """Plural form of a canonical name, used for collection labels."""
        head, _, last = name.rpartition("_")
        plural_last = self._pluralizer.pluralize(last)
        return f"{head}_{plural_last}" if head else plural_last
