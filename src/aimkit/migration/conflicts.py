"""Disjointness checks between canonical traits and user-added traits.

This module is the only place that decides whether a key in
``persona.traits_add`` collides with ``canonical.traits``. Anything that
inserts into ``traits_add`` in bulk goes through :func:`resolve_conflicts`
or :func:`add_traits`.
"""

import logging
from collections.abc import Iterable, Mapping

from aimkit.schema.layered import LayeredDocument

logger = logging.getLogger(__name__)


def find_conflicts(
    canonical_traits: Mapping[str, str], traits_add: Mapping[str, str]
) -> list[str]:
    """Return every key present in both maps.

    Values are not compared. Keys come back in ``traits_add`` order.

    Args:
        canonical_traits: Ground-truth attributes.
        traits_add: User-added attributes.

    Returns:
        Conflicting keys; empty when the maps are disjoint.
    """
    return [key for key in traits_add if key in canonical_traits]


def resolve_conflicts(
    canonical_traits: Mapping[str, str], traits_add: Mapping[str, str]
) -> tuple[dict[str, str], list[str]]:
    """Strip colliding keys from a copy of ``traits_add``.

    Neither input is modified. Canonical values always win.

    Returns:
        Tuple of (cleaned traits_add, conflicting keys).
    """
    conflicts = find_conflicts(canonical_traits, traits_add)
    rejected = set(conflicts)
    cleaned = {key: value for key, value in traits_add.items() if key not in rejected}
    if conflicts:
        logger.debug("Dropped %d conflicting trait(s): %s", len(conflicts), ", ".join(conflicts))
    return cleaned, conflicts


def add_traits(document: LayeredDocument, additions: Mapping[str, str]) -> list[str]:
    """Merge ``additions`` into the persona layer of ``document``.

    Keys that collide with canonical traits are rejected and recorded in
    ``normalized.conflicts``. Existing non-conflicting keys are overwritten.

    Args:
        document: Layered document to update in place.
        additions: Traits to add.

    Returns:
        The rejected keys.
    """
    cleaned, conflicts = resolve_conflicts(document.canonical.traits, additions)
    document.persona.traits_add.update(cleaned)
    for key in conflicts:
        if key not in document.normalized.conflicts:
            document.normalized.conflicts.append(key)
    return conflicts


def remove_traits(document: LayeredDocument, keys: Iterable[str]) -> list[str]:
    """Remove keys from ``persona.traits_add``; returns the keys actually removed."""
    removed = []
    for key in keys:
        if key in document.persona.traits_add:
            del document.persona.traits_add[key]
            removed.append(key)
    return removed
