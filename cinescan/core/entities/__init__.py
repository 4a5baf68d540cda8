"""
Business entities representing core domain concepts.

Exports:
- EnrichedMovie: Movie being enriched, owned by one processing unit
- Genre: TMDB genre (shared reference data)
- CreditedPerson: Cast or crew member of a movie
- RoleKind: CAST or CREW
- AssetKind: Movie artwork kinds with their TMDB image sizes
"""

from cinescan.core.entities.movie import (
    CAST_ROLE_LABEL,
    AssetKind,
    CreditedPerson,
    EnrichedMovie,
    Genre,
    RoleKind,
)

__all__ = [
    "CAST_ROLE_LABEL",
    "AssetKind",
    "CreditedPerson",
    "EnrichedMovie",
    "Genre",
    "RoleKind",
]
