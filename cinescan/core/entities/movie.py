"""
Entites de metadonnees de films.

Un EnrichedMovie appartient exclusivement a l'unite de traitement de son
candidat: il est mute etape par etape (identification, genres, visuels)
puis transmis a la couche de persistance.
"""

import math
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional

from cinescan.core.value_objects import MovieCandidate

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class Genre:
    """Genre TMDB, donnee de reference partagee entre les films."""

    id: int
    name: str


class RoleKind(str, Enum):
    """Nature d'un credit: acteur (cast) ou membre de l'equipe (crew)."""

    CAST = "cast"
    CREW = "crew"


# Libelle de role enregistre pour les acteurs
CAST_ROLE_LABEL = "actor"


@dataclass(frozen=True)
class CreditedPerson:
    """
    Personne creditee sur un film (acteur ou membre de l'equipe).

    Attributes:
        provider_id: ID TMDB de la personne
        name: Nom affiche
        role_kind: CAST ou CREW
        character: Personnage joue (acteurs uniquement, vide sinon)
        department: Departement TMDB (equipe uniquement)
        job: Poste TMDB (equipe uniquement)
        image_ref: Reference distante du portrait (profile_path TMDB)
        local_image_path: Chemin local du portrait une fois telecharge
        order: Ordre d'apparition au generique (acteurs)
    """

    provider_id: int
    name: str
    role_kind: RoleKind
    character: str = ""
    department: str = ""
    job: str = ""
    image_ref: Optional[str] = None
    local_image_path: Optional[str] = None
    order: Optional[int] = None

    @property
    def role_label(self) -> str:
        """Libelle persiste: 'actor' pour le cast, le poste pour l'equipe."""
        if self.role_kind is RoleKind.CAST:
            return CAST_ROLE_LABEL
        return self.job


class AssetKind(str, Enum):
    """Visuels d'un film, avec la resolution TMDB demandee pour chacun."""

    POSTER_LARGE = "poster_large"
    POSTER_SNAPSHOT = "poster_snapshot"
    BACKDROP = "backdrop"

    @property
    def image_size(self) -> str:
        return _ASSET_SIZES[self]


_ASSET_SIZES = {
    AssetKind.POSTER_LARGE: "w780",
    AssetKind.POSTER_SNAPSHOT: "w185",
    AssetKind.BACKDROP: "w1280",
}


@dataclass
class EnrichedMovie:
    """
    Film en cours d'enrichissement.

    Tous les champs d'enrichissement ont une valeur vide par defaut: un film
    partiellement enrichi reste persistable.

    Attributes:
        candidate: Candidat d'origine (chemin, titre et annee du fichier)
        provider_id: ID TMDB (0 tant que non identifie)
        original_title: Titre original
        title: Titre affiche
        vote_average: Note moyenne TMDB (0-10)
        release_date: Date de sortie ISO (YYYY-MM-DD)
        summary: Synopsis
        poster_large: Reference distante puis chemin local de l'affiche
        poster_snapshot: Reference distante puis chemin local de la vignette
        backdrop: Reference distante puis chemin local du fond d'ecran
        genres: Genres ordonnes tels que retournes par TMDB
    """

    candidate: MovieCandidate
    provider_id: int = 0
    original_title: str = ""
    title: str = ""
    vote_average: float = 0.0
    release_date: str = ""
    summary: str = ""
    poster_large: Optional[str] = None
    poster_snapshot: Optional[str] = None
    backdrop: Optional[str] = None
    genres: list[Genre] = field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: MovieCandidate) -> "EnrichedMovie":
        """Cree un film vierge a partir d'un candidat."""
        return cls(candidate=candidate)

    @property
    def path(self) -> str:
        return self.candidate.path

    @property
    def is_identified(self) -> bool:
        """True si le film a ete associe a un ID TMDB."""
        return self.provider_id > 0

    def asset_ref(self, kind: AssetKind) -> Optional[str]:
        """Retourne la reference (distante ou locale) du visuel demande."""
        return getattr(self, kind.value)

    def apply(self, **changes: Any) -> "EnrichedMovie":
        """
        Applique un lot de modifications apres validation.

        Point d'entree unique pour muter le film: les noms de champs
        inconnus et les valeurs invalides levent ValueError sans appliquer
        aucune modification du lot.

        Args:
            **changes: Champs a modifier et leurs nouvelles valeurs

        Returns:
            Le film lui-meme, pour chainer les appels

        Raises:
            ValueError: Champ inconnu, note hors [0, 10] ou date non ISO
        """
        unknown = set(changes) - _ENRICHABLE_FIELDS
        if unknown:
            raise ValueError(f"Champs non modifiables: {sorted(unknown)}")

        if "provider_id" in changes and changes["provider_id"] < 0:
            raise ValueError(f"ID fournisseur negatif: {changes['provider_id']}")

        if "vote_average" in changes:
            vote = changes["vote_average"]
            vote = 0.0 if vote is None else float(vote)
            if math.isnan(vote) or not 0.0 <= vote <= 10.0:
                raise ValueError(f"Note moyenne invalide: {vote}")
            changes["vote_average"] = vote

        if "release_date" in changes:
            release_date = changes["release_date"] or ""
            if release_date and not _ISO_DATE.match(release_date):
                raise ValueError(f"Date de sortie non ISO: {release_date}")
            changes["release_date"] = release_date

        if "genres" in changes:
            changes["genres"] = list(changes["genres"])

        for name, value in changes.items():
            if name in _TEXT_FIELDS and value is None:
                value = ""
            setattr(self, name, value)
        return self


_ENRICHABLE_FIELDS = frozenset(f.name for f in fields(EnrichedMovie)) - {"candidate"}
_TEXT_FIELDS = frozenset({"original_title", "title", "summary"})
