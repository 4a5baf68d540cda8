"""
Filtre d'importance des credits.

Seuls les postes "principaux" de l'equipe sont conserves: realisation,
production, photographie, musique et son, supervision des effets visuels,
scenario, direction artistique, costumes et maquillage. La politique est
une table statique de paires (departement, poste), sans logique conditionnelle.

Les acteurs sont filtres separement: un personnage marque "uncredited" est
ecarte.
"""

from typing import Iterable

from cinescan.core.entities import CreditedPerson

# Table des postes principaux, cles (departement TMDB, poste TMDB)
PRINCIPAL_ROLES: frozenset[tuple[str, str]] = frozenset({
    ("Directing", "Director"),
    ("Directing", "Co-Director"),
    ("Production", "Producer"),
    ("Camera", "Director of Photography"),
    ("Sound", "Original Music Composer"),
    ("Sound", "Sound Designer"),
    ("Visual Effects", "VFX Supervisor"),
    ("Visual Effects", "Visual Effects Supervisor"),
    ("Visual Effects", "Visual Effects Art Director"),
    ("Writing", "Writer"),
    ("Writing", "Original Film Writer"),
    ("Writing", "Co-Writer"),
    ("Writing", "Scenario Writer"),
    ("Writing", "Teleplay"),
    ("Writing", "Screenplay"),
    ("Art", "Art Direction"),
    ("Art", "Co-Art Director"),
    ("Art", "Production Design"),
    ("Art", "Art Designer"),
    ("Art", "Set Designer"),
    ("Art", "Property Master"),
    ("Costume & Make-Up", "Costume Designer"),
    ("Costume & Make-Up", "Makeup Designer"),
})

# Marqueur TMDB des roles non credites (comparaison sensible a la casse)
UNCREDITED_MARKER = "uncredited"


def is_principal(department: str, job: str) -> bool:
    """
    Indique si un poste fait partie de l'equipe principale.

    Un departement inconnu retourne toujours False.
    """
    return (department, job) in PRINCIPAL_ROLES


def is_credited(character: str) -> bool:
    """Indique si un role d'acteur est credite au generique."""
    return UNCREDITED_MARKER not in character


def filter_cast(cast: Iterable[CreditedPerson]) -> list[CreditedPerson]:
    """Retire les acteurs non credites, en conservant l'ordre."""
    return [person for person in cast if is_credited(person.character)]


def filter_crew(crew: Iterable[CreditedPerson]) -> list[CreditedPerson]:
    """Conserve uniquement l'equipe principale, en conservant l'ordre."""
    return [person for person in crew if is_principal(person.department, person.job)]
