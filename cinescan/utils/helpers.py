"""
Fonctions utilitaires partagees dans le projet CineScan.

Ce module centralise les fonctions reutilisees a travers le codebase :
- strip_invisible_chars : retrait des caracteres de controle
- safe_path_segment : nom de dossier/fichier sur pour le disque local
- join_remote : concatenation de chemins relatifs du partage
"""

import re
import unicodedata

# Caracteres interdits dans un nom de fichier (Windows inclus)
_FORBIDDEN_CHARS = re.compile(r'[<>:"/\\|?*]')


def strip_invisible_chars(text: str) -> str:
    """
    Retire les caractères Unicode invisibles d'une chaîne.

    Supprime les caractères de contrôle et les marques directionnelles
    qui peuvent provenir des APIs (LRM, RLM, BOM, etc.).
    """
    return "".join(
        char for char in text if unicodedata.category(char) not in ("Cf", "Cc")
    )


def safe_path_segment(name: str, fallback: str = "unknown") -> str:
    """
    Transforme un nom (titre, nom de personne) en segment de chemin valide.

    Les separateurs et caracteres interdits sont remplaces par "_", les
    points et espaces en bordure sont retires ("..", "." deviennent vides).

    Args:
        name: Nom a convertir
        fallback: Valeur retournee si le resultat est vide

    Returns:
        Segment de chemin ne contenant aucun separateur
    """
    cleaned = _FORBIDDEN_CHARS.sub("_", strip_invisible_chars(name))
    cleaned = cleaned.strip().strip(".").strip()
    return cleaned or fallback


def join_remote(parent: str, name: str) -> str:
    """Concatene un repertoire relatif et un nom d'entree ("" = racine)."""
    if not parent:
        return name
    return f"{parent.rstrip('/')}/{name}"
