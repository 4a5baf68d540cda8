"""
Parser de chemins de fichiers de films.

Les fichiers de la videotheque suivent la convention "Titre (Annee) [Tag].ext":
- l'annee entre parentheses est obligatoire
- le tag entre crochets (edition, version) est optionnel

Toutes les valeurs extraites sont mises en minuscules et nettoyees pour que
les recherches et le dedoublonnage soient insensibles a la casse.
"""

from typing import Optional

from cinescan.core.errors import MalformedNameError
from cinescan.core.value_objects import MovieCandidate

# Separateurs pouvant preceder la parenthese ouvrante ("Titre (2001)", "Titre.(2001)")
_TITLE_SEPARATORS = " ._-"


class MovieFilenameParser:
    """
    Parser de chemins "Titre (Annee) [Tag].ext".

    Fonction pure: aucun acces disque ou reseau.
    """

    def parse(self, path: str) -> MovieCandidate:
        """
        Construit un MovieCandidate a partir d'un chemin.

        Args:
            path: Chemin du fichier (separateur "/" ou "\\")

        Returns:
            MovieCandidate avec chemin, titre, annee et tag en minuscules

        Raises:
            MalformedNameError: Si le nom ne contient pas de paire "(...)"
        """
        file_name = _last_segment(path)

        start = file_name.find("(")
        end = file_name.find(")", start + 1)
        if start == -1 or end == -1:
            raise MalformedNameError(path)

        year = file_name[start + 1:end]
        title = file_name[:start]
        if title and title[-1] in _TITLE_SEPARATORS:
            title = title[:-1]

        return MovieCandidate(
            path=path.strip().lower(),
            title=title.strip().lower(),
            year=year.strip().lower(),
            extra_tag=_extract_extra_tag(file_name),
        )


def _last_segment(path: str) -> str:
    """Retourne le dernier segment d'un chemin ("/" ou "\\")."""
    return path.replace("\\", "/").rsplit("/", 1)[-1]


def _extract_extra_tag(file_name: str) -> Optional[str]:
    """Extrait le contenu de la premiere paire "[...]", ou None si absente."""
    start = file_name.find("[")
    end = file_name.find("]", start + 1)
    if start == -1 or end == -1:
        return None
    return file_name[start + 1:end].strip().lower()


_default_parser = MovieFilenameParser()


def parse_movie_path(path: str) -> MovieCandidate:
    """Raccourci fonctionnel vers MovieFilenameParser.parse()."""
    return _default_parser.parse(path)
