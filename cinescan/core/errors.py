"""
Hierarchie des erreurs du domaine CineScan.

Chaque famille d'erreur correspond a une politique de propagation:
- ParseError : nom de fichier inexploitable, le fichier est ignore
- ShareConnectionError / ShareAuthError : fatales, le run s'arrete avant traitement
- ShareListingError : un sous-repertoire illisible, le parcours continue
- ProviderError : appel API en echec, les champs concernes restent vides
- NotFoundError : aucune correspondance, on persiste les donnees du nom de fichier
- PersistError : transaction en echec, le film est abandonne
- AssetError : un visuel en echec, son chemin local reste vide
"""

from typing import Optional


class CineScanError(Exception):
    """Classe de base de toutes les erreurs CineScan."""


class ParseError(CineScanError):
    """Erreur de parsing d'un chemin de fichier."""


class MalformedNameError(ParseError):
    """
    Le nom de fichier ne contient pas d'annee entre parentheses.

    Attributes:
        path: Chemin du fichier concerne
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Aucune annee trouvee dans le nom de fichier: {path}")


class ShareConnectionError(CineScanError):
    """Connexion au partage distant impossible."""


class ShareAuthError(ShareConnectionError):
    """Authentification refusee par le partage distant."""


class ShareListingError(CineScanError):
    """
    Lecture d'un repertoire du partage impossible.

    Attributes:
        relative_path: Repertoire concerne (relatif a la racine du partage)
    """

    def __init__(self, relative_path: str, reason: str = "") -> None:
        self.relative_path = relative_path
        message = f"Lecture du repertoire impossible: {relative_path or '/'}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ProviderError(CineScanError):
    """Erreur de transport ou de deserialisation du fournisseur de metadonnees."""


class NotFoundError(ProviderError):
    """
    La recherche n'a retourne aucune correspondance.

    Attributes:
        title: Titre recherche
        year: Annee recherchee (optionnelle)
    """

    def __init__(self, title: str, year: Optional[int] = None) -> None:
        self.title = title
        self.year = year
        super().__init__(f"Aucun resultat pour: {title} ({year})")


class PersistError(CineScanError):
    """
    Echec de la transaction de persistance d'un film.

    Attributes:
        path: Chemin du film dont la transaction a echoue
    """

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        message = f"Echec de la persistance de: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class AssetError(CineScanError):
    """Echec du telechargement ou de l'ecriture d'un visuel."""
