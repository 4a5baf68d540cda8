"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des données
- IMovieStore : Stockage des films, genres et personnes

Ports client API : Contrats pour le fournisseur de métadonnées
- IMetadataProvider : Recherche, genres, crédits et images
- SearchMatch : Résultat de recherche
- MovieCredits : Crédits bruts d'un film

Ports partage : Contrats d'accès au partage distant
- IRemoteShare : Connexion et listage de répertoires
- RemoteEntry : Entrée d'un répertoire
"""

from cinescan.core.ports.api_clients import (
    IMetadataProvider,
    MovieCredits,
    SearchMatch,
)
from cinescan.core.ports.remote_share import (
    IRemoteShare,
    RemoteEntry,
)
from cinescan.core.ports.repositories import (
    IMovieStore,
)

__all__ = [
    # Repositories
    "IMovieStore",
    # Clients API
    "IMetadataProvider",
    "MovieCredits",
    "SearchMatch",
    # Partage distant
    "IRemoteShare",
    "RemoteEntry",
]
