"""
Constantes globales pour CineScan.

Ce module contient les constantes utilisees dans l'application:
- Extensions video acceptees lors du parcours du partage
- Noms de repertoires de bonus a ignorer (avec leur sous-arborescence)
- Limites de concurrence par defaut
"""

# Extensions video reconnues (comparaison insensible a la casse)
VIDEO_EXTENSIONS = frozenset({
    ".mp4",
    ".mkv",
    ".avi",
    ".mov",
    ".flv",
    ".wmv",
    ".webm",
})

# Repertoires de bonus: ignores avec tout leur contenu
FEATURETTE_DIRECTORIES = frozenset({
    "featurette",
    "featurettes",
    "feat",
})

# Entrees speciales retournees par certains serveurs SMB
SPECIAL_DIRECTORIES = frozenset({".", ".."})

# Concurrence par defaut
DEFAULT_MOVIE_WORKERS = 10
DEFAULT_IMAGE_WORKERS = 20
