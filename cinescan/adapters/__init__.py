"""
Couche adaptateurs (infrastructure).

Les adaptateurs implementent les ports definis dans core/ports/ et fournissent
des implementations concretes pour les systemes externes.

Sous-packages :
- api/ : Client TMDB, cache disque et retry
- cli/ : Interface ligne de commande (Typer + Rich)
- parsing/ : Parsing des noms de fichiers de films
- share/ : Acces au partage (SMB ou repertoire local)

Chaque adaptateur depend de core/ mais core/ ne depend jamais des adaptateurs.
"""
