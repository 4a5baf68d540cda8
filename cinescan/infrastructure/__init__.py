"""
Couche infrastructure de CineScan.

- persistence/ : Stockage SQLite via SQLModel
"""
