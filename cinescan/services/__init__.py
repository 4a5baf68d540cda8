"""
Services metier de CineScan.

- directory_walker : Parcours du partage et extraction des candidats
- credit_filter : Politique d'importance des credits
- metadata_enricher : Identification, genres et credits TMDB
- asset_fetcher : Telechargement des visuels
- pipeline : Orchestration concurrente du traitement
"""

from cinescan.services.asset_fetcher import AssetFetcher, AssetReport
from cinescan.services.directory_walker import DirectoryWalker, WalkResult
from cinescan.services.metadata_enricher import EnrichmentResult, MetadataEnricher
from cinescan.services.pipeline import (
    CandidateOutcome,
    CandidateState,
    PipelineOrchestrator,
    PipelineReport,
)

__all__ = [
    "AssetFetcher",
    "AssetReport",
    "CandidateOutcome",
    "CandidateState",
    "DirectoryWalker",
    "EnrichmentResult",
    "MetadataEnricher",
    "PipelineOrchestrator",
    "PipelineReport",
    "WalkResult",
]
