"""Probing layer: classification, existence checks and token discovery."""

from nftscope.probing.classifier import (
    CLASSIFICATION_PROBES,
    ClassificationProbe,
    ContractClassifier,
)
from nftscope.probing.discovery import (
    DiscoveryConfig,
    TokenDiscoveryEngine,
    candidate_token_ids,
)
from nftscope.probing.existence import TokenExistenceProber

__all__ = [
    # Classification
    "CLASSIFICATION_PROBES",
    "ClassificationProbe",
    "ContractClassifier",
    # Existence
    "TokenExistenceProber",
    # Discovery
    "DiscoveryConfig",
    "TokenDiscoveryEngine",
    "candidate_token_ids",
]
