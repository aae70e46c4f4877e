"""
E-Divisive method for changepoint detection.

Divisive hierarchical segmentation using energy statistics, validated by
within-cluster permutation tests.
"""

from .edivisive_method import EDivisiveMethod
from .config import (
    SIG_LEVEL, N_PERMUTATIONS, MIN_CLUSTER_SIZE, BOUNDARY_TOLERANCE, EDIVISIVE_SEED,
    validate_config
)
from .distance import DistanceMatrix
from .energy import Splitter, SplitCache, calculate_energy, find_best_split, best_cluster_split
from .permutation import PermutationTester, PermutationSummary, cluster_permutation
from .detector import ChangepointSet, ChangeSummary, DivisiveDetector, detect_changes

__all__ = [
    'EDivisiveMethod',
    'SIG_LEVEL', 'N_PERMUTATIONS', 'MIN_CLUSTER_SIZE', 'BOUNDARY_TOLERANCE', 'EDIVISIVE_SEED',
    'validate_config',
    'DistanceMatrix',
    'Splitter', 'SplitCache', 'calculate_energy', 'find_best_split', 'best_cluster_split',
    'PermutationTester', 'PermutationSummary', 'cluster_permutation',
    'ChangepointSet', 'ChangeSummary', 'DivisiveDetector', 'detect_changes'
]
