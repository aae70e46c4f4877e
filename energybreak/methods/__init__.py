"""
Methods package for changepoint detection.

This package contains the two detection techniques:
- edivisive: divisive segmentation with energy statistics and permutation tests
- impact: bootstrap random-walk estimate of a level shift between two sub-series
"""

from .base import BaseMethod
from .edivisive import EDivisiveMethod
from .impact import ImpactMethod

METHODS = {
    'edivisive': EDivisiveMethod,
    'impact': ImpactMethod,
}

__all__ = ['BaseMethod', 'EDivisiveMethod', 'ImpactMethod', 'METHODS']
