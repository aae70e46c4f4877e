"""
Abstract base class for changepoint detection methods.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Tuple, Optional
import logging
import time

import numpy as np

from .numeric import as_vector

logger = logging.getLogger(__name__)


class BaseMethod(ABC):
    """
    Abstract base class for changepoint detection methods.

    Subclasses implement ``_compute`` for a single validated series; the
    shared ``compute_predictors`` wrapper adds timing, status metadata and
    the neutral fallback used by the batch pipeline when a series fails.
    """

    name = 'base'
    version = '1.0.0'

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the method with optional configuration.

        Args:
            config: Method-specific configuration dictionary
        """
        self.config = config or {}
        self.method_name = self.__class__.__name__

    @abstractmethod
    def _compute(self, values: np.ndarray, periods: Optional[np.ndarray],
                 **kwargs) -> Tuple[Dict[str, float], Dict[str, Any]]:
        """
        Compute predictors for one validated series.

        Args:
            values: Validated time series values
            periods: Period indicators (0 before the break, 1 after) or None
            **kwargs: Per-call overrides of the configuration

        Returns:
            Tuple of (predictors_dict, metadata_dict)
        """

    @abstractmethod
    def default_predictors(self) -> Dict[str, float]:
        """Neutral predictor values reported when a series cannot be processed."""

    @abstractmethod
    def validate_config(self) -> None:
        """
        Validate method-specific configuration parameters.

        Raises:
            ValueError: If configuration is invalid
        """

    def compute_predictors(self, values, periods=None,
                           **kwargs) -> Tuple[Dict[str, float], Dict[str, Any]]:
        """
        Compute predictors for a single time series.

        Errors are logged and turned into default predictors with
        ``status='failed'`` so that one bad series never aborts a batch.

        Args:
            values: Time series values
            periods: Optional period indicators (0 for pre-break, 1 for post-break)
            **kwargs: Per-call overrides of the configuration

        Returns:
            Tuple of (predictors_dict, metadata_dict)
        """
        start_time = time.time()
        n_observations = len(values) if values is not None else 0
        try:
            values, periods = self.preprocess_data(values, periods)
            predictors, metadata = self._compute(values, periods, **kwargs)
            metadata.update({
                'method': self.name,
                'processing_time': time.time() - start_time,
                'status': 'success',
                'n_observations': n_observations,
            })
            return predictors, metadata
        except MemoryError:
            raise
        except Exception as e:
            logger.error(f"{self.name} failed on series of length {n_observations}: {e}")
            metadata = {
                'method': self.name,
                'processing_time': time.time() - start_time,
                'status': 'failed',
                'error': str(e),
                'n_observations': n_observations,
            }
            return self.default_predictors(), metadata

    def get_method_info(self) -> Dict[str, str]:
        """
        Get information about the method.

        Returns:
            Dictionary with method information
        """
        return {
            'name': self.method_name,
            'description': self.__doc__ or 'No description available',
            'version': getattr(self, 'version', '1.0.0')
        }

    def preprocess_data(self, values, periods) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        """
        Validate and convert raw inputs (can be overridden by subclasses).

        Args:
            values: Raw time series values
            periods: Raw period indicators or None

        Returns:
            Tuple of (processed_values, processed_periods)
        """
        values = as_vector(values)
        if periods is not None:
            periods = np.asarray(periods).astype(int)
            if len(periods) != len(values):
                raise ValueError("Values and periods must have the same length")
        return values, periods
