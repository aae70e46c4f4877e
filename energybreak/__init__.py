"""
energybreak: changepoint and impact detection for univariate series

Two engines share this package:
- E-Divisive: divisive segmentation that splits a series where the energy
  distance between the parts is largest, while a permutation test finds the
  split significant
- Impact: Monte Carlo estimate of how far, and in which direction, the level
  moved between two adjacent sub-series
"""

from .methods import EDivisiveMethod, ImpactMethod, BaseMethod, METHODS
from .methods.base import (
    CommonConfig, InvalidArgumentError, NumericInputError, standardize_output
)
from .methods.edivisive import ChangeSummary, DivisiveDetector, detect_changes
from .methods.impact import (
    ImpactEstimator, ImpactResult, Operator, count_greater, count_less, detect_impact
)

__version__ = "1.0.0"
__description__ = "Energy-statistic changepoint detection and bootstrap impact estimation"


# Convenience functions
def quick_setup(method: str = 'edivisive', **kwargs) -> dict:
    """
    Quick setup for a detection run.

    Args:
        method: Method to use ('edivisive' or 'impact')
        **kwargs: Method-specific parameters

    Returns:
        Configuration dictionary
    """
    config = CommonConfig.get_default_config()
    config.update(kwargs)
    config['method'] = method
    return config


def run_batch(input_path: str, out_pred_path: str, out_meta_path: str,
              method: str = 'edivisive', **kwargs) -> tuple:
    """
    Run batch processing with specified method.

    Args:
        input_path: Input parquet (or CSV) file path
        out_pred_path: Output predictors file path
        out_meta_path: Output metadata file path
        method: Method to use ('edivisive' or 'impact')
        **kwargs: ``n_jobs``, ``verbose`` and method-specific parameters

    Returns:
        Tuple of (predictors_df, metadata_df)
    """
    from .batch_processor import run_batch as _run_batch
    n_jobs = kwargs.pop('n_jobs', None)
    verbose = kwargs.pop('verbose', True)
    return _run_batch(input_path, out_pred_path, out_meta_path, method=method,
                      config=kwargs, n_jobs=n_jobs, verbose=verbose)


def compute_predictors_for_values(values, periods=None, method: str = 'edivisive', **kwargs) -> tuple:
    """
    Compute predictors for a single time series.

    Args:
        values: Time series values
        periods: Period indicators (required by 'impact')
        method: Method to use ('edivisive' or 'impact')
        **kwargs: Method-specific parameters

    Returns:
        Tuple of (predictors_dict, metadata_dict)
    """
    if method not in METHODS:
        raise ValueError(f"Unknown method: {method}. Choose 'edivisive' or 'impact'")
    return METHODS[method](kwargs).compute_predictors(values, periods)


def validate_config(method: str = 'edivisive') -> None:
    """
    Validate configuration for specified method.

    Args:
        method: Method to validate ('edivisive' or 'impact')
    """
    if method == 'edivisive':
        from .methods.edivisive.config import validate_config as edivisive_validate
        edivisive_validate()
    elif method == 'impact':
        from .methods.impact.config import validate_config as impact_validate
        impact_validate()
    else:
        raise ValueError(f"Unknown method: {method}. Choose 'edivisive' or 'impact'")


__all__ = [
    'EDivisiveMethod', 'ImpactMethod', 'BaseMethod', 'METHODS',
    'CommonConfig', 'InvalidArgumentError', 'NumericInputError', 'standardize_output',
    'ChangeSummary', 'DivisiveDetector', 'detect_changes',
    'ImpactEstimator', 'ImpactResult', 'Operator', 'count_greater', 'count_less', 'detect_impact',
    'quick_setup', 'run_batch', 'compute_predictors_for_values', 'validate_config'
]
