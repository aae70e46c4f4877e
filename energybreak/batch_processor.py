"""
Batch processing for energybreak changepoint and impact detection.
"""

import pandas as pd
import numpy as np
from joblib import Parallel, delayed
from tqdm.auto import tqdm
from pathlib import Path
from typing import Tuple, Dict, Any, Optional
import logging

from .methods import METHODS
from .methods.base import standardize_output
from .config import N_JOBS

logger = logging.getLogger(__name__)


def get_method(method: str, config: Optional[Dict[str, Any]] = None):
    if method not in METHODS:
        raise ValueError(f"Unknown method: {method}. Choose one of {sorted(METHODS)}")
    return METHODS[method](config)


def process_one_series(id_value, g: pd.DataFrame, method: str = 'edivisive',
                       config: Optional[Dict[str, Any]] = None) -> Tuple[Dict[str, float], Dict[str, Any]]:
    """
    Process a single time series with the selected method.

    Args:
        id_value: Series identifier
        g: DataFrame with the series rows (index levels [id, time])
        method: Method name ('edivisive' or 'impact')
        config: Method configuration

    Returns:
        Tuple of (predictors_dict, metadata_dict)
    """
    instance = get_method(method, config)
    try:
        g_sorted = g.sort_index(level='time')
        vals = g_sorted['value'].to_numpy(float)
        per = g_sorted['period'].to_numpy() if 'period' in g_sorted.columns else None
        preds, meta = instance.compute_predictors(vals, per)
        return standardize_output(preds, meta, id_value)
    except MemoryError:
        raise
    except Exception as e:
        logger.error(f"Error processing series {id_value}: {str(e)}")
        default_meta = {
            'method': method,
            'status': 'failed',
            'error': str(e),
            'n_observations': len(g) if g is not None else 0
        }
        return standardize_output(instance.default_predictors(), default_meta, id_value)


def validate_input_dataframe(df: pd.DataFrame, require_period: bool = False) -> bool:
    if isinstance(df.index, pd.MultiIndex):
        if list(df.index.names) != ['id', 'time']:
            logger.warning("MultiIndex should have names ['id', 'time']")
            return False
    else:
        if not {'id', 'time'}.issubset(df.columns):
            logger.error("DataFrame must have 'id' and 'time' columns or MultiIndex [id, time]")
            return False
    required_cols = ['value', 'period'] if require_period else ['value']
    if not all(col in df.columns for col in required_cols):
        logger.error(f"DataFrame must have columns: {required_cols}")
        return False
    if not pd.api.types.is_numeric_dtype(df['value']):
        logger.error("'value' column must be numeric")
        return False
    if 'period' in df.columns:
        if not pd.api.types.is_numeric_dtype(df['period']):
            logger.error("'period' column must be numeric")
            return False
        unique_periods = df['period'].unique()
        if not all(p in [0, 1] for p in unique_periods):
            logger.error("'period' column must contain only 0 and 1")
            return False
    if df.empty:
        logger.error("DataFrame cannot be empty")
        return False
    return True


def load_input(path: str) -> pd.DataFrame:
    """Read parquet, or CSV when the path ends in ``.csv``."""
    if str(path).lower().endswith(".csv"):
        return pd.read_csv(path)
    return pd.read_parquet(path)


# Save outputs based on file extension (Parquet by default, CSV if requested)
def _save_df(df: pd.DataFrame, path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    if str(path).lower().endswith(".csv"):
        df.to_csv(path, index=True)
    else:
        df.to_parquet(path, index=True)


def run_batch(input_path: str, out_pred_path: str, out_meta_path: str,
              method: str = 'edivisive', config: Optional[Dict[str, Any]] = None,
              n_jobs: Optional[int] = None, verbose: bool = True) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Run the selected method over every series of a dataset.

    Args:
        input_path: Parquet or CSV file with [id, time] and 'value' (and 'period')
        out_pred_path: Output predictors file (parquet, or CSV by suffix)
        out_meta_path: Output metadata file (parquet, or CSV by suffix)
        method: 'edivisive' or 'impact'
        config: Method configuration
        n_jobs: Number of parallel jobs over series
        verbose: Whether to show progress

    Returns:
        Tuple of (predictors_df, metadata_df) indexed by id
    """
    if n_jobs is None:
        n_jobs = N_JOBS
    if config is None:
        config = {}
    get_method(method, config).validate_config()

    logger.info(f'Loading {input_path}')
    df = load_input(input_path)

    if not validate_input_dataframe(df, require_period=(method == 'impact')):
        raise ValueError("Invalid input DataFrame structure")
    if not isinstance(df.index, pd.MultiIndex):
        df = df.set_index(['id', 'time']).sort_index()

    grouped = df.groupby(level='id')
    ids = list(grouped.groups.keys())
    logger.info(f'Total series: {len(ids)}')

    if n_jobs == 1:
        results = [
            process_one_series(idv, grouped.get_group(idv), method, config)
            for idv in tqdm(ids, desc=f'{method} (ids)', disable=not verbose)
        ]
    else:
        iterator = tqdm(ids, desc=f'{method} (ids)') if verbose else ids
        results = Parallel(n_jobs=n_jobs, verbose=0, batch_size=1)(
            delayed(process_one_series)(idv, grouped.get_group(idv), method, config)
            for idv in iterator
        )

    pred_df = pd.DataFrame([r[0] for r in results]).set_index('id').sort_index()
    meta_df = pd.DataFrame([r[1] for r in results]).set_index('id').sort_index()

    _save_df(pred_df, out_pred_path)
    _save_df(meta_df, out_meta_path)
    logger.info(f'Saved predictors to: {out_pred_path}')
    logger.info(f'Saved metadata to: {out_meta_path}')

    return pred_df, meta_df


def get_processing_summary(pred_df: pd.DataFrame, meta_df: pd.DataFrame) -> Dict[str, Any]:
    summary = {
        'n_series': len(pred_df),
        'n_successful': int((meta_df['status'] == 'success').sum()),
        'n_failed': int((meta_df['status'] == 'failed').sum()),
        'n_predictors': len(pred_df.columns),
        'predictor_columns': list(pred_df.columns),
        'missing_values': pred_df.isnull().sum().to_dict(),
    }
    if 'processing_time' in meta_df.columns:
        summary['avg_processing_time'] = float(meta_df['processing_time'].mean())
    numeric_cols = pred_df.select_dtypes(include=[np.number]).columns
    if len(numeric_cols) > 0:
        summary['predictor_stats'] = {
            'mean': pred_df[numeric_cols].mean().to_dict(),
            'min': pred_df[numeric_cols].min().to_dict(),
            'max': pred_df[numeric_cols].max().to_dict()
        }
    return summary
