"""
Common configuration parameters shared across all methods.
"""

from typing import Final, Dict, Any

from ...config import (
    SEED, N_JOBS, DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_PRED_PATH, DEFAULT_OUTPUT_META_PATH
)


class CommonConfig:
    """
    Common configuration parameters for all detection methods.
    """

    # Random seed for reproducibility
    SEED: Final[int] = SEED

    # Parallel processing
    N_JOBS: Final[int] = N_JOBS

    # File paths (can be overridden)
    DEFAULT_INPUT_PATH: Final[str] = DEFAULT_INPUT_PATH
    DEFAULT_OUTPUT_PRED_PATH: Final[str] = DEFAULT_OUTPUT_PRED_PATH
    DEFAULT_OUTPUT_META_PATH: Final[str] = DEFAULT_OUTPUT_META_PATH

    @classmethod
    def get_default_config(cls) -> Dict[str, Any]:
        """
        Get default configuration dictionary.

        Returns:
            Dictionary with default configuration values
        """
        return {
            'seed': cls.SEED,
            'n_jobs': cls.N_JOBS,
            'input_path': cls.DEFAULT_INPUT_PATH,
            'output_pred_path': cls.DEFAULT_OUTPUT_PRED_PATH,
            'output_meta_path': cls.DEFAULT_OUTPUT_META_PATH
        }

    @classmethod
    def validate_common_config(cls, config: Dict[str, Any]) -> None:
        """
        Validate common configuration parameters.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValueError: If configuration is invalid
        """
        if config.get('seed') is not None and config['seed'] < 0:
            raise ValueError("Seed must be non-negative")

        if config.get('n_jobs') is not None and config['n_jobs'] == 0:
            raise ValueError("Number of jobs must be non-zero")
