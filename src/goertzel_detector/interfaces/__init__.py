"""Interface definitions for detector components."""

from .data_models import (
    DEFAULT_CENTER_OFFSET,
    BlockReading,
    DetectorConfig,
    WindowMode,
)
from .single_bin import SingleBinDetector

__all__ = [
    'DEFAULT_CENTER_OFFSET',
    'BlockReading',
    'DetectorConfig',
    'WindowMode',
    'SingleBinDetector',
]
