"""
Signal processing for goertzel-detector.

The Goertzel recurrence, its window functions, and a synthetic ADC source.
"""

from .goertzel import GoertzelDetector, UNDEFINED_PURITY
from .signal_generator import ToneSignalGenerator
from .windows import exact_blackman, hamming, window_table, window_weight

__all__ = [
    'GoertzelDetector',
    'UNDEFINED_PURITY',
    'ToneSignalGenerator',
    'hamming',
    'exact_blackman',
    'window_weight',
    'window_table',
]
