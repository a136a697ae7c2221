"""
goertzel-detector: Streaming Single-Bin Tone Detection

This package measures the power at ONE target frequency in a stream of
amplitude samples using the Goertzel recurrence, without computing a full
spectrum. It is the classic low-cost alternative to an FFT for DTMF
decoding, pilot-tone presence and similar "is this tone on?" checks.

Architecture:
    sampling loop → GoertzelDetector.add_sample() ... detect() → purity

The detector provides:
    1. Sample-by-sample and one-shot batch ingestion
    2. Optional Hamming / Exact Blackman windowing
    3. An amplitude-independent purity score (0-1)
    4. Self-delimiting blocks: every detection resets for the next block

Version: 1.0.0
"""

__version__ = "1.0.0"

from .interfaces.data_models import (
    DEFAULT_CENTER_OFFSET,
    BlockReading,
    DetectorConfig,
    WindowMode,
)
from .detection.goertzel import GoertzelDetector, UNDEFINED_PURITY

__all__ = [
    "GoertzelDetector",
    "DetectorConfig",
    "WindowMode",
    "BlockReading",
    "DEFAULT_CENTER_OFFSET",
    "UNDEFINED_PURITY",
    "__version__",
]
