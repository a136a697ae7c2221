"""
Single-Bin Detector Interface

Defines the contract for streaming detectors that measure the power at one
frequency without computing a full spectrum.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class SingleBinDetector(ABC):
    """
    Interface for a streaming single-frequency power detector.

    A detector accumulates a block of samples, then reports a normalized
    score on demand and rewinds itself for the next block.

    Design principle:
        The sampling loop that feeds the detector doesn't care about the
        recurrence, windowing or normalization details. It pushes samples
        and asks for a score.

    Threading:
        Implementations are not thread-safe. Drive one instance from one
        thread of control; create one instance per frequency to track
        several tones at once.
    """

    @abstractmethod
    def add_sample(self, sample: float) -> None:
        """
        Process one raw sample unconditionally.

        Args:
            sample: Raw converter value (center offset not yet removed)
        """
        pass

    @abstractmethod
    def add_sample_with_check(self, sample: float, max_count: int) -> bool:
        """
        Process one raw sample unless the block is already full.

        Args:
            sample: Raw converter value
            max_count: Maximum number of samples allowed in the block

        Returns:
            True if the sample was processed, False if the block already
            holds max_count samples (state unchanged)

        Usage:
            while detector.add_sample_with_check(adc.read(), 205):
                pass
            purity = detector.detect()
        """
        pass

    @abstractmethod
    def detect(self) -> float:
        """
        Score the samples accumulated since the last reset, then reset.

        Returns:
            Purity score (nominally 0-1)
        """
        pass

    @abstractmethod
    def detect_batch(self, samples: Sequence[float], n: Optional[int] = None) -> float:
        """
        Score a complete buffer in one call.

        Args:
            samples: Raw converter values (not copied or retained)
            n: Number of leading samples to use (default: all)

        Returns:
            Purity score (nominally 0-1)
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Rewind accumulated state to the start of a new block."""
        pass

    @abstractmethod
    def magnitude_squared(self) -> float:
        """Power estimate for the current block. Does not modify state."""
        pass

    @abstractmethod
    def purity(self, magnitude_squared: float, count: int) -> float:
        """
        Normalize a power estimate by the block's signal energy.

        Args:
            magnitude_squared: Power estimate at the target frequency
            count: Number of samples in the block

        Returns:
            Fraction of signal energy at the target frequency
        """
        pass
