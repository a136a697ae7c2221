#!/usr/bin/env python3
"""
Synthetic ADC Signal Generator

Produces integer converter codes the way a sampling loop would read them from
an N-bit ADC biased at mid-scale: a tone riding on the center offset, rounded
to the nearest code and clipped to the converter range.

Used to exercise the detector without hardware (tests and the replay tool's
demo mode).
"""

import logging
from typing import Optional

import numpy as np

from ..interfaces.data_models import DEFAULT_CENTER_OFFSET

logger = logging.getLogger(__name__)


class ToneSignalGenerator:
    """
    Generate tone, silence and noise blocks as ADC codes.

    All outputs are int64 arrays in [0, max_code].
    """

    def __init__(
        self,
        sampling_frequency: float,
        center_offset: int = DEFAULT_CENTER_OFFSET,
        max_code: int = 255
    ):
        """
        Initialize generator

        Args:
            sampling_frequency: Sample rate in Hz
            center_offset: Code representing 0 V (mid-scale)
            max_code: Largest code the converter produces (255 for 8-bit)
        """
        if not sampling_frequency > 0:
            raise ValueError(f"Sampling frequency must be positive, got {sampling_frequency}")
        self.sampling_frequency = float(sampling_frequency)
        self.center_offset = int(center_offset)
        self.max_code = int(max_code)

    def _to_codes(self, waveform: np.ndarray) -> np.ndarray:
        codes = np.rint(waveform + self.center_offset)
        clipped = int(np.count_nonzero((codes < 0) | (codes > self.max_code)))
        if clipped:
            logger.warning(f"{clipped} samples clipped to converter range 0-{self.max_code}")
        return np.clip(codes, 0, self.max_code).astype(np.int64)

    def generate_tone(
        self,
        frequency: float,
        n: int,
        amplitude: float,
        phase: float = 0.0
    ) -> np.ndarray:
        """
        Generate n samples of amplitude·sin(2π·f·t + phase) around the center.

        Args:
            frequency: Tone frequency in Hz
            n: Number of samples
            amplitude: Peak deviation from the center offset (codes)
            phase: Starting phase in radians

        Returns:
            Integer ADC codes
        """
        t = np.arange(n) / self.sampling_frequency
        waveform = amplitude * np.sin(2 * np.pi * frequency * t + phase)
        return self._to_codes(waveform)

    def generate_silence(self, n: int) -> np.ndarray:
        """Generate n samples sitting exactly on the center offset."""
        return np.full(n, self.center_offset, dtype=np.int64)

    def generate_noise(
        self,
        n: int,
        amplitude: float,
        seed: Optional[int] = None
    ) -> np.ndarray:
        """
        Generate n samples of Gaussian noise around the center.

        Args:
            n: Number of samples
            amplitude: Standard deviation (codes)
            seed: Random seed for reproducibility (optional)
        """
        rng = np.random.default_rng(seed)
        return self._to_codes(amplitude * rng.standard_normal(n))
