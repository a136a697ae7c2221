"""
Goertzel Single-Bin Tone Detector

================================================================================
PURPOSE
================================================================================
Measure how much of a signal's energy sits at ONE frequency, sample by sample,
with two multiplies and a handful of adds per sample. This is the classic
alternative to an FFT when only a single bin matters (DTMF decoding, pilot
tone and carrier presence, tuned "is the buzzer on?" checks on a
microcontroller-class budget).

================================================================================
THEORY: THE GOERTZEL RECURRENCE
================================================================================
For a target frequency f₀ sampled at fs:

    ω     = 2π·f₀/fs
    coeff = 2·cos(ω)

Each offset-adjusted sample x[n] drives a second-order IIR resonator:

    s[n] = x[n] + coeff·s[n-1] - s[n-2]

After N samples the squared DFT magnitude at ω follows from the last two
states alone (no complex arithmetic):

    |X(ω)|² = s[N-1]² + s[N-2]² - coeff·s[N-1]·s[N-2]

The real/imaginary parts, when phase is needed, are:

    Re = s[N-1] - s[N-2]·cos(ω)
    Im = s[N-2]·sin(ω)

REFERENCE: Goertzel, G. (1958). "An algorithm for the evaluation of finite
           trigonometric series." American Mathematical Monthly 65(1), 34-35.
REFERENCE: Banks, K. (2002). "The Goertzel Algorithm." Embedded Systems
           Programming.

================================================================================
THEORY: PURITY NORMALIZATION
================================================================================
|X|² grows with amplitude² and N², so a raw threshold depends on signal
level. Dividing by the block's energy removes both:

    purity = 2·|X|² / (N · Σ x[n]²)

For a pure tone A·sin(ω·n) exactly on the bin over whole cycles:
    |X|² = (A·N/2)²,  Σx² = N·A²/2   →   purity = 1

Purity is the fraction of signal energy concentrated at f₀, independent of
amplitude. Energy is accumulated from the UNWINDOWED adjusted samples; the
window only shapes the recurrence input.

================================================================================
BLOCK DISCIPLINE
================================================================================
Samples accumulate between resets. Every detect*() call computes its score
and resets, so each call both reads a block and marks the start of the next.
The batch form resets before it starts as well, and feeds its samples through
the same add_sample() path, so offset removal and windowing are identical in
both modes.

Undefined scores (no samples, or all samples at the center offset) are
reported as UNDEFINED_PURITY rather than NaN or a ZeroDivisionError.

================================================================================
USAGE
================================================================================
    detector = GoertzelDetector(
        target_frequency=1000.0,
        sampling_frequency=8000.0,
        center_offset=128
    )

    # Streaming
    while detector.add_sample_with_check(adc.read(), 205):
        pass
    purity = detector.detect()

    # Batch
    purity = detector.detect_batch(buffer)

    # Retarget the same instance
    detector.configure(1209.0, 8000.0)
"""

import logging
import math
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from ..interfaces.data_models import DEFAULT_CENTER_OFFSET, DetectorConfig, WindowMode
from ..interfaces.single_bin import SingleBinDetector
from .windows import window_table, window_weight

logger = logging.getLogger(__name__)

# Reported when purity is undefined (zero samples or zero signal energy)
UNDEFINED_PURITY = 0.0

# Longest block whose window is tabulated; longer blocks use the closed form
MAX_WINDOW_TABLE_LENGTH = 4096


class GoertzelDetector(SingleBinDetector):
    """
    Streaming Goertzel filter tuned to a single target frequency.

    Holds the two-tap recurrence state plus the running sample count and
    energy for the current block. Not thread-safe: use one instance per
    thread, or one per frequency when tracking several tones.
    """

    def __init__(
        self,
        target_frequency: float,
        sampling_frequency: float,
        center_offset: int = DEFAULT_CENTER_OFFSET,
        window_mode: Union[WindowMode, str] = WindowMode.NONE,
        block_length: int = 0
    ):
        """
        Initialize the detector.

        Args:
            target_frequency: Frequency to measure (Hz)
            sampling_frequency: Sample rate (Hz), must be positive
            center_offset: DC bias removed from every raw sample
            window_mode: Window applied to the recurrence input
            block_length: Samples per block for the window phase term
                          (0 = unset, disables windowing)

        Raises:
            ValueError: If sampling_frequency <= 0 or block_length < 0
        """
        self._hamming = False
        self._exact_blackman = False
        self._block_length = 0
        self._window: Optional[np.ndarray] = None
        self._closed_form_mode: Optional[WindowMode] = None

        self.configure(target_frequency, sampling_frequency, center_offset)
        self.set_block_length(block_length)
        self.set_window(window_mode)

    @classmethod
    def from_config(cls, config: DetectorConfig) -> 'GoertzelDetector':
        """Create a detector from an explicit DetectorConfig."""
        return cls(
            target_frequency=config.target_frequency,
            sampling_frequency=config.sampling_frequency,
            center_offset=config.center_offset,
            window_mode=config.window_mode,
            block_length=config.block_length
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(
        self,
        target_frequency: float,
        sampling_frequency: float,
        center_offset: int = DEFAULT_CENTER_OFFSET
    ) -> None:
        """
        Retune the detector and start a fresh block.

        Recomputes the recurrence coefficient for the new frequencies and
        resets all accumulated state. Window and block length settings are
        kept.

        Args:
            target_frequency: Frequency to measure (Hz)
            sampling_frequency: Sample rate (Hz), must be positive
            center_offset: DC bias removed from every raw sample

        Raises:
            ValueError: If sampling_frequency <= 0 (state left unchanged)
        """
        if not sampling_frequency > 0:
            raise ValueError(f"Sampling frequency must be positive, got {sampling_frequency}")

        omega = (2.0 * math.pi * target_frequency) / sampling_frequency

        self._target_frequency = float(target_frequency)
        self._sampling_frequency = float(sampling_frequency)
        self._center_offset = int(center_offset)
        self._cosine = math.cos(omega)
        self._sine = math.sin(omega)
        self._coeff = 2.0 * self._cosine

        self.reset()

        logger.debug(f"Goertzel configured: target={self._target_frequency:.2f}Hz, "
                     f"fs={self._sampling_frequency:.2f}Hz, center={self._center_offset}, "
                     f"coeff={self._coeff:.6f}")

    def reinit(
        self,
        target_frequency: float,
        sampling_frequency: float,
        center_offset: int = DEFAULT_CENTER_OFFSET
    ) -> None:
        """Same as configure()."""
        self.configure(target_frequency, sampling_frequency, center_offset)

    def set_block_length(self, n: int) -> None:
        """
        Set the expected block size used by the window phase term.

        Does not limit ingestion; use add_sample_with_check() for that.
        Up to MAX_WINDOW_TABLE_LENGTH the window weights are tabulated
        once (8 bytes per sample); longer blocks evaluate the closed form
        per sample and allocate nothing.

        Raises:
            ValueError: If n < 0
        """
        if n < 0:
            raise ValueError(f"Block length must be >= 0, got {n}")
        self._block_length = int(n)
        self._rebuild_window()

    def set_window(self, mode: Union[WindowMode, str]) -> None:
        """
        Select the window applied to subsequently ingested samples.

        Samples already accumulated are not re-weighted.
        """
        mode = WindowMode.parse(mode)
        self._hamming = mode == WindowMode.HAMMING
        self._exact_blackman = mode == WindowMode.EXACT_BLACKMAN
        self._rebuild_window()

    def set_hamming(self, enabled: bool) -> None:
        """Toggle the Hamming window (takes precedence over Exact Blackman)."""
        self._hamming = bool(enabled)
        self._rebuild_window()

    def set_exact_blackman(self, enabled: bool) -> None:
        """Toggle the Exact Blackman window (ignored while Hamming is on)."""
        self._exact_blackman = bool(enabled)
        self._rebuild_window()

    def _rebuild_window(self) -> None:
        # Windowing without a block length is silently skipped
        mode = self.window_mode
        if mode == WindowMode.NONE or self._block_length == 0:
            self._window = None
            self._closed_form_mode = None
            return
        if self._block_length > MAX_WINDOW_TABLE_LENGTH:
            self._window = None
            self._closed_form_mode = mode
            logger.debug(f"Window {mode.value} evaluated per sample, N={self._block_length}")
            return
        self._closed_form_mode = None
        self._window = window_table(mode, self._block_length)
        logger.debug(f"Window table built: {mode.value}, N={self._block_length}")

    # ------------------------------------------------------------------
    # Block state
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Zero the recurrence, sample count and energy. Call before every block."""
        self._q1 = 0.0
        self._q2 = 0.0
        self._sum_of_squares = 0.0
        self._sample_count = 0

    def _process(self, value: float) -> None:
        q0 = self._coeff * self._q1 - self._q2 + value
        self._q2 = self._q1
        self._q1 = q0

    # ------------------------------------------------------------------
    # Sample ingestion
    # ------------------------------------------------------------------

    def add_sample(self, sample: float) -> None:
        """
        Process one raw sample.

        The center offset is removed, the square of the adjusted value is
        added to the block energy, and the (optionally windowed) adjusted
        value drives the recurrence.
        """
        adjusted = float(sample) - self._center_offset
        self._sum_of_squares += adjusted * adjusted

        if self._window is not None:
            self._process(adjusted * self._window[self._sample_count % self._block_length])
        elif self._closed_form_mode is not None:
            weight = window_weight(self._closed_form_mode, self._sample_count, self._block_length)
            self._process(adjusted * weight)
        else:
            self._process(adjusted)

        self._sample_count += 1

    def add_sample_with_check(self, sample: float, max_count: int) -> bool:
        """
        Process one raw sample if fewer than max_count are in the block.

        Returns:
            True if processed, False if the block was already full
        """
        if self._sample_count >= max_count:
            return False
        self.add_sample(sample)
        return True

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def magnitude_squared(self) -> float:
        """Squared magnitude of the target bin for the current block."""
        return self._q1 * self._q1 + self._q2 * self._q2 - self._coeff * self._q1 * self._q2

    def magnitude(self) -> float:
        """Magnitude of the target bin for the current block."""
        # Rounding can push an essentially-zero result slightly negative
        return math.sqrt(max(self.magnitude_squared(), 0.0))

    def real_imag(self) -> Tuple[float, float]:
        """
        Real and imaginary parts of the target bin for the current block.

        Returns:
            (real, imag) tuple
        """
        real = self._q1 - self._q2 * self._cosine
        imag = self._q2 * self._sine
        return real, imag

    def purity(self, magnitude_squared: float, count: int) -> float:
        """
        Fraction of block energy at the target frequency.

        Args:
            magnitude_squared: Output of magnitude_squared()
            count: Samples in the block

        Returns:
            2·magnitude_squared / (count·sum_of_squares), or UNDEFINED_PURITY
            when count or the accumulated energy is zero
        """
        if count == 0 or self._sum_of_squares == 0:
            logger.debug(f"Purity undefined (count={count}, "
                         f"sum_of_squares={self._sum_of_squares}), "
                         f"returning {UNDEFINED_PURITY}")
            return UNDEFINED_PURITY
        return (2.0 * magnitude_squared) / (count * self._sum_of_squares)

    def detect(self) -> float:
        """
        Score the samples streamed since the last reset, then reset.

        Returns:
            Purity for the accumulated block
        """
        return self.detect_with_n(self._sample_count)

    def detect_with_n(self, n: int) -> float:
        """
        Score the accumulated block using n as the block length, then reset.

        Useful when the caller tracks the block size itself.
        """
        score = self.purity(self.magnitude_squared(), n)
        self.reset()
        return score

    def detect_batch(self, samples: Sequence[float], n: Optional[int] = None) -> float:
        """
        Score the first n samples of a buffer in one call.

        Equivalent to reset(), n calls to add_sample(), then detect(). The
        buffer is only read; it is neither copied nor retained.

        Args:
            samples: Raw converter values (list, tuple, numpy array, ...)
            n: Number of leading samples to use (default: all)

        Returns:
            Purity for the n samples

        Raises:
            ValueError: If n is negative or exceeds len(samples)
        """
        if n is None:
            n = len(samples)
        elif n < 0 or n > len(samples):
            raise ValueError(f"Batch length {n} out of range for {len(samples)} samples")

        self.reset()
        for index in range(n):
            self.add_sample(samples[index])

        score = self.purity(self.magnitude_squared(), n)
        self.reset()
        return score

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def target_frequency(self) -> float:
        return self._target_frequency

    @property
    def sampling_frequency(self) -> float:
        return self._sampling_frequency

    @property
    def center_offset(self) -> int:
        return self._center_offset

    @property
    def coefficient(self) -> float:
        return self._coeff

    @property
    def sine_part(self) -> float:
        return self._sine

    @property
    def delay1(self) -> float:
        return self._q1

    @property
    def delay2(self) -> float:
        return self._q2

    @property
    def sum_of_squares(self) -> float:
        return self._sum_of_squares

    @property
    def sample_count(self) -> int:
        return self._sample_count

    @property
    def block_length(self) -> int:
        return self._block_length

    @property
    def window_mode(self) -> WindowMode:
        return WindowMode.from_flags(self._hamming, self._exact_blackman)

    @property
    def windowing_active(self) -> bool:
        """True when a window is selected and a block length is set."""
        return self._window is not None or self._closed_form_mode is not None

    @property
    def config(self) -> DetectorConfig:
        """Current configuration as a DetectorConfig."""
        return DetectorConfig(
            target_frequency=self._target_frequency,
            sampling_frequency=self._sampling_frequency,
            center_offset=self._center_offset,
            window_mode=self.window_mode,
            block_length=self._block_length
        )

    def get_sample_index(self) -> int:
        """Samples processed since the last reset."""
        return self._sample_count

    def get_target_freq(self) -> float:
        return self._target_frequency

    def get_sample_freq(self) -> float:
        return self._sampling_frequency

    def __repr__(self) -> str:
        return (f"GoertzelDetector(target_frequency={self._target_frequency}, "
                f"sampling_frequency={self._sampling_frequency}, "
                f"center_offset={self._center_offset}, "
                f"window_mode={self.window_mode.value!r}, "
                f"block_length={self._block_length})")
