"""
Data Models for the Goertzel Detector

These structures define the contract between the detector and the code that
embeds it: the window selection, the explicit configuration a caller must
supply, and the per-block reading the command-line replay tool emits.

Design principles:
- Immutable configuration (frozen dataclass)
- No implicit sampling/target defaults: callers say what they measure
- Serializable to plain dicts for TOML input and JSON output
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping, Union


# Mid-scale code of an 8-bit converter
DEFAULT_CENTER_OFFSET = 128


class WindowMode(str, Enum):
    """
    Per-sample weighting applied before the recurrence.

    The modes are mutually exclusive. NONE leaves the samples untouched
    (rectangular window), which is the default.
    """
    NONE = "none"
    HAMMING = "hamming"
    EXACT_BLACKMAN = "exact_blackman"

    @classmethod
    def from_flags(cls, hamming: bool = False, exact_blackman: bool = False) -> 'WindowMode':
        """
        Map the two independent boolean toggles onto a single mode.

        Hamming wins when both toggles are set.
        """
        if hamming:
            return cls.HAMMING
        if exact_blackman:
            return cls.EXACT_BLACKMAN
        return cls.NONE

    @classmethod
    def parse(cls, value: Union['WindowMode', str, None]) -> 'WindowMode':
        """Accept a WindowMode, its value ('hamming'), or its name ('HAMMING')."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace('-', '_')
        try:
            return cls(text)
        except ValueError:
            valid = ', '.join(m.value for m in cls)
            raise ValueError(f"Unknown window mode: {value!r} (expected one of: {valid})")


def _flag(data: Mapping[str, Any], key: str) -> bool:
    """Read an optional boolean toggle; only real booleans are accepted."""
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


@dataclass(frozen=True)
class DetectorConfig:
    """
    Explicit detector configuration.

    Attributes:
        target_frequency: Frequency of the single bin to measure (Hz)
        sampling_frequency: Rate at which samples are acquired (Hz), must be > 0
        center_offset: DC bias subtracted from each raw sample (converter codes)
        window_mode: Window applied to the recurrence input
        block_length: Expected samples per block; only used for the window
                      phase term. 0 means unset, which disables windowing.
    """
    target_frequency: float
    sampling_frequency: float
    center_offset: int = DEFAULT_CENTER_OFFSET
    window_mode: WindowMode = WindowMode.NONE
    block_length: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DetectorConfig':
        """
        Build a configuration from a `[detector]` TOML table.

        The window may be given as `window = "hamming"` or with the two
        boolean toggles `hamming = true` / `exact_blackman = true`.
        """
        if 'target_frequency' not in data or 'sampling_frequency' not in data:
            raise ValueError("Detector config requires target_frequency and sampling_frequency")

        if 'window' in data:
            window_mode = WindowMode.parse(data['window'])
        else:
            window_mode = WindowMode.from_flags(
                hamming=_flag(data, 'hamming'),
                exact_blackman=_flag(data, 'exact_blackman')
            )

        return cls(
            target_frequency=float(data['target_frequency']),
            sampling_frequency=float(data['sampling_frequency']),
            center_offset=int(data.get('center_offset', DEFAULT_CENTER_OFFSET)),
            window_mode=window_mode,
            block_length=int(data.get('block_length', 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target_frequency': self.target_frequency,
            'sampling_frequency': self.sampling_frequency,
            'center_offset': self.center_offset,
            'window': self.window_mode.value,
            'block_length': self.block_length,
        }


@dataclass
class BlockReading:
    """
    Purity score for one block of samples at one target frequency.

    Emitted by the replay tool as one JSON object per line.
    """
    block_index: int
    target_frequency: float
    sample_count: int
    purity: float
    detected: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
