"""
Pytest configuration and fixtures for goertzel-detector tests.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


@pytest.fixture
def sampling_frequency():
    """Standard sample rate for tests (telephony)."""
    return 8000.0


@pytest.fixture
def target_frequency():
    """Target tone; bin 25 of a 200-sample block at 8 kHz."""
    return 1000.0


@pytest.fixture
def block_length():
    """Samples per block (40 Hz bins at 8 kHz)."""
    return 200


@pytest.fixture
def generator(sampling_frequency):
    """8-bit ADC signal generator centered at mid-scale."""
    from goertzel_detector.detection.signal_generator import ToneSignalGenerator
    return ToneSignalGenerator(sampling_frequency, center_offset=128)


@pytest.fixture
def detector(target_frequency, sampling_frequency):
    """Unwindowed detector at 1 kHz / 8 kHz, center 128."""
    from goertzel_detector.detection.goertzel import GoertzelDetector
    return GoertzelDetector(target_frequency, sampling_frequency, center_offset=128)
