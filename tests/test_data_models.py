"""
Unit tests for detector data models.

Tests window mode parsing, configuration loading from TOML-style tables,
and block reading serialization.
"""

import json

import pytest


class TestWindowMode:
    """Test WindowMode parsing and flag mapping."""

    def test_values(self):
        """Verify the serialized names of each mode."""
        from goertzel_detector.interfaces.data_models import WindowMode

        assert WindowMode.NONE.value == "none"
        assert WindowMode.HAMMING.value == "hamming"
        assert WindowMode.EXACT_BLACKMAN.value == "exact_blackman"

    @pytest.mark.parametrize("text,expected", [
        ("hamming", "hamming"),
        ("HAMMING", "hamming"),
        ("Exact-Blackman", "exact_blackman"),
        (" none ", "none"),
        (None, "none"),
    ])
    def test_parse(self, text, expected):
        """Verify parse() accepts values, names and loose spellings."""
        from goertzel_detector.interfaces.data_models import WindowMode

        assert WindowMode.parse(text) == WindowMode(expected)

    def test_parse_passes_modes_through(self):
        """Verify parse() returns WindowMode members unchanged."""
        from goertzel_detector.interfaces.data_models import WindowMode

        assert WindowMode.parse(WindowMode.EXACT_BLACKMAN) is WindowMode.EXACT_BLACKMAN

    def test_parse_unknown(self):
        """Verify unknown windows raise ValueError listing valid choices."""
        from goertzel_detector.interfaces.data_models import WindowMode

        with pytest.raises(ValueError, match="exact_blackman"):
            WindowMode.parse("hann")

    @pytest.mark.parametrize("hamming,exact_blackman,expected", [
        (False, False, "none"),
        (True, False, "hamming"),
        (False, True, "exact_blackman"),
        (True, True, "hamming"),
    ])
    def test_from_flags_hamming_precedence(self, hamming, exact_blackman, expected):
        """Verify boolean toggles resolve with Hamming winning ties."""
        from goertzel_detector.interfaces.data_models import WindowMode

        assert WindowMode.from_flags(hamming, exact_blackman) == WindowMode(expected)


class TestDetectorConfig:
    """Test DetectorConfig construction and serialization."""

    def test_defaults(self):
        """Verify center offset, window and block length defaults."""
        from goertzel_detector.interfaces.data_models import DetectorConfig, WindowMode

        config = DetectorConfig(target_frequency=1000.0, sampling_frequency=8000.0)

        assert config.center_offset == 128
        assert config.window_mode == WindowMode.NONE
        assert config.block_length == 0

    def test_is_immutable(self):
        """Verify configuration cannot be mutated after creation."""
        from dataclasses import FrozenInstanceError
        from goertzel_detector.interfaces.data_models import DetectorConfig

        config = DetectorConfig(target_frequency=1000.0, sampling_frequency=8000.0)

        with pytest.raises(FrozenInstanceError):
            config.target_frequency = 2000.0

    def test_from_dict_with_window_name(self):
        """Verify a [detector] table with a window string."""
        from goertzel_detector.interfaces.data_models import DetectorConfig, WindowMode

        config = DetectorConfig.from_dict({
            'target_frequency': 852,
            'sampling_frequency': 8000,
            'center_offset': 512,
            'window': 'exact_blackman',
            'block_length': 205,
        })

        assert config.target_frequency == 852.0
        assert config.sampling_frequency == 8000.0
        assert config.center_offset == 512
        assert config.window_mode == WindowMode.EXACT_BLACKMAN
        assert config.block_length == 205

    def test_from_dict_with_boolean_toggles(self):
        """Verify the hamming/exact_blackman booleans are honoured."""
        from goertzel_detector.interfaces.data_models import DetectorConfig, WindowMode

        config = DetectorConfig.from_dict({
            'target_frequency': 1000.0,
            'sampling_frequency': 8000.0,
            'hamming': True,
            'exact_blackman': True,
        })

        assert config.window_mode == WindowMode.HAMMING

    @pytest.mark.parametrize("key,value", [
        ('hamming', 'false'),
        ('exact_blackman', 1),
    ])
    def test_from_dict_rejects_non_boolean_toggles(self, key, value):
        """Verify a quoted 'false' is an error rather than a truthy string."""
        from goertzel_detector.interfaces.data_models import DetectorConfig

        with pytest.raises(ValueError, match=key):
            DetectorConfig.from_dict({
                'target_frequency': 1000.0,
                'sampling_frequency': 8000.0,
                key: value,
            })

    def test_from_dict_requires_frequencies(self):
        """Verify both frequencies must be present."""
        from goertzel_detector.interfaces.data_models import DetectorConfig

        with pytest.raises(ValueError, match="sampling_frequency"):
            DetectorConfig.from_dict({'target_frequency': 1000.0})

    def test_to_dict_round_trips_through_from_dict(self):
        """Verify to_dict() output is accepted by from_dict()."""
        from goertzel_detector.interfaces.data_models import DetectorConfig, WindowMode

        config = DetectorConfig(1209.0, 8000.0, 100, WindowMode.HAMMING, 205)

        assert DetectorConfig.from_dict(config.to_dict()) == config
        assert config.to_dict()['window'] == 'hamming'


class TestBlockReading:
    """Test BlockReading serialization."""

    def test_to_dict_is_json_serializable(self):
        """Verify a reading serializes to a flat JSON object."""
        from goertzel_detector.interfaces.data_models import BlockReading

        reading = BlockReading(
            block_index=3,
            target_frequency=1000.0,
            sample_count=200,
            purity=0.97,
            detected=True
        )

        data = json.loads(json.dumps(reading.to_dict()))

        assert data == {
            'block_index': 3,
            'target_frequency': 1000.0,
            'sample_count': 200,
            'purity': 0.97,
            'detected': True,
        }
