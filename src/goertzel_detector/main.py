#!/usr/bin/env python3
"""
goertzel-detector: Single-Bin Tone Detection Replay Tool

Replays a recorded stream of ADC samples through the Goertzel detector one
block at a time and prints a purity score per block and target frequency.
The live sampling loop lives in the embedding application; this tool is for
tuning thresholds, block sizes and windows against captured data.

Usage:
    # Score a raw 8-bit capture at 1 kHz
    goertzel-detector --input capture.bin -s 8000 -t 1000

    # Several targets, one detector retuned per block
    goertzel-detector --input capture.npy -s 8000 -t 697 -t 770 -t 852 -t 941

    # Settings from a config file
    goertzel-detector --config detector.toml --input capture.bin

    # No capture at hand: synthesize a tone at the first target
    goertzel-detector --demo -s 8000 -t 1000 --block-length 200

Output (one JSON object per line):
    {"block_index": 0, "target_frequency": 1000.0, "sample_count": 200,
     "purity": 0.9998, "detected": true}
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

import numpy as np
import toml

# Set up logging before imports that use it
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger('goertzel-detector')

from .interfaces.data_models import BlockReading, DetectorConfig, WindowMode
from .detection.goertzel import GoertzelDetector
from .detection.signal_generator import ToneSignalGenerator


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from TOML file."""
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            return toml.load(f)

    if config_path:
        logger.warning(f"Config file not found: {config_path}, using defaults")

    # Default configuration
    return {
        'detector': {
            'target_frequency': 1000.0,
            'sampling_frequency': 8000.0,
            'center_offset': 128,
            'window': 'none',
            'block_length': 200
        },
        'output': {
            'threshold': 0.5
        }
    }


def build_detector_config(config: Dict[str, Any], args: argparse.Namespace) -> DetectorConfig:
    """
    Merge the [detector] table with command-line overrides.

    Args:
        config: Parsed configuration dictionary
        args: Parsed command-line arguments

    Returns:
        DetectorConfig for the first target frequency
    """
    detector_table = dict(config.get('detector', {}))

    if args.target:
        detector_table['target_frequency'] = args.target[0]
    if args.sampling_frequency is not None:
        detector_table['sampling_frequency'] = args.sampling_frequency
    if args.center is not None:
        detector_table['center_offset'] = args.center
    if args.block_length is not None:
        detector_table['block_length'] = args.block_length
    if args.window is not None:
        detector_table.pop('hamming', None)
        detector_table.pop('exact_blackman', None)
        detector_table['window'] = args.window

    return DetectorConfig.from_dict(detector_table)


def load_samples(path: Path, dtype: str = 'uint8') -> np.ndarray:
    """
    Load a capture from disk.

    `.npy` files are loaded with numpy; anything else is read as a raw
    binary stream of `dtype` values.
    """
    if path.suffix == '.npy':
        samples = np.load(path)
    else:
        samples = np.fromfile(path, dtype=np.dtype(dtype))

    samples = np.ravel(samples)
    logger.info(f"Loaded {len(samples)} samples from {path}")
    return samples


def iter_blocks(samples: np.ndarray, block_length: int) -> Iterator[np.ndarray]:
    """Yield consecutive full blocks; a trailing partial block is dropped."""
    n_blocks = len(samples) // block_length
    dropped = len(samples) - n_blocks * block_length
    if dropped:
        logger.debug(f"Dropping {dropped} trailing samples (partial block)")
    for index in range(n_blocks):
        yield samples[index * block_length:(index + 1) * block_length]


def run_detection(
    detector: GoertzelDetector,
    samples: np.ndarray,
    targets: Sequence[float],
    block_length: int,
    threshold: float
) -> List[BlockReading]:
    """
    Score every block of `samples` at every target frequency.

    A single detector is retuned with configure() for each target; its
    sampling frequency, center offset and window settings are kept.

    Args:
        detector: Configured detector instance
        samples: Raw ADC codes
        targets: Target frequencies (Hz)
        block_length: Samples per block (> 0)
        threshold: Purity at or above which a block counts as detected

    Returns:
        One BlockReading per (block, target), in block order
    """
    if block_length <= 0:
        raise ValueError(f"Block length must be positive, got {block_length}")

    fs = detector.sampling_frequency
    center = detector.center_offset
    readings: List[BlockReading] = []

    for block_index, block in enumerate(iter_blocks(samples, block_length)):
        for target in targets:
            if target != detector.target_frequency:
                detector.configure(target, fs, center)
            purity = detector.detect_batch(block)
            readings.append(BlockReading(
                block_index=block_index,
                target_frequency=float(target),
                sample_count=len(block),
                purity=float(purity),
                detected=bool(purity >= threshold)
            ))

    return readings


def summarize(readings: Sequence[BlockReading]) -> Dict[float, int]:
    """Count detected blocks per target frequency."""
    counts: Dict[float, int] = {}
    for reading in readings:
        counts.setdefault(reading.target_frequency, 0)
        if reading.detected:
            counts[reading.target_frequency] += 1
    return counts


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='goertzel-detector: Single-bin tone detection replay tool',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Raw 8-bit capture, 8 kHz sampling, 1 kHz target
    goertzel-detector --input capture.bin -s 8000 -t 1000

    # Hamming window, 205-sample blocks
    goertzel-detector --input capture.bin -s 8000 -t 770 --window hamming --block-length 205

    # Synthetic tone
    goertzel-detector --demo -s 8000 -t 1000
        """
    )

    parser.add_argument(
        '--config', '-c',
        help='Path to TOML configuration file'
    )
    parser.add_argument(
        '--input', '-i',
        help='Sample file (.npy, or raw binary of --dtype values)'
    )
    parser.add_argument(
        '--dtype',
        default='uint8',
        help='Sample type for raw binary input (default: uint8)'
    )
    parser.add_argument(
        '--target', '-t',
        type=float,
        action='append',
        help='Target frequency in Hz (repeat for several targets)'
    )
    parser.add_argument(
        '--sampling-frequency', '-s',
        type=float,
        help='Sampling frequency in Hz'
    )
    parser.add_argument(
        '--center',
        type=int,
        help='Center offset subtracted from each sample (default: 128)'
    )
    parser.add_argument(
        '--window', '-w',
        choices=[mode.value for mode in WindowMode],
        help='Window applied to each block'
    )
    parser.add_argument(
        '--block-length', '-n',
        type=int,
        help='Samples per block'
    )
    parser.add_argument(
        '--threshold',
        type=float,
        help='Purity threshold for a detection (default: 0.5)'
    )
    parser.add_argument(
        '--demo',
        action='store_true',
        help='Synthesize a tone at the first target instead of reading --input'
    )
    parser.add_argument(
        '--demo-blocks',
        type=int,
        default=4,
        help='Number of blocks to synthesize in demo mode (default: 4)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
        threshold = args.threshold
        if threshold is None:
            threshold = float(config.get('output', {}).get('threshold', 0.5))
        detector_config = build_detector_config(config, args)
        detector = GoertzelDetector.from_config(detector_config)
    except (toml.TomlDecodeError, ValueError, TypeError) as e:
        logger.error(f"Invalid detector configuration: {e}")
        return 1

    block_length = detector_config.block_length
    if block_length <= 0:
        logger.error("Block length must be set (--block-length or [detector].block_length)")
        return 1

    targets = args.target or [detector_config.target_frequency]

    logger.info(f"Detector: {detector!r}")
    logger.info(f"Targets: {', '.join(f'{t:.1f}Hz' for t in targets)}, threshold={threshold:.2f}")

    if args.demo:
        generator = ToneSignalGenerator(
            detector_config.sampling_frequency,
            center_offset=detector_config.center_offset
        )
        samples = generator.generate_tone(
            targets[0], block_length * args.demo_blocks, amplitude=100
        )
    elif args.input:
        try:
            samples = load_samples(Path(args.input), args.dtype)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Failed to load samples from {args.input}: {e}")
            return 1
    else:
        logger.error("No input: pass --input FILE or --demo")
        return 1

    readings = run_detection(detector, samples, targets, block_length, threshold)

    for reading in readings:
        print(json.dumps(reading.to_dict()))

    n_blocks = len(samples) // block_length
    for target, count in summarize(readings).items():
        logger.info(f"  {target:.1f}Hz: detected in {count}/{n_blocks} blocks")

    return 0


if __name__ == '__main__':
    sys.exit(main())
