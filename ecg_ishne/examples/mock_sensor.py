#!/usr/bin/env python3
"""
Mock two-channel ECG sensor capture.

Writes a synthetic raw capture in the sensor's frame format so the
converter can be exercised without hardware.

Frame Structure (5 bytes):
1B frame counter (ignored by the converter) +
2B channel 1 (big-endian) + 2B channel 2 (big-endian)

Usage:
    python mock_sensor.py capture.bin --duration 10
    python mock_sensor.py capture.bin --sample-rate 500 --heart-rate 90
"""

import argparse
import sys
from typing import List, Optional

import numpy as np


def synthetic_ecg(duration: float = 10.0, sample_rate: float = 250.0,
                  heart_rate: float = 75.0, amplitude: int = 1000,
                  noise: float = 0.0, seed: Optional[int] = None) -> np.ndarray:
    """
    Generate a synthetic two-lead ECG-like waveform.

    Args:
        duration: Length in seconds
        sample_rate: Samples per second
        heart_rate: Beats per minute
        amplitude: Peak R-wave height in ADC counts
        noise: Standard deviation of added noise in ADC counts
        seed: Seed for the noise generator

    Returns:
        (n, 2) int16 array; lead 2 is lead 1 scaled by 0.6
    """
    n_samples = int(duration * sample_rate)
    t = np.arange(n_samples) / sample_rate
    rr_interval = 60.0 / heart_rate

    # Position of each sample within its beat
    dt = np.mod(t, rr_interval)
    ecg = (
        1.0 * np.exp(-((dt - 0.05) / 0.01) ** 2)     # R wave
        - 0.2 * np.exp(-((dt - 0.01) / 0.005) ** 2)  # Q wave
        - 0.3 * np.exp(-((dt - 0.09) / 0.005) ** 2)  # S wave
        + 0.15 * np.exp(-((dt - 0.30) / 0.04) ** 2)  # T wave
    )

    lead_1 = ecg * amplitude
    lead_2 = lead_1 * 0.6
    leads = np.column_stack([lead_1, lead_2])
    if noise > 0:
        rng = np.random.default_rng(seed)
        leads = leads + rng.normal(0.0, noise, leads.shape)

    return np.clip(np.round(leads), -32768, 32767).astype(np.int16)


def encode_raw_frames(samples: np.ndarray) -> bytes:
    """
    Pack (n, 2) int16 samples into 5-byte sensor frames.

    Args:
        samples: Two-lead sample array

    Returns:
        Raw capture bytes
    """
    samples = np.asarray(samples, dtype=np.int16)
    if samples.ndim != 2 or samples.shape[1] != 2:
        raise ValueError(f"Expected an (n, 2) sample array, got shape {samples.shape}")

    frames = np.zeros((samples.shape[0], 5), dtype=np.uint8)
    frames[:, 0] = np.arange(samples.shape[0]) & 0xFF
    frames[:, 1:] = samples.astype('>i2').view(np.uint8).reshape(-1, 4)
    return frames.tobytes()


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    parser = argparse.ArgumentParser(description="Write a synthetic raw ECG sensor capture")
    parser.add_argument("output", help="Raw capture file to create")
    parser.add_argument("--duration", type=float, default=10.0, help="Duration in seconds")
    parser.add_argument("--sample-rate", type=float, default=250.0, help="Sample rate (Hz)")
    parser.add_argument("--heart-rate", type=float, default=75.0, help="Heart rate (BPM)")
    parser.add_argument("--noise", type=float, default=0.0, help="Noise level in ADC counts")
    parser.add_argument("--seed", type=int, default=None, help="Noise seed")

    args = parser.parse_args(argv)

    try:
        samples = synthetic_ecg(args.duration, args.sample_rate, args.heart_rate,
                                noise=args.noise, seed=args.seed)
        data = encode_raw_frames(samples)
        with open(args.output, 'wb') as f:
            f.write(data)
    except (OSError, ValueError) as e:
        print(f"Mock sensor failed: {e}")
        return 1

    print(f"Wrote {len(samples)} frames ({len(data)} bytes) to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
