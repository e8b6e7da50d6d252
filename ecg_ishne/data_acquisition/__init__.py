"""Data acquisition module for ECG ISHNE system."""

from .raw_transcoder import RawTranscoder, transcode_raw_samples, samples_to_array

__all__ = ["RawTranscoder", "transcode_raw_samples", "samples_to_array"]
