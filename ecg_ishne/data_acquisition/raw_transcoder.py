"""Raw sensor stream transcoder for ECG ISHNE system."""

import logging
from typing import Optional, Union
import numpy as np

from ..core.config import Config, RawFormatConfig
from ..core.layout import SAMPLE_WIDTH


logger = logging.getLogger(__name__)


def _byte_order(reserved_bytes: int, channel_count: int) -> np.ndarray:
    """Frame byte indices in output order (low byte first for each channel)."""
    order = []
    for channel in range(channel_count):
        high = reserved_bytes + 2 * channel
        order.extend((high + 1, high))
    return np.array(order, dtype=np.intp)


def transcode_raw_samples(raw: Union[bytes, bytearray, memoryview],
                          frame_size: int = 5,
                          reserved_bytes: int = 1,
                          channel_count: int = 2) -> bytes:
    """
    Repack raw sensor frames into ISHNE sample order.

    The default frame is 5 bytes: 1 reserved byte, then channel 1 and
    channel 2 as big-endian 16-bit words. Output is 4 bytes per frame, each
    channel little-endian, channels interleaved. A trailing partial frame
    is dropped.

    Args:
        raw: Raw sensor bytes
        frame_size: Bytes per raw frame
        reserved_bytes: Leading bytes ignored in each frame
        channel_count: Channels per frame

    Returns:
        Transcoded samples, ``channel_count * 2`` bytes per complete frame
    """
    frames = len(raw) // frame_size
    leftover = len(raw) - frames * frame_size
    if leftover:
        logger.debug("Discarding %d trailing raw bytes (incomplete frame)", leftover)
    if frames == 0:
        return b""

    data = np.frombuffer(raw, dtype=np.uint8, count=frames * frame_size).reshape(frames, frame_size)
    return data[:, _byte_order(reserved_bytes, channel_count)].tobytes()


def samples_to_array(samples: bytes, n_leads: int = 2) -> np.ndarray:
    """
    View transcoded samples as an (n, n_leads) int16 array.

    Args:
        samples: Transcoded sample bytes
        n_leads: Leads interleaved in the stream

    Returns:
        Signed sample values, one row per time step
    """
    if n_leads < 1:
        raise ValueError("n_leads must be at least 1")
    count = len(samples) // SAMPLE_WIDTH
    count -= count % n_leads
    return np.frombuffer(samples, dtype='<i2', count=count).reshape(-1, n_leads)


class RawTranscoder:
    """Transcoder bound to a configured raw frame layout."""

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize transcoder.

        Args:
            config: Configuration object (defaults used when omitted)
        """
        raw_config = config.raw if config is not None else RawFormatConfig()
        self._frame_size = raw_config.frame_size
        self._reserved_bytes = raw_config.reserved_bytes
        self._channel_count = raw_config.channel_count

    def output_length(self, raw_length: int) -> int:
        """Transcoded length for a raw buffer of ``raw_length`` bytes."""
        return (raw_length // self._frame_size) * self._channel_count * SAMPLE_WIDTH

    def transcode(self, raw: bytes) -> bytes:
        """Transcode a raw buffer with the configured frame layout."""
        return transcode_raw_samples(
            raw,
            frame_size=self._frame_size,
            reserved_bytes=self._reserved_bytes,
            channel_count=self._channel_count,
        )
