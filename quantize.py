"""
Turns audio samples into text over a small alphabet so the sound can be
Huffman coded like any other message.

Samples are expected in [-1, 1]; anything outside is clamped.
"""

import wave
from pathlib import Path
from typing import Sequence, Union

import numpy as np

DEFAULT_LEVELS = 8
DEFAULT_ALPHABET = "abcdefgh"
DEFAULT_MAX_SAMPLES = 1000


def downsample(samples: Sequence[float], target: int = DEFAULT_MAX_SAMPLES) -> np.ndarray:
    """
    Keep every n-th sample, n = max(1, len // target). The result can be a
    little longer than target when len is not a multiple of it.
    """
    arr = np.asarray(samples, dtype=np.float64)
    if arr.size == 0:
        return arr
    target = max(1, min(target, arr.size))
    step = max(1, arr.size // target)
    return arr[::step]


def samples_to_text(samples: Sequence[float], levels: int = DEFAULT_LEVELS,
                    alphabet: str = DEFAULT_ALPHABET) -> str:
    if levels < 1:
        raise ValueError(f"levels must be >= 1, got {levels}")
    if len(alphabet) < levels:
        raise ValueError(f"alphabet has {len(alphabet)} symbols, need {levels}")

    arr = np.asarray(samples, dtype=np.float64)
    if arr.size == 0:
        return ""
    normalized = np.clip((arr + 1.0) / 2.0, 0.0, 1.0)
    indices = np.floor(normalized * (levels - 1)).astype(np.int64)
    return "".join(alphabet[i] for i in indices)


def load_wav_samples(path: Union[str, Path]) -> np.ndarray:
    """
    Read a PCM WAV file and return the first channel scaled to [-1, 1]
    """
    with wave.open(str(path), "rb") as wf:
        n_channels = wf.getnchannels()
        sample_width = wf.getsampwidth()
        frames = wf.readframes(wf.getnframes())

    if sample_width == 1: # 8-bit WAV is unsigned
        data = np.frombuffer(frames, dtype=np.uint8).astype(np.float64)
        data = (data - 128.0) / 128.0
    elif sample_width == 2:
        data = np.frombuffer(frames, dtype="<i2").astype(np.float64) / 32768.0
    elif sample_width == 4:
        data = np.frombuffer(frames, dtype="<i4").astype(np.float64) / 2147483648.0
    else:
        raise ValueError(f"unsupported sample width: {sample_width} bytes")

    return data[::n_channels]
