"""
Derived compression statistics. Read-only, nothing here feeds back into
encoding or decoding.

Original size is counted as 8 bits per input symbol.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

from huffman import count_frequencies

BITS_PER_SYMBOL = 8


def original_bits(text: str) -> int:
    return len(text) * BITS_PER_SYMBOL


def compression_ratio(original_text: str, bitstring: str) -> float:
    """
    (symbols * 8) / encoded bits. An empty encoding of a non-empty text gives
    inf, an empty text gives 0.0
    """
    if not bitstring:
        return float("inf") if original_text else 0.0
    return original_bits(original_text) / len(bitstring)


def space_saved_bits(original_text: str, bitstring: str) -> int:
    return original_bits(original_text) - len(bitstring)


def space_saved_percent(original_text: str, bitstring: str) -> float:
    if not original_text:
        return 0.0
    return space_saved_bits(original_text, bitstring) / original_bits(original_text) * 100.0


def average_code_length(text: str, code_map: Dict[str, str]) -> float:
    # symbols without a codeword count as length 0
    if not text:
        return 0.0
    total = sum(len(code_map.get(ch, "")) for ch in text)
    return total / len(text)


def entropy(frequencies: Dict[str, int]) -> float: # bits per symbol
    total = sum(frequencies.values())
    if total == 0:
        return 0.0
    h = 0.0
    for freq in frequencies.values():
        p = freq / total
        h -= p * math.log2(p)
    return h


def coding_efficiency(entropy_bits: float, avg_length: float) -> float: # percent
    if avg_length == 0:
        return 0.0
    return entropy_bits / avg_length * 100.0


@dataclass
class CompressionStats:
    symbol_count: int
    original_bits: int
    compressed_bits: int
    compression_ratio: float
    space_saved_bits: int
    space_saved_percent: float
    average_code_length: float
    entropy: float
    efficiency_percent: float


def compression_stats(original_text: str, bitstring: str, code_map: Dict[str, str],
                      frequencies: Optional[Dict[str, int]] = None) -> CompressionStats:
    if frequencies is None:
        frequencies = count_frequencies(original_text)
    avg = average_code_length(original_text, code_map)
    h = entropy(frequencies)
    return CompressionStats(
        symbol_count=len(original_text),
        original_bits=original_bits(original_text),
        compressed_bits=len(bitstring),
        compression_ratio=compression_ratio(original_text, bitstring),
        space_saved_bits=space_saved_bits(original_text, bitstring),
        space_saved_percent=space_saved_percent(original_text, bitstring),
        average_code_length=avg,
        entropy=h,
        efficiency_percent=coding_efficiency(h, avg),
    )
