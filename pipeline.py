from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import huffman as huff
from metrics import CompressionStats, compression_stats


@dataclass
class PipelineResult:
    text: str
    frequencies: List[Tuple[str, int]] = field(default_factory=list) # descending, display order
    tree: Optional[huff.HuffmanNode] = None
    codes: Dict[str, str] = field(default_factory=dict)
    encoded: str = ""
    skipped: Dict[str, int] = field(default_factory=dict)
    decoded: str = ""
    decode_error: Optional[huff.MalformedBitstreamError] = None
    stats: Optional[CompressionStats] = None

    @property
    def ready(self) -> bool: # False means "no data yet", not a failure
        return self.tree is not None

    @property
    def round_trip_ok(self) -> bool:
        return self.decode_error is None and self.decoded == self.text


def run_pipeline(text: str) -> PipelineResult:
    """
    text -> frequencies -> tree -> codes -> bits -> decoded text, one stage
    after the other. A fresh tree and code table are built on every call.
    """
    result = PipelineResult(text=text)
    if not text:
        return result

    counts = huff.count_frequencies(text)
    result.frequencies = huff.sorted_frequencies(counts, descending=True)
    result.tree = huff.build_huffman_tree(result.frequencies)
    result.codes = huff.generate_huffman_codes(result.tree)

    encoded = huff.encode_message(text, result.codes)
    result.encoded = encoded.bits
    result.skipped = encoded.skipped

    decoded = huff.decode_message(result.encoded, result.tree)
    result.decoded = decoded.text
    result.decode_error = decoded.error

    result.stats = compression_stats(text, result.encoded, result.codes, counts)
    return result
