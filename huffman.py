import heapq
import json
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

FrequencyInput = Union[Dict[str, int], Iterable[Tuple[str, int]]]


class HuffmanError(ValueError):
    pass


class UnknownSymbolError(HuffmanError):
    def __init__(self, skipped: Dict[str, int]):
        self.skipped = dict(skipped)
        symbols = ", ".join(repr(s) for s in self.skipped)
        super().__init__(f"no codeword for symbol(s): {symbols}")


class MalformedBitstreamError(HuffmanError):
    def __init__(self, message: str, position: int):
        self.position = position # index of the offending bit, or len(bits) for a truncated stream
        super().__init__(f"malformed bitstream at bit {position}: {message}")


class HuffmanNode: # Node for Huffman tree
    def __init__(self, symbol, frequency, left=None, right=None, node_id=""):
        self.symbol = symbol    # single character, or None for internal nodes
        self.frequency = frequency
        self.left = left
        self.right = right
        self.id = node_id      # only used for external referencing (highlighting, drawing)

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.symbol!r}, {self.frequency}, id={self.id!r})"
        return f"HuffmanNode(None, {self.frequency}, id={self.id!r})"


def count_frequencies(text: str) -> Dict[str, int]: # symbol -> count, in first-occurrence order
    freqs: Dict[str, int] = {}
    for ch in text:
        freqs[ch] = freqs.get(ch, 0) + 1
    return freqs


def sorted_frequencies(frequencies: FrequencyInput, descending: bool = True) -> List[Tuple[str, int]]:
    """
    Stable sort by frequency, so equal counts keep their first-occurrence order
    """
    items = list(frequencies.items()) if isinstance(frequencies, dict) else list(frequencies)
    return sorted(items, key=lambda item: item[1], reverse=descending)


def _frequency_list(frequencies: FrequencyInput) -> List[Tuple[str, int]]:
    items = list(frequencies.items()) if isinstance(frequencies, dict) else list(frequencies)
    seen = set()
    for symbol, frequency in items:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ValueError(f"symbol must be a single character, got {symbol!r}")
        if frequency < 1:
            raise ValueError(f"frequency for {symbol!r} must be >= 1, got {frequency}")
        if symbol in seen:
            raise ValueError(f"duplicate symbol {symbol!r} in frequency list")
        seen.add(symbol)
    return items


def build_huffman_tree(frequencies: FrequencyInput) -> Optional[HuffmanNode]:
    """
    Greedy minimum-pair merging over a list of (symbol, frequency) pairs.

    Heap entries are (frequency, sequence, node). Leaves take their list
    position as sequence and merged nodes take an increasing counter, which
    gives the same order as stable-sorting the working list ascending on every
    round and taking the first two. First popped -> left, second -> right.
    """
    items = _frequency_list(frequencies)
    if not items:
        return None

    if len(items) == 1: # single leaf, no merging
        symbol, frequency = items[0]
        return HuffmanNode(symbol, frequency, node_id="single-node")

    priority_queue = [(frequency, index, HuffmanNode(symbol, frequency, node_id=f"leaf-{index}"))
                      for index, (symbol, frequency) in enumerate(items)]
    heapq.heapify(priority_queue)

    counter = len(items)
    while len(priority_queue) > 1:
        left_freq, _, left = heapq.heappop(priority_queue)
        right_freq, _, right = heapq.heappop(priority_queue)
        merged_node = HuffmanNode(None, left_freq + right_freq, left, right, node_id=f"internal-{counter}")
        heapq.heappush(priority_queue, (merged_node.frequency, counter, merged_node))
        counter += 1

    return priority_queue[0][2] # root of the tree


def generate_huffman_codes(root: Optional[HuffmanNode]) -> Dict[str, str]:
    codes: Dict[str, str] = {}
    if root is None:
        return codes

    # A lone leaf would get the empty code, give it one bit instead
    if root.is_leaf:
        codes[root.symbol] = "0"
        return codes

    stack = [(root, '')] # explicit stack, skewed trees can be deeper than the recursion limit
    while stack:
        node, current_code = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = current_code
            continue
        stack.append((node.right, current_code + '1'))
        stack.append((node.left, current_code + '0'))
    return codes


@dataclass
class EncodeResult:
    bits: str
    skipped: Dict[str, int] = field(default_factory=dict) # symbol -> occurrences with no codeword

    @property
    def skipped_count(self) -> int:
        return sum(self.skipped.values())

    @property
    def ok(self) -> bool:
        return not self.skipped


def encode_message(message: str, code_map: Dict[str, str]) -> EncodeResult:
    """
    Concatenate the codeword of every symbol in message order. Symbols with
    no codeword contribute nothing and are tallied in ``skipped``.
    """
    parts: List[str] = []
    skipped: Dict[str, int] = {}
    for ch in message:
        code = code_map.get(ch)
        if code is None:
            skipped[ch] = skipped.get(ch, 0) + 1
            continue
        parts.append(code)
    return EncodeResult(''.join(parts), skipped)


def huffman_encode(message: str, code_map: Dict[str, str], strict: bool = False) -> str:
    result = encode_message(message, code_map)
    if strict and result.skipped:
        raise UnknownSymbolError(result.skipped)
    return result.bits


@dataclass
class DecodeResult:
    text: str # decoded symbols, partial if error is set
    error: Optional[MalformedBitstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def position(self) -> Optional[int]: # bit index of the failure, None on success
        return self.error.position if self.error is not None else None


def decode_message(bitstring: str, root: Optional[HuffmanNode]) -> DecodeResult:
    if root is None or not bitstring:
        return DecodeResult('')

    decoded: List[str] = []
    current_node = root
    consumed = 0 # bits walked since the last emitted symbol
    for position, bit in enumerate(bitstring):
        if bit not in '01':
            error = MalformedBitstreamError(f"unexpected character {bit!r}", position)
            return DecodeResult(''.join(decoded), error)

        if root.is_leaf: # single-symbol alphabet, every codeword is "0"
            if bit != '0':
                error = MalformedBitstreamError("single-symbol code only contains '0'", position)
                return DecodeResult(''.join(decoded), error)
            decoded.append(root.symbol)
            continue

        current_node = current_node.left if bit == '0' else current_node.right
        consumed += 1
        if current_node is None:
            error = MalformedBitstreamError("path leaves the tree", position)
            return DecodeResult(''.join(decoded), error)
        if current_node.is_leaf: # reached a leaf
            decoded.append(current_node.symbol)
            current_node = root # reset to the root for the next symbol
            consumed = 0

    if consumed:
        error = MalformedBitstreamError(f"stream ends inside a codeword ({consumed} trailing bits)", len(bitstring))
        return DecodeResult(''.join(decoded), error)
    return DecodeResult(''.join(decoded))


def huffman_decode(bitstring: str, root: Optional[HuffmanNode]) -> str:
    result = decode_message(bitstring, root)
    if result.error is not None:
        raise result.error
    return result.text


def iter_nodes(root: Optional[HuffmanNode]) -> Iterator[HuffmanNode]: # pre-order, left before right
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)


def tree_depth(root: Optional[HuffmanNode]) -> int: # number of levels, 0 for an empty tree
    if root is None:
        return 0
    deepest = 0
    stack = [(root, 1)]
    while stack:
        node, depth = stack.pop()
        if node.is_leaf:
            deepest = max(deepest, depth)
            continue
        stack.append((node.left, depth + 1))
        stack.append((node.right, depth + 1))
    return deepest


def find_path(root: Optional[HuffmanNode], symbol: str) -> Optional[str]:
    """
    Root-to-leaf path for symbol as '0' (left) / '1' (right) steps.
    Returns None when the symbol is not in the tree. A single-leaf tree
    has the empty path.
    """
    if root is None:
        return None
    stack = [(root, '')]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            if node.symbol == symbol:
                return path
            continue
        stack.append((node.right, path + '1'))
        stack.append((node.left, path + '0'))
    return None


def codes_to_json(code_map: Dict[str, str], indent: Optional[int] = 2) -> str:
    return json.dumps(dict(sorted(code_map.items(), key=lambda kv: (len(kv[1]), kv[1]))),
                      indent=indent, ensure_ascii=False)
