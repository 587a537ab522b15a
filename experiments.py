"""
Huffman coding experiments: heap-based tree builder vs repeated-sort builder

Runs the full pipeline (count -> build -> codes -> encode -> decode) many
times over synthetic texts and records timing and compression statistics.

Outputs (in --outdir):
  - metrics.csv     (raw row per run per builder)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --exp1_size_k 64 --exp2_max_k 512
  python experiments.py --outdir results --exp1_generators uniform64,zipf64,english_like,audio_like

Notes:
  The "sort" builder re-sorts the whole working list before every merge. It
  gives the same tree as the heap builder and is only here for comparison.
"""

from __future__ import annotations

import argparse
import csv
import math
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple, Optional, Callable

import matplotlib.pyplot as plt

import huffman as huff
import metrics
import quantize


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def symbol_for(index: int) -> str:
    # printable ASCII first, then CJK ideographs for large alphabets
    if index < 94:
        return chr(0x21 + index)
    return chr(0x4E00 + index - 94)


# Reference builder

def build_tree_by_sorting(frequencies: huff.FrequencyInput) -> Optional[huff.HuffmanNode]:
    """
    Stable-sort the working list ascending, merge the first two, append the
    merged node at the end, repeat. O(n^2 log n).
    """
    items = list(frequencies.items()) if isinstance(frequencies, dict) else list(frequencies)
    if not items:
        return None
    if len(items) == 1:
        symbol, frequency = items[0]
        return huff.HuffmanNode(symbol, frequency, node_id="single-node")

    nodes = [huff.HuffmanNode(symbol, frequency, node_id=f"leaf-{i}") for i, (symbol, frequency) in enumerate(items)]
    counter = len(items)
    while len(nodes) > 1:
        nodes.sort(key=lambda n: n.frequency)
        left = nodes.pop(0)
        right = nodes.pop(0)
        nodes.append(huff.HuffmanNode(None, left.frequency + right.frequency, left, right,
                                      node_id=f"internal-{counter}"))
        counter += 1
    return nodes[0]

BUILDERS: Dict[str, Callable[[huff.FrequencyInput], Optional[huff.HuffmanNode]]] = {
    "heap": huff.build_huffman_tree,
    "sort": build_tree_by_sorting,
}


# Synthetic dataset generators

def gen_uniform(size: int, alphabet: int = 64, seed: int = 0) -> str:
    rng = random.Random(seed)
    symbols = [symbol_for(i) for i in range(alphabet)]
    return "".join(rng.choice(symbols) for _ in range(size))

def gen_repetitive(size: int, dominant: str = "A", dom_frac: float = 0.90, seed: int = 0) -> str:
    rng = random.Random(seed)
    other_symbols = [symbol_for(i) for i in range(94) if symbol_for(i) != dominant]
    out = []
    for _ in range(size):
        if rng.random() < dom_frac:
            out.append(dominant)
        else:
            out.append(rng.choice(other_symbols))
    return "".join(out)

def _sample_cdf(rng: random.Random, cdf: List[float]) -> int:
    r = rng.random()
    lo, hi = 0, len(cdf) - 1
    while lo < hi:
        mid = (lo + hi) // 2
        if r <= cdf[mid]:
            hi = mid
        else:
            lo = mid + 1
    return lo

def _cdf(weights: List[float]) -> List[float]:
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)
    return cdf

def gen_zipf_like(size: int, alphabet: int = 64, s: float = 1.2, seed: int = 0) -> str:
    rng = random.Random(seed)
    cdf = _cdf([1.0 / ((i + 1) ** s) for i in range(alphabet)])
    return "".join(symbol_for(_sample_cdf(rng, cdf)) for _ in range(size))

def gen_english_like(size: int, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = (
        " etaoinshrdlcumwfgypbvkjxq"
        "ETAOINSHRDLCUMWFGYPBVKJXQ"
        "\n"
    )
    weights = []
    for ch in chars:
        if ch == ' ':
            weights.append(13.0)
        elif ch == '\n':
            weights.append(1.5)
        elif ch.lower() in "etaoinshrdlu":
            weights.append(6.0)
        elif ch.lower() in "cmfwgypbvk":
            weights.append(2.5)
        else:
            weights.append(1.2)

    cdf = _cdf(weights)
    return "".join(chars[_sample_cdf(rng, cdf)] for _ in range(size))

def gen_audio_like(size: int, seed: int = 0) -> str:
    """
    Two detuned sines plus noise, quantized to 8 levels
    """
    rng = random.Random(seed)
    samples = [
        0.6 * math.sin(2 * math.pi * 440 * t / 8000)
        + 0.3 * math.sin(2 * math.pi * 660 * t / 8000)
        + rng.gauss(0.0, 0.05)
        for t in range(size)
    ]
    return quantize.samples_to_text(samples)

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], str]] = {
    "uniform64": lambda size, seed: gen_uniform(size, alphabet=64, seed=seed),
    "uniform16": lambda size, seed: gen_uniform(size, alphabet=16, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "zipf32": lambda size, seed: gen_zipf_like(size, alphabet=32, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant="A", dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant="A", dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
    "audio_like": lambda size, seed: gen_audio_like(size, seed=seed),
}

def generate_dataset(name: str, size: int, seed: int) -> Tuple[str, str]:
    """
    Unknown generator names fall back to uniform64 under a suffixed name
    """
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        return f"{name}_fallback_uniform64", gen_uniform(size, alphabet=64, seed=seed)
    return name, fn(size, seed)




# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    text_length: int
    run_id: int
    builder: str  # "heap" or "sort"
    unique_symbols: int

    count_ms: float
    build_tree_ms: float
    codes_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    encoded_bits: int
    compression_ratio: float
    space_saved_percent: float
    average_code_length: float
    entropy: float
    efficiency_percent: float
    tree_depth: int

    correctness_ok: int  # 1 or 0


def run_one(text: str, builder: str) -> MetricRow:
    build = BUILDERS.get(builder)
    if build is None:
        raise ValueError(f"builder must be one of {sorted(BUILDERS)}")

    t0 = now_ns()
    ft = huff.count_frequencies(text)
    freq_list = huff.sorted_frequencies(ft, descending=True)
    t1 = now_ns()

    root = build(freq_list)
    t2 = now_ns()

    code_map = huff.generate_huffman_codes(root)
    t3 = now_ns()

    bits = huff.huffman_encode(text, code_map, strict=True)
    t4 = now_ns()

    decoded = huff.decode_message(bits, root)
    t5 = now_ns()

    stats = metrics.compression_stats(text, bits, code_map, ft)
    correctness_ok = 1 if decoded.ok and decoded.text == text else 0

    return MetricRow(
        exp_name="",
        dataset_name="",
        text_length=len(text),
        run_id=0,
        builder=builder,
        unique_symbols=len(ft),
        count_ms=ns_to_ms(t1 - t0),
        build_tree_ms=ns_to_ms(t2 - t1),
        codes_ms=ns_to_ms(t3 - t2),
        encode_ms=ns_to_ms(t4 - t3),
        decode_ms=ns_to_ms(t5 - t4),
        total_ms=ns_to_ms(t5 - t0),
        encoded_bits=len(bits),
        compression_ratio=stats.compression_ratio,
        space_saved_percent=stats.space_saved_percent,
        average_code_length=stats.average_code_length,
        entropy=stats.entropy,
        efficiency_percent=stats.efficiency_percent,
        tree_depth=huff.tree_depth(root),
        correctness_ok=correctness_ok,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)


SUMMARY_METRICS = [
    "compression_ratio",
    "average_code_length",
    "entropy",
    "build_tree_ms",
    "encode_ms",
    "decode_ms",
    "total_ms",
]


def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, text_length, builder and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int, str], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.text_length, r.builder)
        key_to.setdefault(key, []).append(r)

    summary_fields = ["exp_name", "dataset_name", "text_length", "builder", "n_runs"]
    for m in SUMMARY_METRICS:
        summary_fields += [f"{m}_mean", f"{m}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, length, builder = key
            out = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "text_length": length,
                "builder": builder,
                "n_runs": len(items),
            }
            for m in SUMMARY_METRICS:
                out[f"{m}_mean"], out[f"{m}_stdev"] = mean_stdev([getattr(x, m) for x in items])
            out["correctness_ok_rate"] = sum(x.correctness_ok for x in items) / len(items)
            w.writerow(out)



# Plotting

def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution" and r.builder == "heap"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))

    def mean_for(dataset: str, field: str) -> float:
        vals = [getattr(r, field) for r in exp_rows if r.dataset_name == dataset]
        return statistics.mean(vals) if vals else float("nan")

    x = list(range(len(datasets)))

    plt.figure()
    plt.plot(x, [mean_for(d, "compression_ratio") for d in datasets], marker="o")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Original Bits / Encoded Bits")
    plt.title("Experiment 1: Compression Ratio by Distribution")
    plt.tight_layout()
    plt.savefig(outdir / "exp1_compression_ratio.png", dpi=200)
    plt.close()

    plt.figure()
    plt.plot(x, [mean_for(d, "average_code_length") for d in datasets], marker="o", label="avg code length")
    plt.plot(x, [mean_for(d, "entropy") for d in datasets], marker="s", label="entropy")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Bits per Symbol")
    plt.title("Experiment 1: Average Code Length vs Entropy")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp1_code_length_vs_entropy.png", dpi=200)
    plt.close()


def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    distributions = sorted(set(r.dataset_name for r in exp_rows))
    builders = list(BUILDERS)

    for dist in distributions:
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.text_length for r in dist_rows))

        def mean_size(size: int, builder: str, field: str) -> float:
            vals = [getattr(r, field) for r in dist_rows if r.text_length == size and r.builder == builder]
            return statistics.mean(vals) if vals else float("nan")

        plt.figure()
        for b in builders:
            y = [mean_size(s, b, "encode_ms") for s in sizes]
            plt.plot(sizes, y, marker="o", label=b)
        plt.xlabel("Text Length (symbols)")
        plt.ylabel("Encode Time (ms)")
        plt.title(f"Experiment 2: Encode Time vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_encode_time_{dist}.png", dpi=200)
        plt.close()

        plt.figure()
        for b in builders:
            y = [mean_size(s, b, "total_ms") for s in sizes]
            plt.plot(sizes, y, marker="o", label=b)
        plt.xlabel("Text Length (symbols)")
        plt.ylabel("Total Time (ms) (count + build + codes + encode + decode)")
        plt.title(f"Experiment 2: Total Runtime vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_total_time_{dist}.png", dpi=200)
        plt.close()


def plot_experiment_3(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp3_alphabet_scaling"]
    if not exp_rows:
        return

    alphabets = sorted(set(r.unique_symbols for r in exp_rows))

    def mean_build(n: int, builder: str) -> float:
        vals = [r.build_tree_ms for r in exp_rows if r.unique_symbols == n and r.builder == builder]
        return statistics.mean(vals) if vals else float("nan")

    plt.figure()
    for b in BUILDERS:
        plt.plot(alphabets, [mean_build(n, b) for n in alphabets], marker="o", label=b)
    plt.xscale("log")
    plt.yscale("log")
    plt.xlabel("Distinct Symbols")
    plt.ylabel("Tree Build Time (ms)")
    plt.title("Experiment 3: Tree Build Time vs Alphabet Size")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp3_build_time.png", dpi=200)
    plt.close()





# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def parse_int_list(s: str) -> List[int]:
    return [int(x) for x in parse_csv_list(s)]

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--no_plots", action="store_true", help="Only write CSV files")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")
    ap.add_argument("--no_exp3", action="store_true", help="Disable experiment 3 (alphabet scaling)")

    # Experiment 1 controls
    ap.add_argument("--exp1_size_k", type=int, default=64, help="Experiment 1 fixed text length in thousands of symbols")
    ap.add_argument("--exp1_generators", type=str, default="uniform64,zipf64,repetitive90,english_like,audio_like",
                    help="Comma-separated dataset generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_k", type=int, default=1, help="Experiment 2 min length in thousands (power-of-two growth)")
    ap.add_argument("--exp2_max_k", type=int, default=256, help="Experiment 2 max length in thousands (power-of-two growth)")
    ap.add_argument("--exp2_generators", type=str, default="uniform64,zipf64,repetitive90",
                    help="Comma-separated dataset generator names for experiment 2")

    # Experiment 3 controls
    ap.add_argument("--exp3_alphabets", type=str, default="16,64,256,1024,2048",
                    help="Comma-separated alphabet sizes for experiment 3")

    args = ap.parse_args(argv)

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []

    builders = tuple(BUILDERS)

    # Experiment 1: distributions (fixed size), heap builder only
    if not args.no_exp1:
        fixed_size = max(1, args.exp1_size_k) * 1000
        gen_names = parse_csv_list(args.exp1_generators)

        for gen_name in gen_names:
            for run_id in range(1, args.runs + 1):
                dataset_name, text = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                row = run_one(text, "heap")
                row.exp_name = "exp1_distribution"
                row.dataset_name = dataset_name
                row.run_id = run_id
                rows.append(row)

    # Experiment 2: size scaling (multiple sizes, powers of 2)
    if not args.no_exp2:
        min_len = max(1, args.exp2_min_k) * 1000
        max_len = max(1, args.exp2_max_k) * 1000

        sizes: List[int] = []
        s = min_len
        while s <= max_len:
            sizes.append(s)
            s *= 2

        gen_names = parse_csv_list(args.exp2_generators)

        for gen_name in gen_names:
            for size in sizes:
                for run_id in range(1, args.runs + 1):
                    dataset_name, text = generate_dataset(gen_name, size, args.seed + 10_000 + size + run_id)
                    for builder in builders:
                        row = run_one(text, builder)
                        row.exp_name = "exp2_size_scaling"
                        row.dataset_name = dataset_name
                        row.run_id = run_id
                        rows.append(row)

    # Experiment 3: alphabet scaling, every symbol appears so unique_symbols == alphabet
    if not args.no_exp3:
        for alphabet in parse_int_list(args.exp3_alphabets):
            symbols = "".join(symbol_for(i) for i in range(alphabet))
            for run_id in range(1, args.runs + 1):
                text = symbols + gen_zipf_like(alphabet * 8, alphabet=alphabet, seed=args.seed + 200_000 + run_id)
                for builder in builders:
                    row = run_one(text, builder)
                    row.exp_name = "exp3_alphabet_scaling"
                    row.dataset_name = f"zipf{alphabet}"
                    row.run_id = run_id
                    rows.append(row)

    # Write raw and summary
    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    # Plots
    if not args.no_plots:
        plot_experiment_1(rows, outdir)
        plot_experiment_2(rows, outdir)
        plot_experiment_3(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
