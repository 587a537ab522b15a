"""
Walk one input through the Huffman pipeline and print every stage.

How to run:
  python explore.py --text "hello world"
  python explore.py --file notes.txt --json codes.json --plot-dir out
  python explore.py --audio clip.wav --levels 8 --max-samples 1000
  python explore.py --text "abracadabra" --quiz 5 --seed 7
  python explore.py --text "abracadabra" --quiz 5 --interactive
  python explore.py --audio clip.wav --levels 4 --alphabet wxyz
"""

from __future__ import annotations

import argparse
import wave
from pathlib import Path
from typing import List, Optional

import huffman as huff
import plotting
import quantize
import quiz as quiz_mod
from pipeline import PipelineResult, run_pipeline


def read_input(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file is not None:
        return Path(args.file).read_text(encoding="utf-8")
    samples = quantize.load_wav_samples(args.audio)
    samples = quantize.downsample(samples, args.max_samples)
    text = quantize.samples_to_text(samples, levels=args.levels, alphabet=args.alphabet)
    print(f"Converted {len(samples)} samples to text ({len(set(text))} distinct symbols)")
    return text


def print_frequency_table(result: PipelineResult) -> None:
    total = len(result.text)
    print("Frequencies:")
    for symbol, freq in result.frequencies:
        print(f"  {quiz_mod.display_symbol(symbol)!r:>8}  {freq:>6}  ({freq / total * 100:.1f}%)")


def print_codebook(result: PipelineResult) -> None:
    print("Codebook:")
    for symbol, _ in result.frequencies:
        print(f"  {quiz_mod.display_symbol(symbol)!r:>8}  {result.codes[symbol]}")


def print_stats(result: PipelineResult) -> None:
    s = result.stats
    print(f"Original size:     {s.original_bits} bits ({s.symbol_count} symbols x 8)")
    print(f"Compressed size:   {s.compressed_bits} bits")
    print(f"Compression ratio: {s.compression_ratio:.2f}:1")
    print(f"Space saved:       {s.space_saved_bits} bits ({s.space_saved_percent:.1f}%)")
    print(f"Avg code length:   {s.average_code_length:.2f} bits")
    print(f"Entropy:           {s.entropy:.2f} bits")
    print(f"Efficiency:        {s.efficiency_percent:.1f}%")


def run_quiz(result: PipelineResult, count: int, seed: Optional[int], interactive: bool = False) -> None:
    questions = quiz_mod.generate_questions(result.codes, result.tree, limit=count, seed=seed)
    print(f"Quiz ({len(questions)} questions):")
    answers: List[str] = []
    for i, q in enumerate(questions, 1):
        print(f"  {i}. {q.prompt}")
        if not interactive:
            print(f"     answer: {q.answer}")
            continue
        try:
            answer = input("     > ")
        except EOFError:
            break
        answers.append(answer)
        if quiz_mod.check_answer(q, answer):
            print("     correct")
        else:
            print(f"     wrong, the answer is {q.answer}")

    if interactive:
        correct, total = quiz_mod.score(questions, answers)
        print(f"Score: {correct}/{total} ({quiz_mod.score_percent(correct, total):.0f}%)")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Huffman coding walkthrough for a single input")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", type=str, help="Message to encode")
    src.add_argument("--file", type=str, help="UTF-8 text file to encode")
    src.add_argument("--audio", type=str, help="PCM WAV file, quantized to text before encoding")

    ap.add_argument("--levels", type=int, default=quantize.DEFAULT_LEVELS, help="Quantization levels for --audio")
    ap.add_argument("--alphabet", type=str, default=quantize.DEFAULT_ALPHABET,
                    help="Symbols for the quantization levels, lowest level first")
    ap.add_argument("--max-samples", type=int, default=quantize.DEFAULT_MAX_SAMPLES,
                    help="Downsample --audio to about this many samples")
    ap.add_argument("--json", type=str, default=None, help="Write the codebook as JSON to this path")
    ap.add_argument("--plot-dir", type=str, default=None, help="Write tree.png and frequencies.png here")
    ap.add_argument("--quiz", type=int, default=0, help="Print this many quiz questions")
    ap.add_argument("--interactive", action="store_true", help="Ask the quiz questions on stdin and keep score")
    ap.add_argument("--seed", type=int, default=None, help="Seed for quiz shuffling")
    ap.add_argument("--show-bits", action="store_true", help="Print the full encoded bitstring")

    args = ap.parse_args(argv)
    if args.levels < 1:
        ap.error(f"--levels must be >= 1, got {args.levels}")
    if len(args.alphabet) < args.levels:
        ap.error(f"--alphabet has {len(args.alphabet)} symbols but --levels is {args.levels}")

    try:
        text = read_input(args)
    except (OSError, ValueError, wave.Error) as exc:
        print(f"error: could not read input: {exc}")
        return 2

    result = run_pipeline(text)
    if not result.ready:
        print("Nothing to encode: input is empty")
        return 0

    print_frequency_table(result)
    print(f"Tree depth: {huff.tree_depth(result.tree)}")
    print_codebook(result)

    if args.show_bits:
        print(f"Encoded: {result.encoded}")
    print_stats(result)

    if result.decode_error is not None:
        print(f"error: {result.decode_error}")
        return 1
    print(f"Round trip: {'ok' if result.round_trip_ok else 'MISMATCH'}")

    if args.json:
        Path(args.json).write_text(huff.codes_to_json(result.codes), encoding="utf-8")
        print(f"Wrote codebook to {args.json}")

    if args.plot_dir:
        outdir = Path(args.plot_dir)
        outdir.mkdir(parents=True, exist_ok=True)
        plotting.plot_tree(result.tree, result.codes, outdir / "tree.png")
        plotting.plot_frequencies(result.frequencies, outdir / "frequencies.png")
        print("Charts saved in:", outdir.resolve())

    if args.quiz > 0:
        run_quiz(result, args.quiz, args.seed, interactive=args.interactive)

    return 0 if result.round_trip_ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
