import csv
import json
import wave

import numpy as np
import pytest

import experiments
import explore


def test_explore_text(tmp_path, capsys):
    codes_path = tmp_path / "codes.json"
    rc = explore.main([
        "--text", "hello world",
        "--json", str(codes_path),
        "--plot-dir", str(tmp_path / "plots"),
        "--quiz", "3", "--seed", "1",
        "--show-bits",
    ])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Round trip: ok" in out
    assert "Compression ratio: 2.75:1" in out
    assert "Quiz (3 questions)" in out
    assert json.loads(codes_path.read_text(encoding="utf-8"))["l"] == "10"
    assert (tmp_path / "plots" / "tree.png").exists()
    assert (tmp_path / "plots" / "frequencies.png").exists()


def test_explore_empty_text(capsys):
    assert explore.main(["--text", ""]) == 0
    assert "Nothing to encode" in capsys.readouterr().out


def test_explore_missing_file(tmp_path, capsys):
    assert explore.main(["--file", str(tmp_path / "missing.txt")]) == 2
    assert "error" in capsys.readouterr().out


def test_experiments_small_run(tmp_path, capsys):
    rc = experiments.main([
        "--outdir", str(tmp_path),
        "--runs", "1",
        "--exp1_size_k", "1",
        "--exp1_generators", "english_like,not_a_generator",
        "--exp2_min_k", "1",
        "--exp2_max_k", "2",
        "--exp2_generators", "zipf32",
        "--exp3_alphabets", "16,200",
        "--no_plots",
    ])
    assert rc == 0
    with (tmp_path / "metrics.csv").open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 10
    assert all(r["correctness_ok"] == "1" for r in rows)
    assert {r["dataset_name"] for r in rows if r["exp_name"] == "exp1_distribution"} == {
        "english_like", "not_a_generator_fallback_uniform64",
    }
    assert {int(r["unique_symbols"]) for r in rows if r["exp_name"] == "exp3_alphabet_scaling"} == {16, 200}
    assert (tmp_path / "summary.csv").exists()
    assert "Correctness rate across all runs: 1.000" in capsys.readouterr().out


def test_experiments_plots(tmp_path):
    rc = experiments.main([
        "--outdir", str(tmp_path), "--runs", "1",
        "--exp1_size_k", "1", "--exp1_generators", "audio_like",
        "--exp2_min_k", "1", "--exp2_max_k", "1", "--exp2_generators", "uniform16",
        "--exp3_alphabets", "8,32",
    ])
    assert rc == 0
    assert (tmp_path / "exp1_compression_ratio.png").exists()
    assert (tmp_path / "exp2_total_time_uniform16.png").exists()
    assert (tmp_path / "exp3_build_time.png").exists()


def test_run_one_rejects_unknown_builder():
    with pytest.raises(ValueError):
        experiments.run_one("abc", "bogus")


def test_explore_rejects_levels_beyond_alphabet(capsys):
    with pytest.raises(SystemExit) as exc_info:
        explore.main(["--text", "abc", "--levels", "9"])
    assert exc_info.value.code == 2
    assert "--alphabet has 8 symbols but --levels is 9" in capsys.readouterr().err


def test_explore_audio_custom_alphabet(tmp_path, capsys):
    path = tmp_path / "clip.wav"
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(8000)
        wf.writeframes(np.asarray([-32768, 32767, -32768, 32767, 0], dtype="<i2").tobytes())

    rc = explore.main(["--audio", str(path), "--levels", "3", "--alphabet", "xyz"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Converted 5 samples to text (2 distinct symbols)" in out
    assert "Round trip: ok" in out


def test_explore_interactive_quiz_keeps_score(monkeypatch, capsys):
    answers = iter(["wrong", "also wrong"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    rc = explore.main(["--text", "aab", "--quiz", "2", "--seed", "0", "--interactive"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Score: 0/2 (0%)" in out
    assert "answer:" not in out
