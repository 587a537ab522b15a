import wave

import numpy as np
import pytest

import quantize


def write_wav(path, samples, channels=1, width=2):
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(width)
        wf.setframerate(8000)
        wf.writeframes(np.asarray(samples, dtype="<i2").tobytes())


def test_samples_to_text_levels():
    assert quantize.samples_to_text([-1.0, 0.0, 1.0]) == "adh"


def test_samples_to_text_clamps():
    assert quantize.samples_to_text([-3.0, 2.5]) == "ah"


def test_samples_to_text_custom_alphabet():
    assert quantize.samples_to_text([-1.0, 1.0], levels=2, alphabet="01") == "01"


def test_samples_to_text_empty():
    assert quantize.samples_to_text([]) == ""


def test_samples_to_text_rejects_short_alphabet():
    with pytest.raises(ValueError):
        quantize.samples_to_text([0.0], levels=8, alphabet="abc")
    with pytest.raises(ValueError):
        quantize.samples_to_text([0.0], levels=0)


def test_downsample():
    samples = np.linspace(-1, 1, 2500)
    out = quantize.downsample(samples, 1000)
    assert len(out) == 1250
    assert out[1] == samples[2]
    assert len(quantize.downsample(samples[:10], 1000)) == 10
    assert len(quantize.downsample([], 1000)) == 0


def test_load_wav_mono(tmp_path):
    path = tmp_path / "mono.wav"
    write_wav(path, [0, 16384, -32768])
    samples = quantize.load_wav_samples(path)
    assert samples.tolist() == pytest.approx([0.0, 0.5, -1.0])


def test_load_wav_keeps_first_channel(tmp_path):
    path = tmp_path / "stereo.wav"
    write_wav(path, [16384, -16384, 0, 32767], channels=2)
    samples = quantize.load_wav_samples(path)
    assert samples.tolist() == pytest.approx([0.5, 0.0])
