from pipeline import run_pipeline


def test_empty_text_is_not_ready():
    result = run_pipeline("")
    assert not result.ready
    assert result.tree is None
    assert result.codes == {}
    assert result.encoded == ""
    assert result.stats is None


def test_hello_world_pipeline():
    result = run_pipeline("hello world")
    assert result.ready
    assert result.frequencies[0] == ("l", 3)
    assert result.codes["l"] == "10"
    assert result.encoded == "11101111101011000000111001010011"
    assert result.decoded == "hello world"
    assert result.skipped == {}
    assert result.round_trip_ok
    assert result.stats.compressed_bits == 32


def test_single_symbol_pipeline():
    result = run_pipeline("aaaa")
    assert result.codes == {"a": "0"}
    assert result.encoded == "0000"
    assert result.decoded == "aaaa"
    assert result.round_trip_ok
    assert result.stats.entropy == 0.0


def test_rerun_builds_fresh_tree():
    first = run_pipeline("abracadabra")
    second = run_pipeline("abracadabra")
    assert first.tree is not second.tree
    assert first.codes == second.codes
