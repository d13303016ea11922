import io
from pathlib import Path

import pytest

from phrasetrie import build, iter_phrases, IngestError, IndexConfig
from phrasetrie import loader


def _seed(tmp: Path, text: str) -> Path:
    p = tmp / "phrases.txt"
    p.write_text(text, encoding="utf-8")
    return p


def test_ids_follow_line_order(tmp_path: Path):
    p = _seed(tmp_path, "alpha one\nbeta two\nalpha three\n")
    idx = build(str(p))
    assert len(idx) == 3
    assert idx.find("alpha") == [0, 2]
    assert idx.find("beta") == [1]


def test_trailing_newline_and_crlf_stripped(tmp_path: Path):
    p = tmp_path / "crlf.txt"
    p.write_bytes(b"red fox\r\nred hen\r\n")
    assert list(iter_phrases(p)) == ["red fox", "red hen"]


def test_last_line_without_newline_is_kept():
    assert list(iter_phrases(io.StringIO("a b\nc d"))) == ["a b", "c d"]


def test_phrases_are_lowercased_on_build():
    idx = build(["The Batman", "THE BATMAN RETURNS"], stop_words_enabled=True)
    assert idx.find("batman") == [0, 1]


def test_blank_lines_consume_an_id():
    idx = build(["red", "", "red"])
    assert len(idx) == 3
    assert idx.find("red") == [0, 2]


def test_missing_file_is_resource_error(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        build(str(tmp_path / "nope.txt"))


def test_invalid_utf8_aborts_build(tmp_path: Path):
    p = tmp_path / "bad.txt"
    p.write_bytes(b"good line\n" + b"\xff\xfe broken\n" * 5000)
    with pytest.raises(IngestError):
        build(str(p))


def test_read_error_mid_stream_aborts_build():
    def lines():
        yield "first phrase\n"
        raise OSError("device went away")

    with pytest.raises(IngestError) as exc:
        build(lines())
    assert isinstance(exc.value.__cause__, OSError)


def test_conflicting_stop_word_settings_rejected():
    with pytest.raises(ValueError):
        build(["the batman"], True, config=IndexConfig())


def test_matching_stop_word_settings_accepted():
    idx = build(["the batman"], True, config=IndexConfig(stop_words_enabled=True))
    assert idx.find("batman") == [0]


def test_verbose_progress_is_per_call(monkeypatch, capsys):
    monkeypatch.setattr(loader, "PROGRESS_EVERY_PHRASES", 2)
    build(["a", "b", "c", "d"], verbose=True)
    assert "[indexed] phrases=4" in capsys.readouterr().out
    build(["a", "b", "c", "d"])
    assert capsys.readouterr().out == ""
