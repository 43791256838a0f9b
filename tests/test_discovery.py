from __future__ import annotations

from pathlib import Path

import pytest

from adapters.discovery import build_jobs, derive_output_path, expand_inputs


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("x", encoding="utf-8")
    return path


def test_expand_directory_picks_chat_logs(tmp_path: Path) -> None:
    a = _touch(tmp_path / "logs" / "a.html")
    b = _touch(tmp_path / "logs" / "b.htm")
    _touch(tmp_path / "logs" / "notes.txt")
    assert expand_inputs([tmp_path / "logs"]) == [a, b]


def test_expand_glob_and_dedup(tmp_path: Path) -> None:
    a = _touch(tmp_path / "round1.html")
    b = _touch(tmp_path / "round2.html")
    result = expand_inputs([str(a), str(tmp_path / "round*.html")])
    assert result == [a, b]


def test_expand_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="File not found"):
        expand_inputs([tmp_path / "missing.html"])


def test_expand_empty_glob(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="No chat log files"):
        expand_inputs([str(tmp_path / "*.html")])


def test_default_output_is_prefixed_in_cwd() -> None:
    assert derive_output_path(Path("some/dir/chat.html"), None, False) == Path("filtered_chat.html")


def test_explicit_output_file() -> None:
    output = Path("out/result.html")
    assert derive_output_path(Path("chat.html"), output, False) == output


def test_output_directory_in_batch_mode() -> None:
    assert derive_output_path(Path("logs/chat.html"), Path("out"), True) == Path("out/filtered_chat.html")


def test_existing_output_directory_for_single_input(tmp_path: Path) -> None:
    assert derive_output_path(Path("chat.html"), tmp_path, False) == tmp_path / "filtered_chat.html"


def test_build_jobs_pairs_inputs(tmp_path: Path) -> None:
    a = _touch(tmp_path / "a.html")
    b = _touch(tmp_path / "b.html")
    jobs = build_jobs([a, b], tmp_path / "out")
    assert [job.output_path for job in jobs] == [
        tmp_path / "out" / "filtered_a.html",
        tmp_path / "out" / "filtered_b.html",
    ]


def test_build_jobs_rejects_colliding_outputs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    first = _touch(tmp_path / "one" / "chat.html")
    second = _touch(tmp_path / "two" / "chat.html")
    with pytest.raises(ValueError, match="both map to"):
        build_jobs([first, second], None)


def test_build_jobs_rejects_overwriting_input(tmp_path: Path) -> None:
    source = _touch(tmp_path / "chat.html")
    with pytest.raises(ValueError, match="would replace its input"):
        build_jobs([source], source)


def test_existing_file_with_glob_characters_is_literal(tmp_path: Path) -> None:
    bracketed = _touch(tmp_path / "round [1].html")
    _touch(tmp_path / "round 1.html")
    assert expand_inputs([str(bracketed)]) == [bracketed]


def test_glob_still_used_when_no_such_file(tmp_path: Path) -> None:
    a = _touch(tmp_path / "round1.html")
    assert expand_inputs([str(tmp_path / "round[0-9].html")]) == [a]
