"""Input discovery and output path derivation."""

from __future__ import annotations

import glob
from pathlib import Path
from typing import Iterable, Optional, Union

import settings
from core.models import FilterJob

_GLOB_CHARS = ("*", "?", "[")


def _html_files(directory: Path) -> list[Path]:
    return sorted(
        child
        for child in directory.iterdir()
        if child.is_file() and child.suffix.lower() in settings.INPUT_SUFFIXES
    )


def expand_inputs(raw_paths: Iterable[Union[str, Path]]) -> list[Path]:
    """Expand files, directories, and glob patterns into a list of inputs.

    Directories contribute their chat log files (non-recursive). Duplicates are
    dropped while keeping first-seen order.

    Raises FileNotFoundError if a non-glob path doesn't exist, or if expansion
    produces zero files.
    """

    expanded: list[Path] = []
    seen: set[Path] = set()

    def _add(path: Path) -> None:
        key = path.resolve()
        if key not in seen:
            seen.add(key)
            expanded.append(path)

    for raw in raw_paths:
        raw_text = str(raw)
        path = Path(raw_text)
        # Existing paths win, so names like "round [1].html" stay literal.
        if path.is_dir():
            for child in _html_files(path):
                _add(child)
        elif path.is_file():
            _add(path)
        elif any(c in raw_text for c in _GLOB_CHARS):
            for match in sorted(glob.glob(raw_text)):
                if Path(match).is_file():
                    _add(Path(match))
        else:
            raise FileNotFoundError(f"File not found: {raw_text}")

    if not expanded:
        raise FileNotFoundError("No chat log files found matching the given paths")

    return expanded


def derive_output_path(input_path: Path, output: Optional[Path], multiple: bool) -> Path:
    """Return where the filtered copy of ``input_path`` is written.

    - No output: ./filtered_<name> in the current directory.
    - Batch run, or output is an existing directory: <output>/filtered_<name>.
    - Otherwise the output is used as the file path itself.
    """

    name = f"{settings.OUTPUT_PREFIX}{input_path.name}"
    if output is None:
        return Path(".") / name
    if multiple or output.is_dir():
        return output / name
    return output


def build_jobs(inputs: list[Path], output: Optional[Path]) -> list[FilterJob]:
    """Pair every input with its output path.

    Raises ValueError when two inputs map to the same output, or when an
    output would replace its own input.
    """

    multiple = len(inputs) > 1
    jobs: list[FilterJob] = []
    targets: dict[Path, Path] = {}
    for input_path in inputs:
        output_path = derive_output_path(input_path, output, multiple)
        key = output_path.resolve()
        if key == input_path.resolve():
            raise ValueError(f"Output path {output_path} would replace its input")
        if key in targets:
            raise ValueError(
                f"Inputs {targets[key]} and {input_path} both map to {output_path}"
            )
        targets[key] = input_path
        jobs.append(FilterJob(input_path=input_path, output_path=output_path))
    return jobs
