from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_PIXELS = "480x360"
FULL_SET = ["-2.2,1.2", "1.0,-1.2"]


@dataclass
class Expected:
    path: Path
    size: tuple[int, int]


@dataclass
class Example:
    name: str
    args: list[str]
    expected: Expected

    def full_args(self) -> list[str]:
        return [sys.executable, "render.py", *self.args]


def _example(name: str, filename: str, pixels: str, upper_left: str, lower_right: str, threads: int) -> Example:
    path = EXAMPLES_ROOT / name / filename
    width, height = (int(side) for side in pixels.split("x"))
    return Example(
        name=name,
        args=[str(path), pixels, upper_left, lower_right, str(threads)],
        expected=Expected(path, (width, height)),
    )


EXAMPLES: list[Example] = [
    _example("sequential", "full-set.png", BASE_PIXELS, *FULL_SET, 1),
    _example("parallel", "full-set.png", BASE_PIXELS, *FULL_SET, 8),
    _example("uneven-bands", "full-set.png", "480x361", *FULL_SET, 7),
    _example("more-threads-than-rows", "strip.png", "480x5", *FULL_SET, 16),
    _example("seahorse-valley", "seahorse.png", BASE_PIXELS, "-0.80,0.20", "-0.70,0.125", 4),
    _example("original-window", "mandel.png", "800x600", "-1.20,0.35", "-1,0.20", 8),
    _example("tiff-output", "full-set.tif", BASE_PIXELS, *FULL_SET, 4),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _verify(example: Example) -> None:
    from PIL import Image

    expected = example.expected
    if not expected.path.is_file():
        raise RuntimeError(f"Expected file {expected.path} was not created")
    with Image.open(expected.path) as image:
        if image.mode != "L":
            raise RuntimeError(f"{expected.path} has mode {image.mode}, expected L")
        if image.size != expected.size:
            raise RuntimeError(f"{expected.path} is {image.size}, expected {expected.size}")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _ensure_clean([example.expected.path.parent])
        completed = subprocess.run(example.full_args(), check=True)
        if completed.returncode != 0:
            raise RuntimeError(f"Example {example.name} failed with {completed.returncode}")
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
