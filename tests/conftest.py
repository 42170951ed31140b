from pathlib import Path
from typing import Callable

import pytest

VALID_PROGRAM = """\
Program Sample {
    int count;
    float ratio;
    /* main loop */
    count = 0;
    while (count < 10) {
        ratio = (count + 1) * 2.5e-1;
        if (ratio >= 1) count = count + 2; else count = count + 1;
    }
}
"""


@pytest.fixture  # type: ignore[misc]
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(source: str, name: str = "prog.plang") -> Path:
        path = tmp_path / name
        path.write_bytes(source.encode("utf-8"))
        return path

    return _write


@pytest.fixture  # type: ignore[misc]
def valid_program() -> str:
    return VALID_PROGRAM
