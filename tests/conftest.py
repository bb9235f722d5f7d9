from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

SCENARIO_SOURCE = """use std::env;

fn main() {
    let a = std::env::var("DATABASE_URL").unwrap();
    let b = dotenv::var("SECRET_KEY").ok();
}
"""


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Create files relative to tmp_path; returns the root."""

    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            fp = tmp_path / rel
            fp.parent.mkdir(parents=True, exist_ok=True)
            fp.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def scenario_root(write_tree) -> Path:
    return write_tree({"src/main.rs": SCENARIO_SOURCE})
