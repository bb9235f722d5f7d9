"""End-to-end discovery, filtering and rendering over in-memory sources."""

from __future__ import annotations

from autoenv.core.aggregator import aggregate, filter_ignored
from autoenv.core.envfile import parse_env
from autoenv.core.render import HEADER, render

SOURCE = (
    'let a = std::env::var("DATABASE_URL").unwrap();\n'
    'let b = dotenv::var("SECRET_KEY").ok();\n'
)


def run(existing: str | None = None, merge: bool = True, ignore: tuple[str, ...] = ()) -> list[str]:
    variables = filter_ignored(aggregate([("src/main.rs", SOURCE)]), ignore)
    parsed = parse_env(existing) if existing is not None else None
    return render(variables, parsed, merge)[len(HEADER):]


def test_scenario_a_fresh_output() -> None:
    assert run() == ["DATABASE_URL=", "SECRET_KEY="]


def test_scenario_b_merge_keeps_existing_value() -> None:
    assert run("DATABASE_URL=postgres://prod\n") == ["DATABASE_URL=postgres://prod", "SECRET_KEY="]


def test_scenario_c_ignore() -> None:
    assert run(ignore=("SECRET_KEY",)) == ["DATABASE_URL="]


def test_overwrite_drops_stale_keys() -> None:
    assert run("OLD_KEY=1\nDATABASE_URL=postgres://prod\n", merge=False) == [
        "DATABASE_URL=",
        "SECRET_KEY=",
    ]


def test_ignore_does_not_remove_existing_entry_when_merging() -> None:
    # ignore only filters discovery; values already in the file survive
    assert run("SECRET_KEY=abc\n", ignore=("SECRET_KEY",)) == ["DATABASE_URL=", "SECRET_KEY=abc"]


def test_ignore_with_overwrite_removes_entry() -> None:
    assert run("SECRET_KEY=abc\n", merge=False, ignore=("SECRET_KEY",)) == ["DATABASE_URL="]
