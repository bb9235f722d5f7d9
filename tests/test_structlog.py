from pathlib import Path
from autoenv.utils.structlog import StructLogger


def test_structlog_schema(tmp_path: Path) -> None:
    run_id = "run_test"
    fp = tmp_path / run_id / "events.jsonl"
    slog = StructLogger(fp, run_id)

    # Emit a variety of events
    slog.log_file(ts=1, path=Path("src/main.rs"), names=["DATABASE_URL"])
    slog.log_scan(ts=2, root=Path("."), files=1, variables=1)
    slog.log_render(ts=3, output=Path(".env"), merged=True, keys=1, preserved=0, added=1)
    slog.log_write(ts=4, output=Path(".env"), nbytes=64)
    slog.log_error(ts=5, path=None, reason="test")

    # Validate JSONL lines
    assert fp.exists()
    lines = fp.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 5
    import json

    for ln in lines:
        obj = json.loads(ln)
        assert set(["ts", "run_id", "step", "path", "meta"]).issubset(obj.keys())
    assert json.loads(lines[-1])["path"] is None
