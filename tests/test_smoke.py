from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SCRIPT = REPO_ROOT / "scripts" / "deflate_compress.py"


def run_script(cfg: Path) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = str(REPO_ROOT)
    env.pop("DRY_RUN", None)
    env["DEFLATE_API_KEY"] = "key-123"
    env["DEFLATE_API_SECRET"] = "secret-456"
    return subprocess.run(
        [sys.executable, str(SCRIPT), "--config", str(cfg)],
        cwd=str(REPO_ROOT),
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )


def test_deflate_compress_runs_in_dry_run(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(
        """
app:
  dry_run: true
  log_level: "INFO"
client:
  timeout: 10
job:
  images:
    - "https://example.com/a.jpg"
    - "https://example.com/b.jpg"
  type: "jpg"
  wait: false
  callback: "https://example.com/deflate/callback"
""".strip(),
        encoding="utf-8",
    )

    assert SCRIPT.exists(), f"Missing script: {SCRIPT}"

    r = run_script(cfg)
    assert r.returncode == 0, r.stderr
    assert "DRY_RUN" in r.stdout
    assert "'api_key': 'key-123'" in r.stdout
    assert "'api_secret': '***'" in r.stdout
    assert "secret-456" not in r.stdout


def test_deflate_compress_rejects_missing_callback(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(
        """
app:
  dry_run: true
job:
  images: "https://example.com/a.jpg"
  type: "jpg"
  wait: false
""".strip(),
        encoding="utf-8",
    )

    r = run_script(cfg)
    assert r.returncode != 0
    assert "callback" in r.stderr
