"""
Shared fixtures for dedupe tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for dedupe scenarios (walk order shown):
    - a.txt       "X"  ← kept
    - b.txt       "X"  ← same content as a.txt
    - c.txt       "Y"  ← unique
    - sub/a.txt   "X"  ← same content AND same name as a.txt (only seen recursively)
    - sub/d.txt   "Z"  ← unique
    """
    files = {}

    files["a"] = temp_dir / "a.txt"
    files["a"].write_bytes(b"X")
    files["b"] = temp_dir / "b.txt"
    files["b"].write_bytes(b"X")
    files["c"] = temp_dir / "c.txt"
    files["c"].write_bytes(b"Y")

    subdir = temp_dir / "sub"
    subdir.mkdir()
    files["sub_a"] = subdir / "a.txt"
    files["sub_a"].write_bytes(b"X")
    files["sub_d"] = subdir / "d.txt"
    files["sub_d"].write_bytes(b"Z")

    return files


def snapshot(root: Path) -> Dict[str, bytes]:
    """Path → content of every file under root."""
    return {str(p.relative_to(root)): p.read_bytes() for p in root.rglob("*") if p.is_file()}


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """No real ~/.dedupkit.toml or $DEDUPKIT_CONFIG may leak into tests."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.chdir(work)
    monkeypatch.delenv("DEDUPKIT_CONFIG", raising=False)
    return home
