"""
Shared fixtures for duplicate finder tests.
Creates isolated temporary directory trees with controlled file contents.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'fdup' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

CONTENT_A = b"A" * 1024
CONTENT_B = b"B" * 2048
CONTENT_C = b"C" * 1500


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve so paths compare equal to canonical roots (macOS /var → /private/var)
        yield Path(tmpdir).resolve()


@pytest.fixture
def dup_tree(temp_dir) -> Dict[str, Path]:
    """
    Creates two roots with controlled duplicates:

        a/x.txt              A
        a/sub/x_copy.txt     A   (duplicate inside the same root)
        a/unique.txt         C
        a/pic.JPG            B
        b/y.txt              A   (duplicate across roots)
        b/other.md           B
        b/.hidden.txt        A   (hidden file)
        b/.cache/z.txt       A   (inside hidden directory)
    """
    files = {}
    a = temp_dir / "a"
    b = temp_dir / "b"
    (a / "sub").mkdir(parents=True)
    (b / ".cache").mkdir(parents=True)

    files["root_a"] = a
    files["root_b"] = b

    files["x"] = a / "x.txt"
    files["x_copy"] = a / "sub" / "x_copy.txt"
    files["unique"] = a / "unique.txt"
    files["pic"] = a / "pic.JPG"
    files["y"] = b / "y.txt"
    files["other"] = b / "other.md"
    files["hidden"] = b / ".hidden.txt"
    files["hidden_dir_file"] = b / ".cache" / "z.txt"

    files["x"].write_bytes(CONTENT_A)
    files["x_copy"].write_bytes(CONTENT_A)
    files["unique"].write_bytes(CONTENT_C)
    files["pic"].write_bytes(CONTENT_B)
    files["y"].write_bytes(CONTENT_A)
    files["other"].write_bytes(CONTENT_B)
    files["hidden"].write_bytes(CONTENT_A)
    files["hidden_dir_file"].write_bytes(CONTENT_A)

    return files
