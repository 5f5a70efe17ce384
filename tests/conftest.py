from pathlib import Path

import pytest


def write_class(root: Path, class_id: str, *hints: str, extension: str = ".js") -> Path:
    """Write a minimal class file carrying the given hint lines."""
    path = root.joinpath(*class_id.split("."))
    path = path.with_name(path.name + extension)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["/**"] + [f" * {h}" for h in hints] + [" */", f'fw.Class.define("{class_id}", {{}});', ""]
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


@pytest.fixture
def make_class():
    return write_class


@pytest.fixture
def root(tmp_path):
    r = tmp_path / "root"
    r.mkdir()
    return r
