"""Test atomic filesystem operations.

Tests for src.utils.fs:
    - Atomic writes leave no tmp file behind and overwrite existing targets
    - YAML roundtrip preserves structure and key order
    - load_yaml errors (missing file, malformed YAML)
    - ensure_dir creates parents

Run:
    pytest tests/test_fs.py -v
"""

import pytest
import yaml

from src.utils import fs


def test_atomic_write_bytes(tmp_path):
    target = tmp_path / "nested" / "dir" / "out.bin"
    fs.atomic_write_bytes(target, b"first")
    fs.atomic_write_bytes(target, b"second")

    assert target.read_bytes() == b"second"
    assert not (target.parent / "out.bin.tmp").exists()


def test_atomic_write_text(tmp_path):
    target = tmp_path / "band.svg"
    fs.atomic_write_text("<svg>ü</svg>\n", target)
    assert target.read_text(encoding="utf-8") == "<svg>ü</svg>\n"


def test_atomic_write_failure_raises_runtime_error(tmp_path):
    # target is an existing directory → rename fails
    target = tmp_path / "taken"
    target.mkdir()
    with pytest.raises(RuntimeError):
        fs.atomic_write_bytes(target, b"x")
    assert not (tmp_path / "taken.tmp").exists()


def test_atomic_yaml_dump_keeps_order(tmp_path):
    target = tmp_path / "doc.yaml"
    doc = {'schema': 'strokes.v1', 'seed': 7, 'canvas': {'width': 600.0, 'height': 140.0}}
    fs.atomic_yaml_dump(doc, target)

    text = target.read_text()
    assert text.index('schema') < text.index('seed') < text.index('canvas')
    assert fs.load_yaml(target) == doc


def test_load_yaml_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.load_yaml(tmp_path / "missing.yaml")


def test_load_yaml_malformed(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("a: [1, 2\n")
    with pytest.raises(yaml.YAMLError, match="bad.yaml"):
        fs.load_yaml(bad)


def test_ensure_dir(tmp_path):
    d = fs.ensure_dir(tmp_path / "a" / "b" / "c")
    assert d.is_dir()
    assert fs.ensure_dir(d) == d


def test_safe_remove(tmp_path):
    f = tmp_path / "f.txt"
    f.write_text("x")
    assert fs.safe_remove(f) is True
    assert fs.safe_remove(f) is False
