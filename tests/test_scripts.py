"""Test the command-line entry points.

Validates scripts.generate_scribbles.main() and scripts.inspect_strokes.main()
as callables (no subprocess):
    - Exit codes: 0 success, 1 regenerate mismatch, 2 bad input
    - Outputs exist and are well-formed
    - Inspect re-renders byte-identical SVG from a stroke dump

Run:
    pytest tests/test_scripts.py -v
"""

import json
import logging

import pytest

from scripts import generate_scribbles, inspect_strokes
from src.scribble_field import strokes as stroke_utils
from src.scribble_field.generator import generate
from src.utils import fs, hashing, logging_config


@pytest.fixture(autouse=True)
def clean_context():
    yield
    logging_config.pop_context()


@pytest.fixture
def band_files(tmp_path):
    svg = tmp_path / "band.svg"
    yml = tmp_path / "band.yaml"
    rc = generate_scribbles.main([
        '--seed', '42', '--count', '5', '--svg', str(svg), '--yaml', str(yml),
    ])
    assert rc == 0
    return svg, yml


# ============================================================================
# generate_scribbles.py
# ============================================================================

def test_generate_writes_outputs(band_files):
    svg, yml = band_files
    expected = generate(42, count=5)

    text = svg.read_text()
    assert text.startswith("<svg")
    assert text.count("<path ") == len(expected)

    loaded, doc = stroke_utils.load_strokes_yaml(yml)
    assert doc.seed == 42
    assert loaded == expected


def test_generate_with_config_file(tmp_path):
    cfg = tmp_path / "cfg.yaml"
    fs.atomic_yaml_dump({'schema': 'scribble.v1', 'seed': 3, 'count': 4,
                         'canvas': {'width': 300, 'height': 80}}, cfg)
    yml = tmp_path / "out.yaml"

    rc = generate_scribbles.main(['--config', str(cfg), '--width', '320', '--yaml', str(yml)])
    assert rc == 0

    loaded, doc = stroke_utils.load_strokes_yaml(yml)
    assert doc.canvas.width == 320.0
    assert loaded == generate(3, count=4, width=320, height=80)


@pytest.mark.parametrize("argv", [
    ['--seed', '-1'],
    ['--seed', str(2 ** 32)],
    ['--count', '-2'],
    ['--width', 'nan'],
    ['--config', '/nonexistent/scribble.yaml'],
])
def test_generate_bad_input_returns_2(argv):
    assert generate_scribbles.main(argv) == 2


def test_generate_without_outputs_still_runs():
    assert generate_scribbles.main(['--seed', '1', '--count', '2']) == 0


def test_generate_logs_config_provenance(tmp_path):
    cfg = tmp_path / "cfg.yaml"
    fs.atomic_yaml_dump({'schema': 'scribble.v1', 'seed': 3, 'count': 2}, cfg)
    log_file = tmp_path / "run.log"

    rc = generate_scribbles.main(['--config', str(cfg), '--log_file', str(log_file)])
    assert rc == 0

    text = log_file.read_text()
    assert f"sha256={hashing.sha256_file(cfg)[:12]}" in text
    assert "Resolved config hash: " in text


def test_generate_write_failure_clears_seed_context(tmp_path):
    taken = tmp_path / "taken.svg"
    taken.mkdir()

    with pytest.raises(RuntimeError):
        generate_scribbles.main(['--seed', '5', '--count', '1', '--svg', str(taken)])

    fmt = logging_config.ContextFormatter("json")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", (), None)
    rec = json.loads(fmt.format(record))
    assert rec["app"] == "generate"
    assert "seed" not in rec


# ============================================================================
# inspect_strokes.py
# ============================================================================

def test_inspect_regenerate_and_rerender(band_files, tmp_path):
    svg, yml = band_files
    again = tmp_path / "again.svg"

    rc = inspect_strokes.main([str(yml), '--regenerate', '--svg', str(again)])
    assert rc == 0
    assert again.read_text() == svg.read_text()


def test_inspect_regenerate_mismatch_with_custom_tuning(tmp_path):
    cfg = tmp_path / "cfg.yaml"
    fs.atomic_yaml_dump({'schema': 'scribble.v1', 'seed': 8, 'count': 6,
                         'tuning': {'palette': ['#000000']}}, cfg)
    yml = tmp_path / "custom.yaml"
    assert generate_scribbles.main(['--config', str(cfg), '--yaml', str(yml)]) == 0

    assert inspect_strokes.main([str(yml)]) == 0
    assert inspect_strokes.main([str(yml), '--regenerate']) == 1


@pytest.mark.parametrize("extra", [['--heatmap', '7'], ['--heatmap', '0,5'], ['--heatmap', 'a,b']])
def test_inspect_bad_heatmap_returns_2(band_files, extra):
    _, yml = band_files
    assert inspect_strokes.main([str(yml)] + extra) == 2


def test_inspect_missing_file_returns_2(tmp_path):
    assert inspect_strokes.main([str(tmp_path / "missing.yaml")]) == 2


def test_summarize(band_files):
    _, yml = band_files
    loaded, _ = stroke_utils.load_strokes_yaml(yml)
    summary = inspect_strokes.summarize(loaded, 600, 140, (7, 30))

    assert summary['strokes'] == len(loaded)
    assert summary['regular'] == 5
    assert summary['heavy'] == len(loaded) - 5
    assert sum(summary['colors'].values()) == len(loaded)
    assert 1 <= summary['max_overdraw'] <= len(loaded)
    assert summary['covered_cells'] > 0


def test_inspect_malformed_yaml_returns_2(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("strokes: [1, 2\n")
    assert inspect_strokes.main([str(bad)]) == 2
