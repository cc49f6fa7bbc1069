import numpy as np
import pytest
from PIL import Image

import quantize
from palette_quant.image_io import load_image


def _save(path, rgba):
    Image.fromarray(rgba).save(path)
    return path


def _gradient(h=16, w=16):
    rgba = np.zeros((h, w, 4), np.uint8)
    rgba[..., 0] = np.linspace(0, 255, w, dtype=np.uint8)[None, :]
    rgba[..., 1] = np.linspace(0, 255, h, dtype=np.uint8)[:, None]
    rgba[..., 2] = 90
    rgba[..., 3] = 255
    return rgba


def test_single_file_with_builtin_palette(tmp_path, capsys):
    src = _save(tmp_path / "grad.png", _gradient())
    quantize.main([str(src), "--palette", "bw"])

    out_path = tmp_path / "grad_quant.png"
    assert out_path.exists()
    colours = {tuple(c) for c in load_image(out_path).pixels.reshape(-1, 4).tolist()}
    assert colours <= {(0, 0, 0, 255), (255, 255, 255, 255)}

    text = capsys.readouterr().out
    assert "Wrote grad_quant.png" in text
    assert "Black" in text or "White" in text
    assert "Total pixels: 256" in text


def test_hex_file_palette_and_outdir(tmp_path, c64_hex_file):
    src = _save(tmp_path / "grad.png", _gradient())
    outdir = tmp_path / "out"
    quantize.main([str(src), "--palette", str(c64_hex_file), "--outdir", str(outdir), "--matcher", "brute"])
    assert (outdir / "grad_quant.png").exists()


def test_verify_passes_with_default_threshold(tmp_path, capsys):
    src = _save(tmp_path / "grad.png", _gradient())
    quantize.main([str(src), "--verify"])
    text = capsys.readouterr().out
    assert "Verify vs brute" in text
    assert "FAILED" not in text


def test_verify_fails_above_threshold(tmp_path, monkeypatch):
    src = _save(tmp_path / "grad.png", _gradient())
    monkeypatch.setattr(quantize, "worse_match_ratio", lambda source, got, want: 0.5)
    with pytest.raises(SystemExit) as exc:
        quantize.main([str(src), "--verify", "--threshold", "0.25"])
    assert exc.value.code == 1


class _FirstColourMatcher:
    def __init__(self, palette):
        self.palette = tuple(palette)

    def nearest(self, query):
        return self.palette[0]


def test_verify_default_threshold_catches_wrong_matches(tmp_path, monkeypatch, capsys):
    src = _save(tmp_path / "grad.png", _gradient())
    monkeypatch.setattr(quantize, "build_matcher", lambda name, palette: _FirstColourMatcher(palette))
    with pytest.raises(SystemExit) as exc:
        quantize.main([str(src), "--palette", "bw", "--verify"])
    assert exc.value.code == 1
    assert "FAILED" in capsys.readouterr().out


def test_folder_mode_skips_outputs(tmp_path, capsys):
    _save(tmp_path / "a.png", _gradient(8, 8))
    _save(tmp_path / "b.png", _gradient(4, 12))
    _save(tmp_path / "a_quant.png", _gradient(2, 2))
    quantize.main([str(tmp_path), "--jobs", "2", "--palette", "grey4"])

    text = capsys.readouterr().out
    assert text.index("=== a.png ===") < text.index("=== b.png ===")
    assert "a_quant.png ===" not in text
    assert (tmp_path / "b_quant.png").exists()


def test_missing_input_exits_2(tmp_path):
    with pytest.raises(SystemExit) as exc:
        quantize.main([str(tmp_path / "missing.png")])
    assert exc.value.code == 2


def test_bad_palette_exits_2(tmp_path, capsys):
    src = _save(tmp_path / "grad.png", _gradient())
    bad = tmp_path / "bad.hex"
    bad.write_text("000000\n12345Z\n")
    with pytest.raises(SystemExit) as exc:
        quantize.main([str(src), "--palette", str(bad)])
    assert exc.value.code == 2
    assert "line 2" in capsys.readouterr().err


def test_empty_palette_file_exits_2(tmp_path):
    src = _save(tmp_path / "grad.png", _gradient())
    empty = tmp_path / "empty.hex"
    empty.write_text("")
    with pytest.raises(SystemExit) as exc:
        quantize.main([str(src), "--palette", str(empty)])
    assert exc.value.code == 2


def test_list_palettes(capsys):
    quantize.main(["--list-palettes"])
    text = capsys.readouterr().out
    assert "commodore64 (16 colours)" in text
    assert "bw (2 colours)" in text
