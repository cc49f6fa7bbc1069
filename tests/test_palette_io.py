import pytest

from palette_quant.errors import (
    InvalidHexDigitError,
    MalformedLineError,
    PaletteError,
    PaletteReadError,
)
from palette_quant.palette_data import BUILTIN_PALETTES, builtin_palette
from palette_quant.palette_io import (
    format_hex_palette,
    load_palette,
    parse_hex_palette,
    read_hex_palette,
    write_hex_palette,
)


def test_reads_commodore64_file(c64_hex_file):
    palette = read_hex_palette(c64_hex_file)
    assert palette == (
        (0, 0, 0, 255),
        (98, 98, 98, 255),
        (137, 137, 137, 255),
        (173, 173, 173, 255),
        (255, 255, 255, 255),
        (159, 78, 68, 255),
        (203, 126, 117, 255),
        (109, 84, 18, 255),
        (161, 104, 60, 255),
        (201, 212, 135, 255),
        (154, 226, 155, 255),
        (92, 171, 94, 255),
        (106, 191, 198, 255),
        (136, 126, 203, 255),
        (80, 69, 155, 255),
        (160, 87, 163, 255),
    )
    assert palette == builtin_palette("commodore64")


def test_order_length_and_alpha_preserved():
    lines = ["ff0000", "00FF00", "0000ff", "ff0000"]
    palette = parse_hex_palette(lines)
    assert len(palette) == 4
    assert palette[0] == palette[3] == (255, 0, 0, 255)
    assert palette[1] == (0, 255, 0, 255)
    assert all(c[3] == 255 for c in palette)


def test_line_endings_are_stripped():
    assert parse_hex_palette(["abcdef\r\n", "ABCDEF\n", "012345"]) == (
        (0xAB, 0xCD, 0xEF, 255),
        (0xAB, 0xCD, 0xEF, 255),
        (0x01, 0x23, 0x45, 255),
    )


def test_empty_input_is_an_empty_palette():
    assert parse_hex_palette([]) == ()


def test_short_line_is_malformed():
    with pytest.raises(MalformedLineError) as exc:
        parse_hex_palette(["000000", "12345"])
    assert exc.value.line_no == 2
    assert exc.value.line == "12345"


@pytest.mark.parametrize("line", ["", "0000", "1234567", "00 00 00"])
def test_wrong_length_lines_are_malformed(line):
    with pytest.raises(MalformedLineError):
        parse_hex_palette([line])


@pytest.mark.parametrize("line", ["12345Z", "+1ffff", " 1ffff", "1_ffff", "gg0000"])
def test_non_hex_pairs_are_rejected(line):
    with pytest.raises(InvalidHexDigitError):
        parse_hex_palette([line])


def test_parse_errors_are_palette_errors():
    with pytest.raises(PaletteError):
        parse_hex_palette(["12345"])
    with pytest.raises(ValueError):
        parse_hex_palette(["12345Z"])


def test_stops_at_first_error():
    with pytest.raises(MalformedLineError) as exc:
        parse_hex_palette(["000000", "xx", "zzzzzz"])
    assert exc.value.line_no == 2


def test_missing_file_is_a_read_error(tmp_path):
    with pytest.raises(PaletteReadError) as exc:
        read_hex_palette(tmp_path / "nope.hex")
    assert exc.value.path == str(tmp_path / "nope.hex")


def test_undecodable_file_is_a_read_error(tmp_path):
    p = tmp_path / "bad.hex"
    p.write_bytes(b"\xff\xfe\x00\x81\n")
    with pytest.raises(PaletteReadError):
        read_hex_palette(p)


def test_write_then_read_keeps_colours(tmp_path):
    palette = builtin_palette("cga")
    path = write_hex_palette(tmp_path / "cga.hex", palette)
    assert read_hex_palette(path) == palette
    assert format_hex_palette(palette)[1] == "0000aa"


def test_load_palette_by_name_or_path(c64_hex_file):
    assert load_palette("BW") == ((0, 0, 0, 255), (255, 255, 255, 255))
    assert load_palette(c64_hex_file) == builtin_palette("commodore64")
    assert load_palette(str(c64_hex_file)) == builtin_palette("commodore64")


def test_load_palette_unknown_name_is_read_error(tmp_path):
    with pytest.raises(PaletteReadError):
        load_palette(str(tmp_path / "solarized"))


def test_builtin_palettes_have_unique_entries():
    for name, pairs in BUILTIN_PALETTES.items():
        hexes = [hx for hx, _ in pairs]
        assert len(hexes) == len(set(hexes)), name
