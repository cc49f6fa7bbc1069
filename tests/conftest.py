import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from palette_quant.palette_data import builtin_palette  # noqa: E402


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def c64_palette():
    return builtin_palette("commodore64")


@pytest.fixture
def c64_hex_file(tmp_path):
    """Commodore 64 palette written in the hex line format."""
    p = tmp_path / "commodore64.hex"
    p.write_text(
        "000000\n626262\n898989\nadadad\nffffff\n9f4e44\ncb7e75\n6d5412\n"
        "a1683c\nc9d487\n9ae29b\n5cab5e\n6abfc6\n887ecb\n50459b\na057a3\n"
    )
    return p
