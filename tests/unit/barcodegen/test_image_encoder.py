from io import BytesIO
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from epc_qr.barcodegen.image_encoder import MAX_IMAGE_SIDE, ImageEncoder
from epc_qr.exceptions import ImageEncodeError
from epc_qr.model.enums import ImageFormat

CHECKER = [
    [True, False, True],
    [False, True, False],
    [True, False, True],
]


def test_rasterize_block_size_and_levels() -> None:
    img = ImageEncoder(module_size=4).rasterize(CHECKER)
    assert img.mode == "L"
    assert img.size == (12, 12)
    assert img.getpixel((0, 0)) == 0
    assert img.getpixel((3, 3)) == 0
    assert img.getpixel((4, 0)) == 255
    assert img.getpixel((7, 3)) == 255
    assert img.getpixel((5, 5)) == 0


def test_rasterize_custom_pixels() -> None:
    img = ImageEncoder(module_size=1, dark_pixel=40, light_pixel=200).rasterize(CHECKER)
    assert img.size == (3, 3)
    assert img.getpixel((0, 0)) == 40
    assert img.getpixel((1, 0)) == 200


@pytest.mark.parametrize("matrix", [[], [[]], [[True, False], [True]]])
def test_rasterize_rejects_bad_matrix(matrix) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(ImageEncodeError):
        ImageEncoder().rasterize(matrix)


def test_rasterize_rejects_huge_image() -> None:
    matrix = [[False] * 200 for _ in range(200)]
    with pytest.raises(ImageEncodeError):
        ImageEncoder(module_size=MAX_IMAGE_SIDE // 100).rasterize(matrix)


@pytest.mark.parametrize(
    "kwargs", [{"module_size": 0}, {"dark_pixel": -1}, {"light_pixel": 256}]
)
def test_invalid_arguments(kwargs) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(ValueError):
        ImageEncoder(**kwargs)


def test_to_bytes_png() -> None:
    enc = ImageEncoder(module_size=2)
    data = enc.to_bytes(enc.rasterize(CHECKER), ImageFormat.PNG)
    assert data.startswith(b"\x89PNG\r\n\x1a\n")


def test_to_bytes_jpeg() -> None:
    enc = ImageEncoder(module_size=2)
    data = enc.to_bytes(enc.rasterize(CHECKER), ImageFormat.JPEG)
    assert data.startswith(b"\xff\xd8")


def test_to_bytes_qoi_is_opaque_rgb() -> None:
    enc = ImageEncoder(module_size=2)
    data = enc.to_bytes(enc.rasterize(CHECKER), ImageFormat.QOI)
    assert data.startswith(b"qoif")
    # заголовок QOI: magic, width, height, channels, colorspace
    assert int.from_bytes(data[4:8], "big") == 6
    assert int.from_bytes(data[8:12], "big") == 6
    assert data[12] == 3


@pytest.mark.parametrize(
    "name,magic",
    [
        ("code.png", b"\x89PNG"),
        ("code.jpg", b"\xff\xd8"),
        ("code.jpeg", b"\xff\xd8"),
        ("code.qoi", b"qoif"),
        ("code.unknown", b"\x89PNG"),
        ("code", b"\x89PNG"),
    ],
)
def test_save_infers_format_from_extension(tmp_path: Path, name: str, magic: bytes) -> None:
    enc = ImageEncoder(module_size=2)
    path = enc.save(enc.rasterize(CHECKER), tmp_path / name)
    assert path.read_bytes().startswith(magic)


def test_save_explicit_format_wins(tmp_path: Path) -> None:
    enc = ImageEncoder(module_size=2)
    path = enc.save(enc.rasterize(CHECKER), tmp_path / "code.png", ImageFormat.QOI)
    assert path.read_bytes().startswith(b"qoif")


def test_saved_png_round_trips(tmp_path: Path) -> None:
    enc = ImageEncoder(module_size=3)
    path = enc.save(enc.rasterize(CHECKER), str(tmp_path / "code.png"))
    with Image.open(path) as img:
        assert img.size == (9, 9)
        assert img.convert("L").getpixel((0, 0)) == 0


def test_save_io_error_propagates(tmp_path: Path) -> None:
    enc = ImageEncoder()
    with pytest.raises(OSError):
        enc.save(enc.rasterize(CHECKER), tmp_path / "missing" / "code.png")


def test_encoder_failure_is_wrapped() -> None:
    enc = ImageEncoder()
    img = enc.rasterize(CHECKER)
    with patch.object(Image.Image, "save", side_effect=KeyError("QOI")):
        with pytest.raises(ImageEncodeError):
            enc.write(img, BytesIO(), ImageFormat.QOI)
