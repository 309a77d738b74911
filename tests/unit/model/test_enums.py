from pathlib import Path

import pytest
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_M

from epc_qr.model.enums import CharacterSet, ErrorCorrection, ImageFormat, RemittanceKind


def test_character_set_codes() -> None:
    assert [int(c) for c in CharacterSet] == [1, 2, 3, 4, 5, 6, 7, 8]
    assert CharacterSet.UTF8.is_supported
    assert not any(c.is_supported for c in CharacterSet if c is not CharacterSet.UTF8)
    assert CharacterSet.UTF8.codec == "utf-8"
    assert CharacterSet.ISO8859_15.codec == "iso8859-15"


def test_remittance_kind_limits() -> None:
    assert RemittanceKind.REFERENCE.max_length == 35
    assert RemittanceKind.TEXT.max_length == 140
    assert RemittanceKind.TEXT.localized_name("ru") == "Назначение платежа"
    assert RemittanceKind.REFERENCE.localized_name() == "Structured reference"


def test_error_correction_parse() -> None:
    assert ErrorCorrection.parse("m") is ErrorCorrection.M
    assert ErrorCorrection.parse(ErrorCorrection.H) is ErrorCorrection.H
    assert ErrorCorrection.M.qrcode_constant == ERROR_CORRECT_M
    assert ErrorCorrection.H.qrcode_constant == ERROR_CORRECT_H
    with pytest.raises(ValueError):
        ErrorCorrection.parse("X")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("png", ImageFormat.PNG),
        ("PNG", ImageFormat.PNG),
        ("jpg", ImageFormat.JPEG),
        (".jpeg", ImageFormat.JPEG),
        ("qoi", ImageFormat.QOI),
        (ImageFormat.QOI, ImageFormat.QOI),
    ],
)
def test_image_format_parse(value, expected) -> None:  # type: ignore[no-untyped-def]
    assert ImageFormat.parse(value) is expected


def test_image_format_parse_unknown() -> None:
    with pytest.raises(ValueError):
        ImageFormat.parse("gif")


@pytest.mark.parametrize(
    "path,expected",
    [
        ("code.qoi", ImageFormat.QOI),
        ("code.QOI", ImageFormat.QOI),
        ("code.jpg", ImageFormat.JPEG),
        ("code.jpeg", ImageFormat.JPEG),
        ("code.png", ImageFormat.PNG),
        ("code.bmp", ImageFormat.PNG),
        ("code", ImageFormat.PNG),
        (Path("dir/code.qoi"), ImageFormat.QOI),
    ],
)
def test_image_format_from_path(path, expected) -> None:  # type: ignore[no-untyped-def]
    assert ImageFormat.from_path(path) is expected


def test_image_format_extension() -> None:
    assert ImageFormat.PNG.extension == ".png"
    assert ImageFormat.JPEG.extension == ".jpg"
    assert ImageFormat.QOI.extension == ".qoi"
    assert ImageFormat.JPEG.pil_format == "JPEG"
