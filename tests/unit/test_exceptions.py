import pytest

from epc_qr.exceptions import (
    AmountError,
    AmountNoSeparatorError,
    AmountOutOfRangeError,
    AmountParseError,
    DuplicateRemittanceError,
    EpcQrError,
    GenerationError,
    ImageEncodeError,
    InvalidEpcCodeError,
    InvalidFieldLengthError,
    PayloadTooLargeError,
    QrRenderError,
    UnsupportedCharacterSetError,
)
from epc_qr.model.enums import CharacterSet
from epc_qr.payload.validation import FieldViolations


@pytest.mark.parametrize(
    "exc_type,parent",
    [
        (InvalidFieldLengthError, InvalidEpcCodeError),
        (DuplicateRemittanceError, InvalidEpcCodeError),
        (PayloadTooLargeError, InvalidEpcCodeError),
        (UnsupportedCharacterSetError, InvalidEpcCodeError),
        (AmountNoSeparatorError, AmountError),
        (AmountParseError, AmountError),
        (AmountOutOfRangeError, AmountError),
        (AmountError, ValueError),
        (QrRenderError, GenerationError),
        (ImageEncodeError, GenerationError),
        (InvalidEpcCodeError, EpcQrError),
        (AmountError, EpcQrError),
        (GenerationError, EpcQrError),
    ],
)
def test_hierarchy(exc_type: type, parent: type) -> None:
    assert issubclass(exc_type, parent)


def test_str_with_context() -> None:
    err = EpcQrError("Generation failed", context={"step": "render"})
    assert str(err) == "EpcQrError: Generation failed (step=render)"
    assert err.message == "Generation failed"
    assert "context={'step': 'render'}" in repr(err)


def test_str_without_context() -> None:
    assert str(GenerationError("boom")) == "GenerationError: boom"


def test_invalid_field_length_carries_violations() -> None:
    violations = FieldViolations(invalid_name=True, invalid_info=True)
    err = InvalidFieldLengthError(violations)
    assert err.violations is violations
    assert err.context == {"fields": "invalid_name, invalid_info"}


def test_payload_too_large_attributes() -> None:
    err = PayloadTooLargeError(400, 331)
    assert (err.size, err.limit) == (400, 331)
    assert "331 bytes" in str(err)


def test_unsupported_character_set_names_it() -> None:
    err = UnsupportedCharacterSetError(CharacterSet.ISO8859_7)
    assert err.character_set is CharacterSet.ISO8859_7
    assert "ISO8859_7" in str(err)


def test_amount_out_of_range_message() -> None:
    err = AmountOutOfRangeError(0, 0)
    assert err.message == "The amount must be between 0.01 and 999999999.99, but was 0.00"


def test_amount_out_of_range_with_text_is_shortened() -> None:
    err = AmountOutOfRangeError(amount_text="9" * 40 + ".00")
    assert err.euro is None and err.cent is None
    assert str(err).endswith("but was " + "9" * 20 + "...")
