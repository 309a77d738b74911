from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from epc_qr import __version__, get_logger, load_config
from epc_qr.exceptions import AmountError, EpcQrError
from epc_qr.generator import EpcQrGenerator, GeneratorConfig
from epc_qr.model.amount import Amount
from epc_qr.model.enums import ImageFormat
from epc_qr.model.payment import PaymentRecord
from epc_qr.model.remittance import Remittance
from epc_qr.payload.serializer import serialize_text

logger = get_logger(__name__)

_FILE_NAME_REPLACED = ("/", "\\", " ")


def _amount_arg(value: str) -> Amount:
    try:
        return Amount.parse(value)
    except AmountError as e:
        raise argparse.ArgumentTypeError(e.message) from e


def _image_format_arg(value: str) -> ImageFormat:
    try:
        return ImageFormat.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def derive_file_name(
    beneficiary_account: str,
    bic: Optional[str],
    remittance: Optional[Remittance],
    image_format: ImageFormat,
) -> str:
    """``epc-[<bic>-]<account>[-<remittance>]-qr-code.<ext>`` with path-unsafe characters replaced."""
    parts: List[str] = ["epc"]
    if bic is not None:
        parts.append(bic)
    parts.append(beneficiary_account)
    if remittance is not None:
        parts.append(remittance.text)
    name = "-".join(parts) + "-qr-code" + image_format.extension
    for ch in _FILE_NAME_REPLACED:
        name = name.replace(ch, "_")
    return name


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="epc-qr-code-generator",
        description="Generate EPC QR codes (GiroCode) for SEPA Credit Transfers.",
    )
    p.add_argument("beneficiary_name", help="Name of the beneficiary (max. 70 characters).")
    p.add_argument("beneficiary_account", help="IBAN of the beneficiary; spaces are removed.")
    p.add_argument("-b", "--bic", help="BIC of the beneficiary bank (8 or 11 characters).")
    p.add_argument("-a", "--amount", type=_amount_arg, help="Amount in Euro, e.g. 12.50.")
    p.add_argument("-p", "--purpose", help="Purpose code (max. 4 characters).")
    p.add_argument(
        "-r",
        "--reference",
        dest="remittance_reference",
        help="Structured remittance reference (max. 35 characters).",
    )
    p.add_argument(
        "-t",
        "--text",
        dest="remittance_text",
        help="Unstructured remittance text (max. 140 characters).",
    )
    p.add_argument("-i", "--info", help="Beneficiary to originator information (max. 70 characters).")
    p.add_argument(
        "--image-format",
        type=_image_format_arg,
        default=None,
        metavar="{qoi,png,jpeg}",
        help="Image format (default: from configuration, png).",
    )
    p.add_argument("-o", "--output", help="Output file; derived from the payment data if omitted.")
    p.add_argument("--config", help="JSON configuration file (default: ./epc_qr.json).")
    p.add_argument(
        "--print-only",
        action="store_true",
        help="Only print the payload text, do not write an image.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def run(args: argparse.Namespace) -> int:
    config = GeneratorConfig.from_mapping(
        load_config(Path(args.config) if args.config else None)
    )
    # None: the extension of -o decides
    image_format: Optional[ImageFormat] = args.image_format

    remittance = Remittance.from_inputs(args.remittance_reference, args.remittance_text)

    if args.output:
        output = Path(args.output)
    else:
        image_format = image_format or config.image_format
        output = Path(
            derive_file_name(args.beneficiary_account, args.bic, remittance, image_format)
        )

    record = (
        PaymentRecord.new(args.beneficiary_name, args.beneficiary_account.replace(" ", ""))
        .with_bic(args.bic)
        .with_amount(args.amount)
        .with_purpose(args.purpose)
        .with_remittance(remittance)
        .with_info(args.info)
    )

    print(serialize_text(record))

    if args.print_only:
        return 0

    EpcQrGenerator(config).generate_image_file(record, output, image_format)
    print(f"[EPC-QR] Wrote {output}", file=sys.stderr)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return run(args)
    except (EpcQrError, ValueError, OSError) as e:
        logger.debug("Generation failed", exc_info=True)
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
