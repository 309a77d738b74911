"""
RU: Фасад генерации EPC QR-кода: поручение -> полезная нагрузка -> QR-матрица -> изображение
EN: EPC QR generation facade: record -> payload -> QR matrix -> image

Provides:
- Typed generator configuration built from ``load_config()`` mappings
- Image, bytes and file output
- Batch generation (serial or thread pool)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from PIL import Image

from epc_qr.barcodegen.image_encoder import ImageEncoder
from epc_qr.barcodegen.qr_renderer import Matrix, QrRenderer
from epc_qr.model.enums import ErrorCorrection, ImageFormat
from epc_qr.model.payment import PaymentRecord
from epc_qr.payload.serializer import serialize

logger = logging.getLogger(__name__)

__all__ = ["EpcQrGenerator", "GeneratorConfig"]


@dataclass(frozen=True)
class GeneratorConfig:
    """Rendering settings of the generator.

    Attributes:
        image_format: Format of ``render_bytes`` when none is passed, and of
            CLI file names derived without ``-o``. ``generate_image_file``
            takes its format from the argument or the file extension.
        module_size: Pixels per QR module side.
        quiet_zone: Quiet zone width in modules.
        dark_pixel: Grey level of dark modules.
        light_pixel: Grey level of light modules.
        error_correction: QR error-correction level.
    """

    image_format: ImageFormat = ImageFormat.PNG
    module_size: int = 8
    quiet_zone: int = 4
    dark_pixel: int = 0
    light_pixel: int = 255
    error_correction: ErrorCorrection = ErrorCorrection.M

    def __post_init__(self) -> None:
        if self.module_size <= 0:
            raise ValueError(f"module_size must be positive, got {self.module_size}")
        if self.quiet_zone < 0:
            raise ValueError(f"quiet_zone must not be negative, got {self.quiet_zone}")
        for name in ("dark_pixel", "light_pixel"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be between 0 and 255, got {value}")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "GeneratorConfig":
        """Build from a ``load_config()`` dictionary; unknown keys are ignored."""
        defaults = cls()
        try:
            return cls(
                image_format=ImageFormat.parse(config.get("image_format", defaults.image_format)),
                module_size=int(config.get("module_size", defaults.module_size)),
                quiet_zone=int(config.get("quiet_zone", defaults.quiet_zone)),
                dark_pixel=int(config.get("dark_pixel", defaults.dark_pixel)),
                light_pixel=int(config.get("light_pixel", defaults.light_pixel)),
                error_correction=ErrorCorrection.parse(
                    config.get("error_correction", defaults.error_correction)
                ),
            )
        except (TypeError, ValueError) as e:
            logger.error("Invalid generator configuration: %s", e)
            raise ValueError(f"Invalid generator configuration: {e}") from e


class EpcQrGenerator:
    """Turns payment records into EPC QR images.

    Args:
        config: Rendering settings, defaults when omitted.

    Examples:
        >>> gen = EpcQrGenerator()
        >>> record = PaymentRecord.new("Jane Doe", "DE02120300000000202051")
        >>> gen.generate_image_file(record, Path("jane.png"))
        PosixPath('jane.png')
    """

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        self.renderer = QrRenderer(
            error_correction=self.config.error_correction,
            border=self.config.quiet_zone,
        )
        self.encoder = ImageEncoder(
            module_size=self.config.module_size,
            dark_pixel=self.config.dark_pixel,
            light_pixel=self.config.light_pixel,
        )

    def payload(self, record: PaymentRecord) -> bytes:
        return serialize(record)

    def render_matrix(self, record: PaymentRecord) -> Matrix:
        return self.renderer.render_matrix(self.payload(record))

    def render_image(self, record: PaymentRecord) -> Image.Image:
        """Validate, serialize, encode and rasterize ``record``.

        Raises:
            InvalidEpcCodeError: the record cannot be serialized.
            QrRenderError: the payload does not fit a QR symbol.
            ImageEncodeError: rasterization failed.
        """
        img = self.encoder.rasterize(self.render_matrix(record))
        logger.info("EPC QR code generated: %s, %dx%d px", record, img.width, img.height)
        return img

    def render_bytes(
        self, record: PaymentRecord, image_format: Optional[ImageFormat] = None
    ) -> bytes:
        fmt = image_format or self.config.image_format
        return self.encoder.to_bytes(self.render_image(record), fmt)

    def generate_image_file(
        self,
        record: PaymentRecord,
        file_path: Union[str, Path],
        image_format: Optional[ImageFormat] = None,
    ) -> Path:
        """Write the QR image of ``record`` to ``file_path``.

        Without ``image_format`` the file extension decides the encoding,
        falling back to PNG. ``OSError`` from writing propagates unchanged.
        """
        return self.encoder.save(self.render_image(record), file_path, image_format)

    def render_many(
        self, records: Sequence[PaymentRecord], parallel: bool = False
    ) -> List[Tuple[PaymentRecord, Image.Image]]:
        """Render several records; the first failure propagates.

        Example:
            >>> EpcQrGenerator().render_many([record_a, record_b], parallel=True)
        """
        from concurrent.futures import ThreadPoolExecutor

        def gen(record: PaymentRecord) -> Tuple[PaymentRecord, Image.Image]:
            return record, self.render_image(record)

        if parallel:
            with ThreadPoolExecutor() as pool:
                result = list(pool.map(gen, records))
        else:
            result = [gen(r) for r in records]
        logger.info("Batch EPC QR generation complete: %d records", len(records))
        return result
