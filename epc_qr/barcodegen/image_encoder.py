"""
RU: Растеризация QR-матрицы и запись изображения PNG/JPEG/QOI (Pillow)
EN: Rasterizes a QR module matrix and writes PNG/JPEG/QOI images (Pillow)

Each module becomes a ``module_size`` x ``module_size`` block of the dark or
light grey level. The QOI output expands the grey level into identical RGB
channels with full opacity.

Requirements: Pillow (>= 11.3 for QOI writing)
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Final, Optional, Sequence, Union

from PIL import Image
from PIL.Image import Resampling

from epc_qr.exceptions import ImageEncodeError
from epc_qr.model.enums import ImageFormat

logger = logging.getLogger(__name__)

__all__ = ["ImageEncoder", "MAX_IMAGE_SIDE"]

# Ограничение размера для предотвращения исчерпания памяти
MAX_IMAGE_SIDE: Final[int] = 10000


class ImageEncoder:
    """Grey-level raster encoder for module matrices.

    Args:
        module_size: Pixels per module side.
        dark_pixel: Grey level (0..255) of dark modules.
        light_pixel: Grey level (0..255) of light modules.
    """

    def __init__(self, module_size: int = 8, dark_pixel: int = 0, light_pixel: int = 255) -> None:
        if module_size <= 0:
            raise ValueError(f"Module size must be positive, got {module_size}")
        for name, value in (("dark_pixel", dark_pixel), ("light_pixel", light_pixel)):
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be between 0 and 255, got {value}")
        self.module_size = module_size
        self.dark_pixel = dark_pixel
        self.light_pixel = light_pixel

    def rasterize(self, matrix: Sequence[Sequence[bool]]) -> Image.Image:
        """Turn the matrix into a mode "L" image.

        Raises:
            ImageEncodeError: empty or ragged matrix, or image too large.
        """
        height = len(matrix)
        width = len(matrix[0]) if height else 0
        if not width or any(len(row) != width for row in matrix):
            logger.error("Module matrix is empty or not rectangular")
            raise ImageEncodeError("Module matrix must be a non-empty rectangle")

        side_w, side_h = width * self.module_size, height * self.module_size
        if side_w > MAX_IMAGE_SIDE or side_h > MAX_IMAGE_SIDE:
            logger.error("Image of %dx%d px exceeds %d px", side_w, side_h, MAX_IMAGE_SIDE)
            raise ImageEncodeError(
                f"Image size {side_w}x{side_h} exceeds maximum {MAX_IMAGE_SIDE}px"
            )

        small = Image.new("L", (width, height), self.light_pixel)
        small.putdata(
            [self.dark_pixel if dark else self.light_pixel for row in matrix for dark in row]
        )
        if self.module_size == 1:
            return small
        return small.resize((side_w, side_h), resample=Resampling.NEAREST)

    @staticmethod
    def _prepare(image: Image.Image, image_format: ImageFormat) -> Image.Image:
        if image_format is ImageFormat.QOI:
            # серый канал копируется в R, G и B; альфа всегда 255
            return image.convert("RGB")
        return image

    def write(self, image: Image.Image, stream: BytesIO, image_format: ImageFormat) -> None:
        try:
            self._prepare(image, image_format).save(stream, format=image_format.pil_format)
        except (KeyError, ValueError) as e:
            logger.error("Pillow cannot encode %s: %r", image_format.name, e)
            raise ImageEncodeError(
                f"Image encoding failed: {e}", context={"format": image_format.name}
            ) from e

    def to_bytes(self, image: Image.Image, image_format: ImageFormat = ImageFormat.PNG) -> bytes:
        buf = BytesIO()
        self.write(image, buf, image_format)
        logger.debug("Output rendered as %s (%d bytes)", image_format.name, buf.getbuffer().nbytes)
        return buf.getvalue()

    def save(
        self,
        image: Image.Image,
        file_path: Union[str, Path],
        image_format: Optional[ImageFormat] = None,
    ) -> Path:
        """Write ``image`` to ``file_path``.

        Without an explicit format the extension decides (``.qoi``, ``.jpg``/
        ``.jpeg``), anything else is written as PNG. I/O errors propagate
        unchanged.
        """
        path = Path(file_path)
        fmt = image_format if image_format is not None else ImageFormat.from_path(path)
        data = self.to_bytes(image, fmt)
        with open(path, "wb") as fh:
            fh.write(data)
        logger.info("Image written: %s (%s, %dx%d)", path, fmt.name, image.width, image.height)
        return path
