"""
barcodegen

Делегированные этапы генерации: QR-матрица (qrcode) и растровое изображение (Pillow).

Public API:
    - QrRenderer: кодирование полезной нагрузки в матрицу модулей (class)
    - ImageEncoder: растеризация матрицы и запись PNG/JPEG/QOI (class)
    - Matrix: тип матрицы модулей (List[List[bool]])

Примеры:
    >>> from epc_qr.barcodegen import ImageEncoder, QrRenderer
    >>> matrix = QrRenderer().render_matrix(b"BCD\\n002\\n1\\nSCT\\n\\nJane Doe\\nDE02120300000000202051")
    >>> ImageEncoder(module_size=4).save(ImageEncoder(module_size=4).rasterize(matrix), "code.png")

Зависимости:
    Pillow, qrcode
"""

from epc_qr.barcodegen.image_encoder import ImageEncoder
from epc_qr.barcodegen.qr_renderer import Matrix, QrRenderer

__all__ = [
    "ImageEncoder",
    "Matrix",
    "QrRenderer",
]
