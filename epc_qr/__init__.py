"""
Пакет EPC QR Code Generator
===========================

Генератор EPC QR-кодов (EPC069-12, "GiroCode") для SEPA Credit Transfer.

Этот пакет предоставляет:
    - Модель платёжного поручения (PaymentRecord, Amount, Remittance)
    - Валидацию всех полей с полным отчётом о нарушениях
    - Сериализацию в позиционный текстовый формат EPC (BCD ... )
    - Рендеринг QR-матрицы (qrcode) и запись изображения PNG/JPEG/QOI (Pillow)
    - CLI для генерации файла из командной строки

Пример базового использования:
    >>> from epc_qr import Amount, PaymentRecord, Remittance, serialize
    >>>
    >>> record = (
    ...     PaymentRecord.new("Jane Doe", "DE02120300000000202051")
    ...     .with_amount(Amount.parse("12.50"))
    ...     .with_remittance(Remittance.unstructured("Invoice 42"))
    ... )
    >>> serialize(record).decode("utf-8")
    'BCD\\n002\\n1\\nSCT\\n\\nJane Doe\\nDE02120300000000202051\\nEUR12.50\\n\\nInvoice 42'

Генерация изображения:
    >>> from epc_qr import EpcQrGenerator
    >>> EpcQrGenerator().generate_image_file(record, Path("payment.png"))

Управление конфигурацией:
    >>> import os
    >>> os.environ['EPC_QR_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from epc_qr import load_config, get_logger
    >>>
    >>> config = load_config()
    >>> print(config["module_size"])
    8

Версия: 0.1.0
Лицензия: MIT OR Apache-2.0
Python: 3.10+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "EPC QR Code Generator Developers"
__description__ = "Generator for EPC QR codes (SEPA Credit Transfer, EPC069-12)"
__license__ = "MIT OR Apache-2.0"
__python_requires__ = ">=3.10"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"EPC QR Code Generator требует Python 3.10 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

LOGGER_NAMESPACE = "epc_qr"


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная
      окружения EPC_QR_LOG_DIR
    - Форматом с временной меткой, уровнем, модулем и сообщением

    Уровень логирования задаётся переменной окружения EPC_QR_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR, CRITICAL). Функция идемпотентна.
    """
    log_level_str = os.environ.get("EPC_QR_LOG_LEVEL", "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    # Повторная инициализация не добавляет обработчиков
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    log_dir_str = os.environ.get("EPC_QR_LOG_DIR")
    if log_dir_str:
        try:
            log_dir = Path(log_dir_str)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "epc_qr.log",
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. "
                "Используется только консоль.",
                e,
            )

    package_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер для модуля в пространстве имён ``epc_qr``.

    Args:
        module_name: Обычно ``__name__``.

    Returns:
        Экземпляр logging.Logger с именем ``epc_qr.<module>``.

    Example:
        >>> get_logger("cli").name
        'epc_qr.cli'
        >>> get_logger("__main__").name
        'epc_qr.main'
    """
    if module_name == LOGGER_NAMESPACE or module_name.startswith(LOGGER_NAMESPACE + "."):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{LOGGER_NAMESPACE}.main")
    clean_name = module_name.lstrip(".")
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{clean_name}")


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

DEFAULT_CONFIG_FILE = "epc_qr.json"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "image_format": "png",
    "module_size": 8,
    "quiet_zone": 4,
    "dark_pixel": 0,
    "light_pixel": 255,
    "error_correction": "M",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию генератора из JSON-файла или вернуть значения
    по умолчанию.

    Ключи конфигурации:
        - image_format: str - Формат изображения по умолчанию (png, jpeg, qoi)
        - module_size: int - Размер модуля QR в пикселях
        - quiet_zone: int - Ширина тихой зоны в модулях
        - dark_pixel: int - Яркость тёмного модуля (0..255)
        - light_pixel: int - Яркость светлого модуля (0..255)
        - error_correction: str - Уровень коррекции ошибок (L, M, Q, H)

    Args:
        config_path: Путь к файлу. Если None, ищется ``epc_qr.json`` в
            текущем каталоге.

    Returns:
        Словарь со всеми ключами по умолчанию, переопределёнными
        пользовательскими значениями.

    Note:
        Недопустимый JSON или нечитаемый файл не являются фатальными:
        пишется предупреждение и используются значения по умолчанию.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILE)

    config = _DEFAULT_CONFIG.copy()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Файл конфигурации должен содержать JSON-объект, "
                    f"получен {type(user_config).__name__}"
                )

            config.update(user_config)

            logger.info("Конфигурация загружена из %s", config_path)
            logger.debug("Конфигурация: %s", config)

        except json.JSONDecodeError as e:
            logger.warning(
                "Не удалось разобрать %s: недопустимый JSON в строке %d, столбце %d. "
                "Используется конфигурация по умолчанию.",
                config_path,
                e.lineno,
                e.colno,
            )
        except OSError as e:
            logger.warning(
                "Не удалось прочитать %s: %s. Используется конфигурация по умолчанию.",
                config_path,
                e,
            )
        except ValueError as e:
            logger.warning(
                "Недопустимый формат конфигурации: %s. "
                "Используется конфигурация по умолчанию.",
                e,
            )
    else:
        logger.debug("Файл конфигурации %s не найден, используются значения по умолчанию", config_path)

    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить наличие библиотек рендеринга.

    Returns:
        Словарь ``{"qrcode": bool, "pillow": bool}``.
    """
    dependencies: Dict[str, bool] = {}

    try:
        import qrcode  # noqa: F401

        dependencies["qrcode"] = True
    except ImportError:
        dependencies["qrcode"] = False

    try:
        import PIL  # noqa: F401

        dependencies["pillow"] = True
    except ImportError:
        dependencies["pillow"] = False

    return dependencies


# =============================================================================
# ИНИЦИАЛИЗАЦИЯ ПАКЕТА
# =============================================================================

_setup_logging()

# Импорты размещены после утилит, чтобы логирование было настроено первым
from epc_qr.exceptions import (  # noqa: E402
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
from epc_qr.model.amount import Amount  # noqa: E402
from epc_qr.model.enums import CharacterSet, ErrorCorrection, ImageFormat, RemittanceKind  # noqa: E402
from epc_qr.model.payment import PaymentRecord  # noqa: E402
from epc_qr.model.remittance import Remittance  # noqa: E402
from epc_qr.payload.serializer import (  # noqa: E402
    MAX_PAYLOAD_BYTES,
    payload_text,
    serialize,
    serialize_text,
)
from epc_qr.payload.validation import FieldViolations, collect_violations, validate  # noqa: E402
from epc_qr.generator import EpcQrGenerator, GeneratorConfig  # noqa: E402

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "check_dependencies",
    # Модель
    "Amount",
    "CharacterSet",
    "ErrorCorrection",
    "ImageFormat",
    "PaymentRecord",
    "Remittance",
    "RemittanceKind",
    # Полезная нагрузка
    "FieldViolations",
    "collect_violations",
    "validate",
    "serialize",
    "serialize_text",
    "payload_text",
    "MAX_PAYLOAD_BYTES",
    # Генерация
    "EpcQrGenerator",
    "GeneratorConfig",
    # Исключения
    "EpcQrError",
    "InvalidEpcCodeError",
    "InvalidFieldLengthError",
    "DuplicateRemittanceError",
    "PayloadTooLargeError",
    "UnsupportedCharacterSetError",
    "AmountError",
    "AmountNoSeparatorError",
    "AmountParseError",
    "AmountOutOfRangeError",
    "GenerationError",
    "QrRenderError",
    "ImageEncodeError",
]

_logger = get_logger(__name__)
_logger.debug("EPC QR Code Generator v%s инициализирован", __version__)
