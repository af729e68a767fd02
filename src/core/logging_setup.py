"""Configuración de loguru.

El core y los adaptadores usan `from loguru import logger` directamente; aquí
solo se decide sink, nivel y formato (lo llama la CLI al arrancar).
"""

from __future__ import annotations

import sys

import loguru
from loguru import logger


def setup_logger(level: str = "WARNING") -> None:
    logger_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<level>{message}</level>"
    )
    if level.upper() == "DEBUG":
        logger_format += " | {extra}"

    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=logger_format,
        diagnose=False,  # no volcar valores de variables (tokens) en tracebacks
    )
    logger.configure(patcher=exception_deserializer)


def exception_deserializer(record: "loguru.Record") -> None:
    """loguru no sabe serializar subclases de `Exception` con args extra.

    https://github.com/Delgan/loguru/issues/504#issuecomment-917365972
    """

    exception: loguru.RecordException | None = record["exception"]
    if exception is not None:
        fixed = Exception(str(exception.value))
        record["exception"] = exception._replace(value=fixed)
