"""Configuração centralizada de logging da API PDF RG."""

import logging
from pathlib import Path

from pdf_rg.core.config import settings

FORMATO = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int | None = None, log_file: str | None = None) -> None:
    """Configura o logging apenas uma vez, evitando handlers duplicados."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    destino = log_file if log_file is not None else settings.LOG_FILE
    if destino:
        caminho = Path(destino)
        caminho.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(caminho, encoding="utf-8"))

    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format=FORMATO,
        handlers=handlers,
    )


__all__ = ["configure_logging"]
