import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_MARKER = "_ai_cli_handler"


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Configuração central de logging.

    Console vai para stderr, para não misturar com a resposta impressa
    no stdout. Arquivo com rotação só quando log_file for informado.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Evita handlers duplicados se chamado mais de uma vez
    for handler in list(root_logger.handlers):
        if getattr(handler, HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    setattr(console_handler, HANDLER_MARKER, True)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        # Handler para arquivo com rotação (máximo 10MB por arquivo, mantém 5 backups)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        setattr(file_handler, HANDLER_MARKER, True)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging configurado. Arquivo de log: {log_file}")

    # httpx loga cada requisição em INFO; só interessa em modo verboso
    if level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
