from dataclasses import dataclass, field
import os
import logging
from typing import Optional
from dotenv import load_dotenv

from .core.errors import MissingCredentialError

logger = logging.getLogger(__name__)

API_KEY_ENV = "AI_API_KEY"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_API_BASE_URL = "https://api.openai.com/v1"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _int_from_env(name: str, default: Optional[int] = None) -> Optional[int]:
    """
    Lê um inteiro do ambiente; valor não numérico vira erro que nomeia a variável.
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Variável de ambiente {name} deve ser um inteiro, recebido '{raw}'.") from None


@dataclass(frozen=True)
class AppConfig:
    """
    Configurações do ai-cli, montadas uma única vez na inicialização
    e passadas explicitamente para o cliente do modelo.

    A credencial nunca aparece no repr nem nos logs.
    """
    api_key: str = field(repr=False)
    default_model: str = DEFAULT_MODEL
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_ms: Optional[int] = None  # None = timeout padrão do SDK
    ask_max_tokens: int = 150
    one_shot_max_tokens: int = 200  # summarize/translate
    chat_max_tokens: int = 200
    temperature: float = 0.7
    history_warn_messages: int = 50  # aviso de crescimento do transcript no chat
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def load_from_env(cls) -> "AppConfig":
        """
        Carrega configuração a partir de variáveis de ambiente.
        Primeiro tenta carregar do arquivo .env, depois do ambiente do sistema.
        Levanta MissingCredentialError se a credencial faltar.
        """
        # Carrega variáveis do arquivo .env se existir
        load_dotenv()

        api_key = os.getenv(API_KEY_ENV)
        if not api_key or not api_key.strip():
            raise MissingCredentialError(API_KEY_ENV)

        default_model = os.getenv("AI_MODEL", DEFAULT_MODEL)
        api_base_url = os.getenv("AI_API_BASE_URL", DEFAULT_API_BASE_URL)

        request_timeout_ms = _int_from_env("AI_TIMEOUT_MS")
        if request_timeout_ms is not None and request_timeout_ms <= 0:
            logger.warning(f"AI_TIMEOUT_MS inválido '{request_timeout_ms}', usando timeout padrão do SDK")
            request_timeout_ms = None

        history_warn_messages = _int_from_env("AI_HISTORY_WARN_MESSAGES", 50)

        log_level = os.getenv("AI_LOG_LEVEL", "WARNING").upper()
        if log_level not in VALID_LOG_LEVELS:
            logger.warning(f"AI_LOG_LEVEL inválido '{log_level}', usando 'WARNING' como padrão")
            log_level = "WARNING"
        log_file = os.getenv("AI_LOG_FILE") or None

        return cls(
            api_key=api_key.strip(),
            default_model=default_model,
            api_base_url=api_base_url,
            request_timeout_ms=request_timeout_ms,
            history_warn_messages=history_warn_messages,
            log_level=log_level,
            log_file=log_file,
        )

    @property
    def request_timeout_seconds(self) -> Optional[float]:
        if self.request_timeout_ms is None:
            return None
        return self.request_timeout_ms / 1000.0
