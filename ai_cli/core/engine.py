import logging
from typing import Optional

from .models import RequestParameters
from .session_manager import ConversationSession
from .task_framer import (
    DEFAULT_TARGET_LANGUAGE,
    SUMMARIZE_INSTRUCTION,
    run_one_shot,
    translate_instruction,
)
from ..config import AppConfig
from ..infra.openai_client import LanguageModelClient

logger = logging.getLogger(__name__)


class AssistantEngine:
    """
    Núcleo lógico do ai-cli.

    - Monta os parâmetros de cada chamada (padrões do config + overrides)
    - Executa as tarefas avulsas (ask, summarize, translate)
    - Abre sessões de chat interativo
    """

    def __init__(self, config: AppConfig, client: Optional[LanguageModelClient] = None) -> None:
        self._config = config
        self._lm_client = client or LanguageModelClient(config)
        logger.info(
            f"AssistantEngine inicializado: default_model={config.default_model}, "
            f"api_base_url={config.api_base_url}"
        )

    def _params(
        self,
        max_tokens: int,
        model: Optional[str] = None,
        override_max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> RequestParameters:
        base = RequestParameters(
            model=self._config.default_model,
            max_tokens=max_tokens,
            temperature=self._config.temperature,
        )
        return base.with_overrides(model=model, max_tokens=override_max_tokens, temperature=temperature)

    def ask(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Optional[str]:
        """
        Pergunta única: o prompt vai como está, sem instrução.
        """
        params = self._params(self._config.ask_max_tokens, model, max_tokens, temperature)
        session = ConversationSession(client=self._lm_client, params=params)
        return session.advance(prompt)

    def run_one_shot(
        self,
        instruction: str,
        input_text: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Optional[str]:
        params = self._params(self._config.one_shot_max_tokens, model, max_tokens, temperature)
        return run_one_shot(self._lm_client, instruction, input_text, params)

    def summarize(self, text: str, model: Optional[str] = None, **overrides) -> Optional[str]:
        return self.run_one_shot(SUMMARIZE_INSTRUCTION, text, model=model, **overrides)

    def translate(
        self,
        text: str,
        to: str = DEFAULT_TARGET_LANGUAGE,
        model: Optional[str] = None,
        **overrides,
    ) -> Optional[str]:
        return self.run_one_shot(translate_instruction(to), text, model=model, **overrides)

    def start_chat(
        self,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> ConversationSession:
        """
        Abre uma sessão interativa com transcript vazio e parâmetros fixos.
        """
        params = self._params(self._config.chat_max_tokens, model, max_tokens, temperature)
        logger.debug(f"Nova sessão de chat: model={params.model}, max_tokens={params.max_tokens}")
        return ConversationSession(
            client=self._lm_client,
            params=params,
            history_warn_messages=self._config.history_warn_messages,
        )
