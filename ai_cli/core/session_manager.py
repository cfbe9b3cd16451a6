import logging
from dataclasses import dataclass, field
from typing import Optional

from .models import RequestParameters, Role, Transcript
from ..infra.openai_client import LanguageModelClient

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def is_exit_command(user_text: str) -> bool:
    """
    Verdadeiro quando a entrada é o comando literal "exit" (qualquer caixa).
    """
    return user_text.strip().lower() == EXIT_COMMAND


@dataclass
class ConversationSession:
    """
    Estado de uma conversa: o transcript e os parâmetros fixos da sessão.

    Cada advance() acrescenta a mensagem do usuário, reenvia o transcript
    inteiro ao modelo e, havendo resposta, acrescenta a do assistente.
    O transcript vive só em memória e morre com a sessão.
    """
    client: LanguageModelClient
    params: RequestParameters
    transcript: Transcript = field(default_factory=Transcript)
    history_warn_messages: int = 50
    _growth_warned: bool = field(default=False, init=False, repr=False)

    @property
    def turns(self) -> int:
        return sum(1 for m in self.transcript if m.role == Role.USER)

    def advance(self, user_text: str) -> Optional[str]:
        """
        Executa um turno da conversa.

        Args:
            user_text: Texto do usuário (não vazio)

        Returns:
            Resposta do assistente, ou None se o modelo não respondeu nada.
            Nesse caso nenhuma mensagem do assistente é acrescentada.

        Raises:
            ValueError: Se user_text estiver vazio (nada é acrescentado)
            AiCliError: Erros do cliente propagam sem alteração; a mensagem
                do usuário permanece no transcript.
        """
        # 1. Acrescentar a mensagem do usuário (não é desfeita em caso de falha)
        self.transcript.append_user(user_text)
        self._warn_on_growth()

        # 2. Enviar o transcript completo, não só a última mensagem
        logger.debug(
            f"Enviando turno: turns={self.turns}, "
            f"transcript_size={len(self.transcript)}, model={self.params.model}"
        )
        reply = self.client.complete(self.transcript.messages, self.params)

        # 3. Registrar a resposta do assistente, se houver
        if reply is None:
            logger.debug(f"Turno sem resposta do modelo: transcript_size={len(self.transcript)}")
            return None
        self.transcript.append_assistant(reply)
        return reply

    def _warn_on_growth(self) -> None:
        # O transcript é reenviado inteiro a cada turno, sem poda
        if self._growth_warned or len(self.transcript) <= self.history_warn_messages:
            return
        self._growth_warned = True
        logger.warning(
            f"Transcript com {len(self.transcript)} mensagens; "
            f"todo o histórico continua sendo reenviado a cada turno"
        )
