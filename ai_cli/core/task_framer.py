"""
Tarefas avulsas (summarize, translate): uma instrução fixa mais o texto
de entrada viram uma sessão de uma única mensagem, descartada após a troca.
"""
import logging
from typing import Optional

from .models import RequestParameters
from .session_manager import ConversationSession
from ..infra.openai_client import LanguageModelClient

logger = logging.getLogger(__name__)

SUMMARIZE_INSTRUCTION = "Summarize the following text briefly:"
DEFAULT_TARGET_LANGUAGE = "en"


def translate_instruction(target_language: str) -> str:
    return f"Translate the following text into {target_language}:"


def build_one_shot_prompt(instruction: str, input_text: str) -> str:
    return f"{instruction}\n\n{input_text}"


def run_one_shot(
    client: LanguageModelClient,
    instruction: str,
    input_text: str,
    params: RequestParameters,
) -> Optional[str]:
    """
    Executa uma tarefa avulsa e descarta a sessão.

    O prompt combinado é a única mensagem de um transcript novo;
    nenhum estado é compartilhado entre chamadas.
    """
    prompt = build_one_shot_prompt(instruction, input_text)
    session = ConversationSession(client=client, params=params)
    logger.debug(
        f"Tarefa avulsa: instruction={instruction!r}, "
        f"input_length={len(input_text)}, model={params.model}"
    )
    # advance() acrescenta o prompt ao transcript vazio: uma única mensagem
    reply = session.advance(prompt)
    return reply
