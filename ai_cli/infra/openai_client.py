import logging
import time
from typing import Optional, Sequence

import httpx
from openai import OpenAI, APIConnectionError, APIStatusError, APITimeoutError
from pydantic import ValidationError

from ..core.errors import MalformedResponseError, RemoteError, TransportFailure
from ..core.models import Message, RequestParameters
from ..config import AppConfig
from .schemas import ChatCompletionRequest, ChatCompletionResponse, ChatMessagePayload

logger = logging.getLogger(__name__)


class LanguageModelClient:
    """
    Encapsula a chamada ao endpoint de chat completions.

    Uma chamada de complete() corresponde a exatamente uma requisição HTTP:
    o SDK é criado com max_retries=0 e não há retry aqui.
    """

    def __init__(self, config: AppConfig, http_client: Optional[httpx.Client] = None) -> None:
        self._config = config
        client_kwargs = {
            "api_key": config.api_key,
            "base_url": config.api_base_url,
            "max_retries": 0,
        }
        if config.request_timeout_seconds is not None:
            client_kwargs["timeout"] = config.request_timeout_seconds
        if http_client is not None:
            client_kwargs["http_client"] = http_client
        self._client = OpenAI(**client_kwargs)

    def build_payload(self, messages: Sequence[Message], params: RequestParameters) -> ChatCompletionRequest:
        """
        Constrói o corpo da requisição no formato esperado pela API.
        """
        return ChatCompletionRequest(
            model=params.model,
            messages=[ChatMessagePayload(role=m.role.value, content=m.content) for m in messages],
            max_tokens=params.max_tokens,
            temperature=params.temperature,
        )

    def complete(self, messages: Sequence[Message], params: RequestParameters) -> Optional[str]:
        """
        Envia o transcript completo e retorna o texto da primeira escolha.

        Returns:
            Texto da resposta sem espaços nas pontas, ou None quando a
            resposta veio sem nenhuma escolha. Conteúdo só com espaços também
            vira None, de propósito: uma Message nunca pode ser vazia.

        Raises:
            ValueError: Se messages estiver vazio
            TransportFailure: Falha de rede/timeout antes de haver resposta
            RemoteError: Status HTTP fora da faixa de sucesso
            MalformedResponseError: Corpo fora do schema esperado
        """
        if not messages:
            raise ValueError("messages must not be empty.")

        payload = self.build_payload(messages, params)
        logger.debug(
            f"Chamando API de chat: model={params.model}, "
            f"num_messages={len(payload.messages)}, max_tokens={params.max_tokens}"
        )

        start_time = time.time()
        try:
            raw = self._client.chat.completions.with_raw_response.create(**payload.model_dump())
        except APITimeoutError as e:
            logger.warning(f"Timeout ao chamar API de chat: model={params.model}")
            raise TransportFailure(f"request timed out ({e})") from e
        except APIConnectionError as e:
            logger.warning(f"Erro de rede ao chamar API de chat: model={params.model}, error={e}")
            raise TransportFailure(str(e.__cause__ or e)) from e
        except APIStatusError as e:
            body = e.response.text
            logger.warning(
                f"API de chat retornou erro: model={params.model}, status={e.status_code}"
            )
            raise RemoteError(e.status_code, body) from e
        duration_ms = (time.time() - start_time) * 1000

        body = raw.http_response.text
        try:
            completion = ChatCompletionResponse.model_validate_json(body)
        except ValidationError as e:
            logger.warning(f"Resposta fora do schema esperado: model={params.model}, errors={e.error_count()}")
            raise MalformedResponseError(str(e), body=body) from e

        if not completion.choices:
            logger.info(f"API de chat respondeu sem escolhas: model={params.model}, duration_ms={duration_ms:.2f}")
            return None

        reply_text = completion.choices[0].message.content.strip()
        if not reply_text:
            logger.info(f"API de chat respondeu com conteúdo vazio: model={params.model}")
            return None
        logger.info(
            f"Chamada à API de chat bem-sucedida: model={params.model}, "
            f"reply_length={len(reply_text)}, duration_ms={duration_ms:.2f}"
        )
        return reply_text
