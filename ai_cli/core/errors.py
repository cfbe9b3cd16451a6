"""
Taxonomia de erros do ai-cli.

Cada erro é levantado onde é detectado e só vira mensagem/código de saída
na fronteira do CLI.
"""
from typing import Optional


class AiCliError(Exception):
    """
    Erro base de todas as falhas classificadas da aplicação.
    """


class MissingCredentialError(AiCliError):
    """
    Variável de ambiente da credencial ausente. Fatal, sem chamada de rede.
    """

    def __init__(self, env_var: str = "AI_API_KEY") -> None:
        self.env_var = env_var
        super().__init__(
            f"API key not set. Please export {env_var} before running."
        )


class TransportFailure(AiCliError):
    """
    A requisição não pôde ser enviada ou nenhuma resposta foi recebida
    (DNS, conexão, TLS, timeout).
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network request failed: {detail}")


class RemoteError(AiCliError):
    """
    O endpoint respondeu com status fora da faixa de sucesso.
    O corpo da resposta é guardado para diagnóstico.
    """

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"API returned error: {status} - {body}")


class MalformedResponseError(AiCliError):
    """
    O corpo da resposta não corresponde ao schema esperado.
    """

    def __init__(self, detail: str, body: Optional[str] = None) -> None:
        self.detail = detail
        self.body = body
        super().__init__(f"Failed to parse response: {detail}")
