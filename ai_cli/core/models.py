from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """
    Uma entrada imutável do transcript.
    O conteúdo nunca é vazio: entrada vazia do usuário não é enviada.
    """
    role: Role
    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.role, Role):
            # Aceita "user"/"assistant" vindos do formato de envio
            object.__setattr__(self, "role", Role(self.role))
        if not self.content or not self.content.strip():
            raise ValueError("Message content must not be empty.")

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Message":
        return cls(role=Role(data["role"]), content=data["content"])


class Transcript:
    """
    Log ordenado e somente-anexável das mensagens de uma conversa.

    A ordem de inserção é a ordem da conversa e é reenviada por inteiro
    a cada requisição. Não valida alternância de papéis: isso fica com
    quem chama.
    """

    def __init__(self, messages: Optional[Iterable[Message]] = None) -> None:
        self._messages: List[Message] = list(messages or [])

    @classmethod
    def single(cls, content: str) -> "Transcript":
        """
        Transcript de tarefa avulsa: exatamente uma entrada do usuário.
        """
        return cls([Message(role=Role.USER, content=content)])

    @classmethod
    def from_payload(cls, items: Iterable[Dict[str, str]]) -> "Transcript":
        return cls(Message.from_dict(item) for item in items)

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def append_user(self, content: str) -> Message:
        message = Message(role=Role.USER, content=content)
        self.append(message)
        return message

    def append_assistant(self, content: str) -> Message:
        message = Message(role=Role.ASSISTANT, content=content)
        self.append(message)
        return message

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def last(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    def to_payload(self) -> List[Dict[str, str]]:
        """
        Lista de mensagens no formato esperado pelo endpoint de chat.
        """
        return [m.to_dict() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __repr__(self) -> str:
        return f"Transcript(messages={len(self._messages)})"


@dataclass(frozen=True)
class RequestParameters:
    """
    Configuração por chamada: fixa durante uma sessão interativa,
    fixa por chamada nas tarefas avulsas.
    """
    model: str
    max_tokens: int
    temperature: float

    def __post_init__(self) -> None:
        if not self.model or not self.model.strip():
            raise ValueError("model must not be empty.")
        if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int) or self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be a positive integer, got {self.max_tokens!r}.")
        if not 0.0 <= float(self.temperature) <= 2.0:
            raise ValueError(f"temperature must be within [0, 2], got {self.temperature!r}.")

    def with_overrides(
        self,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> "RequestParameters":
        changes = {}
        if model is not None:
            changes["model"] = model
        if max_tokens is not None:
            changes["max_tokens"] = max_tokens
        if temperature is not None:
            changes["temperature"] = temperature
        return replace(self, **changes)
