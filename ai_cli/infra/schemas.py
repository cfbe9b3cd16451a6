"""
Contrato único do endpoint de chat completions, usado por todos os comandos.
"""
from typing import List, Literal

from pydantic import BaseModel, ConfigDict


class ChatMessagePayload(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessagePayload]
    max_tokens: int
    temperature: float


class ChatChoiceMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str


class ChatChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: ChatChoiceMessage


class ChatCompletionResponse(BaseModel):
    """
    Só choices[0].message.content é consumido; o resto é ignorado.
    """
    model_config = ConfigDict(extra="ignore")

    choices: List[ChatChoice]
