"""Modelo interno de mensagem inbound normalizada."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class InteractiveReply:
    """Resposta a botão ou lista interativa.

    Attributes:
        kind: Tipo da resposta (button_reply, list_reply, button)
        id: ID do botão/item definido por quem enviou o menu
        title: Texto exibido ao usuário
    """

    kind: str
    id: str | None = None
    title: str | None = None


@dataclass(frozen=True, slots=True)
class MediaRef:
    """Referência a mídia recebida (sem download)."""

    kind: str
    id: str | None = None
    caption: str | None = None


@dataclass(frozen=True, slots=True)
class NormalizedMessage:
    """Uma unidade de mensagem do provedor, achatada.

    `from_number` e `message_id` são sempre não vazios; unidades sem eles
    são descartadas pelo normalizer.
    """

    from_number: str
    message_id: str
    type: str
    text: str | None = None
    interactive: InteractiveReply | None = None
    media: MediaRef | None = None
    timestamp: str | None = None

    def __post_init__(self) -> None:
        if not self.from_number:
            raise ValueError("from_number é obrigatório")
        if not self.message_id:
            raise ValueError("message_id é obrigatório")

    def routable_texts(self) -> list[str]:
        """Textos elegíveis para classificação, em ordem de prioridade."""
        candidates = [self.text]
        if self.interactive is not None:
            candidates.extend([self.interactive.title, self.interactive.id])
        if self.media is not None:
            candidates.append(self.media.caption)
        return [value for value in candidates if value]

    def to_dict(self) -> dict[str, Any]:
        """Serializa para o corpo JSON enviado aos destinos."""
        data = asdict(self)
        data["from"] = data.pop("from_number")
        data["messageId"] = data.pop("message_id")
        return {key: value for key, value in data.items() if value is not None}
