"""Helpers de extração de campos por tipo de mensagem WhatsApp.

Cada função recebe o dict de uma mensagem do webhook e devolve apenas os
campos do seu tipo, ou None quando o bloco esperado não existe.
"""

from __future__ import annotations

from typing import Any

from app.domain.messages import InteractiveReply, MediaRef

MEDIA_TYPES = frozenset({"image", "video", "audio", "document", "sticker"})


def str_or_none(value: Any) -> str | None:
    """Mantém apenas strings; ids e títulos numéricos viram None."""
    return value if isinstance(value, str) else None


def extract_text_message(msg: dict[str, Any]) -> str | None:
    """Extrai corpo de mensagem de texto."""
    text_block = msg.get("text")
    if isinstance(text_block, dict):
        return str_or_none(text_block.get("body"))
    return None


def extract_media_message(msg: dict[str, Any], media_type: str) -> MediaRef | None:
    """Extrai id e legenda de mídia (image, video, audio, document, sticker)."""
    media_block = msg.get(media_type)
    if not isinstance(media_block, dict):
        return None
    return MediaRef(
        kind=media_type,
        id=str_or_none(media_block.get("id")),
        caption=str_or_none(media_block.get("caption")),
    )


def extract_interactive_message(msg: dict[str, Any]) -> InteractiveReply | None:
    """Extrai resposta de botão ou lista de mensagem interativa."""
    interactive_block = msg.get("interactive")
    if not isinstance(interactive_block, dict):
        return None
    for kind in ("button_reply", "list_reply"):
        reply = interactive_block.get(kind)
        if isinstance(reply, dict):
            return InteractiveReply(
                kind=kind,
                id=str_or_none(reply.get("id")),
                title=str_or_none(reply.get("title")),
            )
    return None


def extract_button_message(msg: dict[str, Any]) -> InteractiveReply | None:
    """Extrai quick-reply de template (tipo legado "button")."""
    button_block = msg.get("button")
    if not isinstance(button_block, dict):
        return None
    return InteractiveReply(
        kind="button",
        id=str_or_none(button_block.get("payload")),
        title=str_or_none(button_block.get("text")),
    )
