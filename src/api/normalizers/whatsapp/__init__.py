"""Normalizer WhatsApp: payload do webhook -> NormalizedMessage.

Tipos com campos extraídos: text, interactive (button_reply, list_reply),
button, image, video, audio, document, sticker. Demais tipos passam
adiante apenas com `type` preenchido.
"""

from .extractor import normalize_message, normalize_payload

__all__ = [
    "normalize_message",
    "normalize_payload",
]
