"""Normalizers por canal: conversão de payloads externos para modelos internos."""

from .whatsapp import normalize_message, normalize_payload

__all__ = [
    "normalize_message",
    "normalize_payload",
]
