"""Conector WhatsApp - adapter de borda para a Cloud API da Meta.

Responsabilidades:
- Handshake de verificação do webhook (GET)
- Autenticação HMAC das entregas (POST)
- Parse seguro do corpo bruto
"""

from .signature import (
    compute_signature,
    constant_time_compare,
    verify_hmac_signature,
    verify_meta_signature,
)

__all__ = [
    "compute_signature",
    "constant_time_compare",
    "verify_hmac_signature",
    "verify_meta_signature",
]
