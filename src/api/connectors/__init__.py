"""Connectors por canal — adapters de borda para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Cloud API (webhook)
"""

__all__: list[str] = []
