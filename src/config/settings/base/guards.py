"""Guardas para valores de configuração obrigatórios."""

from __future__ import annotations

import re

_PLACEHOLDER_PATTERNS = (
    re.compile(r"^CHANGEME", re.IGNORECASE),
    re.compile(r"^TODO", re.IGNORECASE),
    re.compile(r"^REPLACE", re.IGNORECASE),
    re.compile(r"^PLACEHOLDER", re.IGNORECASE),
    re.compile(r"^YOUR_", re.IGNORECASE),
)


def is_placeholder_value(value: str | None) -> bool:
    """Retorna True se o valor está vazio ou parece um placeholder."""
    if not value or not value.strip():
        return True
    return any(pattern.match(value.strip()) for pattern in _PLACEHOLDER_PATTERNS)


def missing_required(values: dict[str, str | None]) -> list[str]:
    """Lista as variáveis obrigatórias ausentes ou com placeholder.

    Args:
        values: Mapa nome da variável -> valor carregado

    Returns:
        Nomes das variáveis inválidas, na ordem recebida.
    """
    return [name for name, value in values.items() if is_placeholder_value(value)]
