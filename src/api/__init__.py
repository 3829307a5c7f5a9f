"""API — camada de borda do gateway.

Responsabilidades:
- Receber requests do WhatsApp (webhooks)
- Validar assinaturas e payloads
- Normalizar dados para modelos internos

Subpastas:
- connectors/: handshake, assinatura e parse do webhook
- normalizers/: conversão de payloads externos → modelos internos
- routes/: endpoints HTTP (webhook, health, metrics)

NÃO PODE conter: roteamento por keyword, forwarding, orquestração de use cases.
"""
