"""App — coração do gateway: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: pipeline normalize -> route -> forward
- services/: roteamento por keyword, forwarder HTTP e health probes
- runtime/: worker de ingestão e métricas do processo
- infra/: implementações concretas de estado (rate limit)
- protocols/: contratos/interfaces
- domain/: mensagem normalizada e decisão de rota
- observability/: correlation_id e métricas em log

Padrão: app executa; api adapta; config configura; utils apoia.
"""
