"""Pacote do notificador de eventos GKE (Pub/Sub -> Slack).

Este pacote contém:
- constants: variáveis de ambiente e constantes de formatação
- errors: erros fatais da invocação
- models: envelope Pub/Sub, classificação do evento e detalhes de upgrade
- blocks: construtores de blocos Slack Block Kit
- formatters: formatação das mensagens de upgrade e segurança
- services: integração com serviços externos (Slack)
- controller: criação do Flask app, endpoint push e entry point em background
"""
