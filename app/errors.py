"""Erros do notificador. Todos são fatais para a invocação corrente."""


class NotifierError(Exception):
    pass


class ConfigurationMissingError(NotifierError):
    """Configuração obrigatória ausente (ex: SLACK_WEBHOOK)."""


class PayloadParseError(NotifierError):
    """Mensagem ou atributo 'payload' malformado."""


class StructureNotFoundError(NotifierError):
    """Estrutura esperada ausente no evento (ex: segmento /nodePools/<nome>)."""


class DeliveryFailureError(NotifierError):
    """Falha ao entregar a mensagem ao webhook."""
