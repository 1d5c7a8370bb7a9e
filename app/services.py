import logging

import requests

from .constants import SLACK_TIMEOUT_SECONDS, SLACK_WEBHOOK_URL
from .errors import ConfigurationMissingError, DeliveryFailureError

logger = logging.getLogger(__name__)


def require_webhook_url(webhook_url):
    if not webhook_url:
        raise ConfigurationMissingError("URL do webhook do Slack ausente (SLACK_WEBHOOK)")
    return webhook_url


def send_slack_payload(message, webhook_url=None, timeout=SLACK_TIMEOUT_SECONDS):
    """
    Envia a mensagem ao webhook do Slack. Sem retry: em caso de falha o erro
    sobe para quem invocou e o Pub/Sub reentrega o evento.

    Valida a URL aqui também porque a função pode ser chamada sem passar por
    handle_envelope (que valida antes de formatar a mensagem).
    """
    url = require_webhook_url(SLACK_WEBHOOK_URL if webhook_url is None else webhook_url)

    try:
        resp = requests.post(url, json=message, timeout=timeout)
    except requests.RequestException as exc:
        raise DeliveryFailureError(f"falha ao enviar mensagem ao Slack: {exc}") from exc

    if not resp.ok:
        raise DeliveryFailureError(f"Slack respondeu {resp.status_code}: {resp.text}")

    logger.debug(f"Slack response: {resp.status_code}")
    return resp
