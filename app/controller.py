import logging

from flask import Flask, request

from .constants import PROJECT_ID, SLACK_WEBHOOK_URL
from .errors import NotifierError, PayloadParseError
from .formatters import build_message
from .models import Envelope
from .services import require_webhook_url, send_slack_payload

logger = logging.getLogger(__name__)


def handle_envelope(envelope, webhook_url=None, project_id=None):
    """
    Processa um envelope: valida config, monta a mensagem e envia ao Slack.
    Qualquer erro é propagado; nenhuma mensagem parcial é enviada.
    """
    # Valida antes de formatar: sem webhook nada é montado nem enviado
    webhook_url = require_webhook_url(SLACK_WEBHOOK_URL if webhook_url is None else webhook_url)
    project_id = PROJECT_ID if project_id is None else project_id

    logger.info(f"Recebendo mensagem Pub/Sub id={envelope.message_id} tipo={envelope.kind.value}")
    message = build_message(envelope, project_id)
    send_slack_payload(message, webhook_url=webhook_url)
    logger.info(f"Mensagem enviada ao Slack (id={envelope.message_id})")
    return message


def gke_event_notifier(event, context=None):
    """Entry point de Cloud Function em background (trigger Pub/Sub)."""
    try:
        envelope = Envelope.from_background_event(event, context)
        handle_envelope(envelope)
    except NotifierError as exc:
        logger.error(f"Falha ao processar evento: {exc}")
        raise


def create_app(webhook_url=None, project_id=None):
    app = Flask(__name__)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'gke-event-notifier'}, 200

    @app.route('/', methods=['POST'])
    def pubsub_push():
        body = request.get_json(silent=True)
        try:
            envelope = Envelope.from_push_request(body)
        except PayloadParseError as exc:
            # Reentrega não resolve um corpo push inválido
            logger.error(f"Requisição push inválida: {exc}")
            return f'Bad Request: {exc}', 400

        try:
            handle_envelope(envelope, webhook_url=webhook_url, project_id=project_id)
        except NotifierError as exc:
            # Status != 2xx faz o Pub/Sub reentregar a mensagem
            logger.error(f"Falha ao processar mensagem {envelope.message_id}: {exc}")
            return f'Error: {exc}', 500

        return '', 204

    return app
