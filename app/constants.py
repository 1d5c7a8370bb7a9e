import os

# Configurações globais de ambiente
SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK")
PROJECT_ID = os.getenv("PROJECT_ID", "")
# Cloud Run injeta PORT; APP_PORT fica como alternativa para execução local
APP_PORT = int(os.getenv("PORT", os.getenv("APP_PORT", "8080")))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
SLACK_TIMEOUT_SECONDS = int(os.getenv("SLACK_TIMEOUT_SECONDS", "10"))

# Atributos da mensagem Pub/Sub publicados pelo GKE
ATTR_TYPE_URL = "type_url"
ATTR_PAYLOAD = "payload"
ATTR_CLUSTER_NAME = "cluster_name"
ATTR_CLUSTER_LOCATION = "cluster_location"

# Nome da mensagem protobuf de upgrade (ex: type.googleapis.com/google.container.v1beta1.UpgradeEvent)
UPGRADE_EVENT_MESSAGE = "UpgradeEvent"
CONTROL_PLANE_RESOURCE_TYPE = "MASTER"

RESOURCE_TYPE_LABELS = {
    "MASTER": "Control plane",
    "NODE_POOL": "Node pool",
}

# Block Kit
# https://api.slack.com/reference/block-kit/blocks#header (limite de 150 caracteres)
HEADER_MAX_LENGTH = 150
PLAIN_TEXT = "plain_text"
EMPTY_TEXT_PLACEHOLDER = "(empty)"
MARKDOWN = "mrkdwn"
