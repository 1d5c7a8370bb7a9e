import logging
import re

from .blocks import header_or_section, markdown_section, section_block, slack_message, text_object
from .constants import (
    ATTR_CLUSTER_LOCATION,
    ATTR_CLUSTER_NAME,
    ATTR_PAYLOAD,
    EMPTY_TEXT_PLACEHOLDER,
    MARKDOWN,
    PLAIN_TEXT,
    PROJECT_ID,
    RESOURCE_TYPE_LABELS,
)
from .errors import StructureNotFoundError
from .models import EventKind, UpgradeDetails

logger = logging.getLogger(__name__)

_NODEPOOL_RE = re.compile(r"/nodePools/([^/]*)")


def extract_nodepool_name(resource: str) -> str:
    """
    Extrai o nome do node pool do path do recurso.
    Se houver mais de um segmento /nodePools/<nome>, usa sempre o último.
    """
    # segmento vazio no fim ("./nodePools/") também conta como ausente
    matches = _NODEPOOL_RE.findall(resource or "")
    if not matches or not matches[-1]:
        raise StructureNotFoundError(f"nome do node pool não encontrado no recurso {resource!r}")
    return matches[-1]


def _resource_label(resource_type):
    return RESOURCE_TYPE_LABELS.get(resource_type, resource_type or "Resource")


def build_upgrade_header(details, cluster_name):
    versions = f"is upgrading from version {details.current_version} to version {details.target_version}."
    label = _resource_label(details.resource_type)
    if details.is_control_plane:
        return f"{label} of cluster {cluster_name} {versions}"

    try:
        nodepool = extract_nodepool_name(details.resource)
    except StructureNotFoundError:
        logger.error(f"Recurso do tipo {details.resource_type!r} sem node pool no path {details.resource!r}")
        raise
    return f"{label} {nodepool} of cluster {cluster_name} {versions}"


def _gcloud_operation_command(action, project_id, operation, location):
    return f"gcloud container operations --project '{project_id}' {action} '{operation}' --region '{location}'"


def format_upgrade_event(envelope, project_id=None):
    project_id = PROJECT_ID if project_id is None else project_id
    details = UpgradeDetails.from_json(envelope.attribute(ATTR_PAYLOAD))
    cluster_name = envelope.attribute(ATTR_CLUSTER_NAME)
    location = envelope.attribute(ATTR_CLUSTER_LOCATION)

    header_text = build_upgrade_header(details, cluster_name)

    describe_cmd = _gcloud_operation_command("describe", project_id, details.operation, location)
    cancel_cmd = _gcloud_operation_command("cancel", project_id, details.operation, location)

    return slack_message([
        header_or_section(header_text),
        markdown_section(f'The operation started at "{details.operation_start_time}"'),
        markdown_section(f"To check the operation detail, please run `{describe_cmd}`"),
        markdown_section(f"To cancel the operation, please run `{cancel_cmd}`"),
    ])


def format_security_event(envelope):
    # TODO: formato dos eventos de segurança ainda não definido; publica o conteúdo bruto até existir um schema
    # Slack rejeita text objects vazios
    header_text = envelope.data.decode("utf-8", errors="replace") or EMPTY_TEXT_PLACEHOLDER
    field = text_object(envelope.attribute(ATTR_PAYLOAD) or EMPTY_TEXT_PLACEHOLDER, MARKDOWN)
    return slack_message([
        section_block(text_object(header_text, PLAIN_TEXT), fields=[field]),
    ])


def build_message(envelope, project_id=None):
    if envelope.kind is EventKind.UPGRADE:
        return format_upgrade_event(envelope, project_id)
    return format_security_event(envelope)
