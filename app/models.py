import base64
import binascii
import json
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .constants import ATTR_TYPE_URL, CONTROL_PLANE_RESOURCE_TYPE, UPGRADE_EVENT_MESSAGE
from .errors import PayloadParseError


def _decode_data(raw: Optional[str]) -> bytes:
    if not raw:
        return b""
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise PayloadParseError(f"campo 'data' não é base64 válido: {exc}") from exc


def _clean_attributes(attributes: Optional[Mapping]) -> Dict[str, str]:
    if not attributes:
        return {}
    if not isinstance(attributes, Mapping):
        raise PayloadParseError(f"'attributes' deve ser um objeto, recebido {type(attributes).__name__}")
    return {str(k): "" if v is None else str(v) for k, v in attributes.items()}


@dataclass(frozen=True)
class Envelope:
    """
    Uma mensagem entregue pelo Pub/Sub: bytes brutos + atributos string.
    Imutável após o recebimento.
    """

    data: bytes = b""
    attributes: Mapping[str, str] = field(default_factory=dict)
    message_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def attribute(self, key: str) -> str:
        return self.attributes.get(key, "")

    @property
    def kind(self) -> "EventKind":
        return EventKind.from_type_url(self.attribute(ATTR_TYPE_URL))

    @classmethod
    def from_push_request(cls, body: Any) -> "Envelope":
        """
        Corpo de uma push subscription:
        {"message": {"data": "<base64>", "attributes": {...}, "messageId": "..."}, "subscription": "..."}
        """
        if not isinstance(body, dict):
            raise PayloadParseError("corpo da requisição push não é um objeto JSON")
        message = body.get("message")
        if not isinstance(message, dict):
            raise PayloadParseError("corpo da requisição push sem objeto 'message'")
        return cls(
            data=_decode_data(message.get("data")),
            attributes=_clean_attributes(message.get("attributes")),
            message_id=message.get("messageId") or message.get("message_id"),
        )

    @classmethod
    def from_background_event(cls, event: Any, context: Any = None) -> "Envelope":
        """Evento de Cloud Function em background: {"data": "<base64>", "attributes": {...}}."""
        if not isinstance(event, dict):
            raise PayloadParseError("evento em background não é um objeto")
        return cls(
            data=_decode_data(event.get("data")),
            attributes=_clean_attributes(event.get("attributes")),
            message_id=getattr(context, "event_id", None),
        )


class EventKind(Enum):
    UPGRADE = "upgrade"
    SECURITY = "security"

    @classmethod
    def from_type_url(cls, type_url: Optional[str]) -> "EventKind":
        # Qualquer tipo desconhecido cai no formatador de segurança
        tokens = re.split(r"[./]", type_url or "")
        if UPGRADE_EVENT_MESSAGE in tokens:
            return cls.UPGRADE
        return cls.SECURITY


@dataclass(frozen=True)
class UpgradeDetails:
    resource_type: str = ""
    operation: str = ""
    operation_start_time: str = ""
    current_version: str = ""
    target_version: str = ""
    resource: str = ""

    @property
    def is_control_plane(self) -> bool:
        return self.resource_type == CONTROL_PLANE_RESOURCE_TYPE

    @classmethod
    def from_json(cls, text: Optional[str]) -> "UpgradeDetails":
        try:
            data = json.loads(text or "")
        except (json.JSONDecodeError, TypeError) as exc:
            raise PayloadParseError(f"falha ao interpretar 'payload' do evento de upgrade: {exc}") from exc
        if not isinstance(data, dict):
            raise PayloadParseError(f"'payload' do evento de upgrade deve ser um objeto JSON, recebido {type(data).__name__}")

        def _get(key):
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            resource_type=_get("resourceType"),
            operation=_get("operation"),
            operation_start_time=_get("operationStartTime"),
            current_version=_get("currentVersion"),
            target_version=_get("targetVersion"),
            resource=_get("resource"),
        )
