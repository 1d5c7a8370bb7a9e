"""Construtores de blocos Slack Block Kit (dicts prontos para JSON).

Referência: https://api.slack.com/reference/block-kit/blocks
"""
import logging
from typing import Any, Dict, List, Optional

from .constants import HEADER_MAX_LENGTH, MARKDOWN, PLAIN_TEXT

logger = logging.getLogger(__name__)


def text_object(text: str, text_type: str = PLAIN_TEXT) -> Dict[str, Any]:
    return {"type": text_type, "text": text}


def header_block(text: str) -> Dict[str, Any]:
    return {"type": "header", "text": text_object(text, PLAIN_TEXT)}


def section_block(text: Dict[str, Any], fields: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    block: Dict[str, Any] = {"type": "section", "text": text}
    if fields:
        block["fields"] = fields
    return block


def markdown_section(text: str) -> Dict[str, Any]:
    return section_block(text_object(text, MARKDOWN))


def header_or_section(text: str, max_length: int = HEADER_MAX_LENGTH) -> Dict[str, Any]:
    """
    Header tem limite de caracteres no Slack; acima dele usa section com plain_text.
    """
    if len(text) > max_length:
        logger.warning(f"Texto do header excede o limite de {max_length} caracteres ({len(text)}), usando section")
        return section_block(text_object(text, PLAIN_TEXT))
    return header_block(text)


def slack_message(blocks: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"blocks": list(blocks)}
