"""
Header and value normalization for bilingual (Chinese/English) API tables.

All functions here are pure: they map raw header strings, type expressions and
component names onto the canonical forms used by the rest of the pipeline.
"""

import re
from typing import Dict, List


TAG_PREFIX = "a-"

# Canonical fields: name, description, type, default, required, values, since, deprecated
HEADER_MAP: Dict[str, str] = {
    # props
    "参数": "name",
    "属性": "name",
    "名称": "name",
    "property": "name",
    "prop": "name",
    "name": "name",

    "说明": "description",
    "描述": "description",
    "description": "description",

    "类型": "type",
    "type": "type",

    "默认值": "default",
    "默认": "default",
    "default": "default",
    "default value": "default",

    "必填": "required",
    "必选": "required",
    "required": "required",

    "可选值": "values",
    "可选项": "values",
    "values": "values",
    "options": "values",

    "版本": "since",
    "version": "since",
    "since": "since",

    "废弃": "deprecated",
    "deprecated": "deprecated",

    # events
    "事件名称": "name",
    "事件": "name",
    "event": "name",
    "event name": "name",

    "回调参数": "type",
    "callback": "type",
    "callback arguments": "type",

    # slots
    "插槽名": "name",
    "slot": "name",
    "slot name": "name",

    # methods
    "方法名": "name",
    "方法": "name",
    "method": "name",
    "method name": "name",
}

REQUIRED_TOKENS = frozenset(["true", "yes", "是", "必填", "必选"])

_QUOTED_LITERAL = re.compile(r"'([^']+)'|\"([^\"]+)\"")
_VALUE_DELIMITERS = re.compile(r"[,，、|]")


def normalize_header(raw: str) -> str:
    """Map a raw table header onto its canonical field name.

    Unknown headers come back lower-cased and trimmed.
    """
    lower = (raw or "").lower().strip()
    return HEADER_MAP.get(lower, lower)


def parse_enum_values(type_expr: str) -> List[str]:
    """Extract quoted literals from a union type such as ``'small' | "large"``."""
    if not type_expr:
        return []
    return [single or double for single, double in _QUOTED_LITERAL.findall(type_expr)]


def parse_required_flag(raw: str) -> bool:
    if not raw:
        return False
    return raw.lower().strip() in REQUIRED_TOKENS


def split_values(text: str) -> List[str]:
    """Split an explicit values cell on ASCII/full-width commas, 、 and pipes."""
    parts = (part.strip() for part in _VALUE_DELIMITERS.split(text or ""))
    return [part for part in parts if part]


def normalize_tag(raw: str) -> str:
    """Turn a component name into its canonical ``a-`` tag.

    The prefix is applied naively: a leading ``a`` that is not already part of
    ``a-`` is taken as the prefix letter, so ``affix`` becomes ``a-ffix``.
    """
    lower = (raw or "").lower().strip()
    if lower.startswith(TAG_PREFIX):
        return lower
    if lower.startswith(TAG_PREFIX[0]):
        lower = lower[1:]
    return TAG_PREFIX + lower
