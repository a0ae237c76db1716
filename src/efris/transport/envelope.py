"""
Envelope construction, encoding and parsing.
"""

import json
import uuid
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ValidationError

from efris.config import ClientConfig
from efris.errors import MalformedEnvelope
from efris.models.envelope import DataBlock, Envelope, ExtendField, GlobalInfo

REQUEST_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _now(time_zone: Optional[str]) -> datetime:
    if time_zone:
        return datetime.now(ZoneInfo(time_zone))
    return datetime.now().astimezone()


def build_global_info(config: ClientConfig, interface_code: str) -> GlobalInfo:
    """Routing metadata for a single request."""
    return GlobalInfo(
        interface_code=interface_code,
        tin=config.tin,
        device_no=config.device_no,
        request_time=_now(config.time_zone).strftime(REQUEST_TIME_FORMAT),
        data_exchange_id=uuid.uuid4().hex,
        app_id=config.app_id,
        version=config.version,
        user_name=config.user_name,
        device_mac=config.device_mac,
        brn=config.brn,
        taxpayer_id=config.taxpayer_id,
        longitude=config.longitude,
        latitude=config.latitude,
        agent_type="0",
        extend_field=ExtendField(
            response_date_format="dd/MM/yyyy",
            response_time_format="dd/MM/yyyy HH:mm:ss",
            operator_name=config.operator_name,
        ),
    )


def build_envelope(config: ClientConfig, interface_code: str, data: DataBlock) -> Envelope:
    return Envelope(global_info=build_global_info(config, interface_code), data=data)


def encode_envelope(envelope: Envelope) -> bytes:
    """Serialize to wire JSON. Unset optional fields are omitted, never sent as null."""
    return envelope.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def decode_envelope(raw: bytes) -> Envelope:
    """Parse a response body. Raises MalformedEnvelope if globalInfo or data is missing or invalid."""
    try:
        return Envelope.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedEnvelope(f"Invalid envelope: {e.error_count()} error(s), first: {e.errors()[0]['msg']}", raw=raw)


def _model_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_content(content: Any) -> str:
    """Business payload to JSON text for the data block. Models may be nested in lists/dicts."""
    if isinstance(content, BaseModel):
        return content.model_dump_json(by_alias=True, exclude_none=True)
    return json.dumps(content, default=_model_default)
