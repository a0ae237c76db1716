"""
Wire envelope: globalInfo + data (+ returnStateInfo on responses).

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExtendField(WireModel):
    response_date_format: Optional[str] = None
    response_time_format: Optional[str] = None
    reference_no: Optional[str] = None
    operator_name: Optional[str] = None


class GlobalInfo(WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    interface_code: str
    tin: Optional[str] = None
    device_no: Optional[str] = None
    request_time: Optional[str] = None
    data_exchange_id: Optional[str] = None
    app_id: str = "AP04"
    version: str = "1.1.20191201"
    request_code: str = "TP"
    response_code: str = "TA"
    user_name: Optional[str] = None
    device_mac: Optional[str] = Field(default=None, alias="deviceMAC")
    brn: Optional[str] = None
    taxpayer_id: Optional[str] = Field(default=None, alias="taxpayerID")
    longitude: Optional[str] = None
    latitude: Optional[str] = None
    agent_type: Optional[str] = None
    extend_field: Optional[ExtendField] = None


class DataDescription(WireModel):
    code_type: str = "0"     # "1" = channel encrypted
    encrypt_code: str = "1"  # "1" = signature only, "2" = session key
    zip_code: str = "0"


class DataBlock(WireModel):
    content: str = ""
    signature: Optional[str] = None
    data_description: DataDescription = Field(default_factory=DataDescription)

    @field_validator("content", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ReturnStateInfo(WireModel):
    return_code: str = ""
    return_message: Optional[str] = None


class Envelope(WireModel):
    global_info: GlobalInfo
    data: DataBlock
    return_state_info: Optional[ReturnStateInfo] = None
