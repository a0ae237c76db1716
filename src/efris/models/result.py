"""
Operation results: every call yields a Success or a Failure.

A Failure means the server answered with a non-success returnStateInfo. It is
data, not an exception: whatever content came back is kept in ``data``.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from efris.interfaces import SUCCESS_RETURN_CODE
from efris.models.envelope import ReturnStateInfo


class Success(BaseModel):
    model_config = ConfigDict(ser_json_bytes="base64")

    data: Any = None
    return_state: Optional[ReturnStateInfo] = None

    @property
    def ok(self) -> bool:
        return True


class Failure(BaseModel):
    model_config = ConfigDict(ser_json_bytes="base64")

    code: str
    message: Optional[str] = None
    data: Any = None
    return_state: Optional[ReturnStateInfo] = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success, Failure]


def build_result(return_state: Optional[ReturnStateInfo], data: Any) -> Result:
    """Attach the return state to ``data``; a missing return state counts as success."""
    if return_state is None or return_state.return_code == SUCCESS_RETURN_CODE:
        return Success(data=data, return_state=return_state)
    return Failure(
        code=return_state.return_code,
        message=return_state.return_message,
        data=data,
        return_state=return_state,
    )
