"""
Decode strategies for response content.

The caller picks one of a closed set: untyped JSON, raw string, or a pydantic
shape (a model class or a container of models such as ``list[Model]``).
"""

import json
import logging
from typing import Any, Union

from pydantic import TypeAdapter, ValidationError

from efris.errors import DecodeFailed

logger = logging.getLogger("efris.decoding")


class JsonDecoder:
    """Untyped JSON: dicts, lists and scalars."""

    def decode(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.debug("Undecodable JSON content: %r", text[:500])
            raise DecodeFailed(f"Content is not valid JSON: {e}", raw=text)

    def __repr__(self) -> str:
        return "JSON"


class StringDecoder:
    """Content is returned as-is."""

    def decode(self, text: str) -> str:
        return text

    def __repr__(self) -> str:
        return "STRING"


class ShapeDecoder:
    def __init__(self, shape: Any):
        self.shape = shape
        self._adapter = TypeAdapter(shape)

    def decode(self, text: str) -> Any:
        try:
            return self._adapter.validate_json(text)
        except ValidationError as e:
            logger.debug("Content did not match %r: %r", self.shape, text[:500])
            raise DecodeFailed(f"Content does not match {self.shape!r}: {e.error_count()} error(s)", raw=text)

    def __repr__(self) -> str:
        return f"as_model({self.shape!r})"


Decoder = Union[JsonDecoder, StringDecoder, ShapeDecoder]

JSON = JsonDecoder()
STRING = StringDecoder()


def as_model(shape: Any) -> ShapeDecoder:
    return ShapeDecoder(shape)
