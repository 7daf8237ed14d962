"""Request body encoding."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from servicekit.constants import JSON_CONTENT_TYPE
from servicekit.errors import BodyEncodingError


@runtime_checkable
class BodyEncoder(Protocol):
    """Protocol for payload encoders.

    An encoder turns a payload into transmittable bytes and names the
    content type of what it produced.
    """

    content_type: str

    def encode(self, payload: Any) -> bytes:
        """Encode a payload.

        Args:
            payload: Value to encode.

        Returns:
            Encoded bytes.

        Raises:
            BodyEncodingError: If the payload cannot be encoded.
        """
        ...


class JsonEncoder:
    """Encode payloads as compact UTF-8 JSON.

    Pydantic models are dumped in JSON mode first.
    """

    content_type = JSON_CONTENT_TYPE

    def encode(self, payload: Any) -> bytes:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        try:
            text = json.dumps(payload, allow_nan=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise BodyEncodingError("json", str(e)) from e
        return text.encode("utf-8")


class BodyEncoding(str, Enum):
    """Supported body encodings."""

    JSON = "json"

    @property
    def encoder(self) -> BodyEncoder:
        """Get the encoder for this encoding."""
        return _ENCODERS[self]


_ENCODERS: dict[BodyEncoding, BodyEncoder] = {
    BodyEncoding.JSON: JsonEncoder(),
}


@dataclass(frozen=True)
class RequestBody:
    """Payload to carry in the body of a request.

    Attributes:
        data: Value to encode.
        encoding: Encoding to apply.
    """

    data: Any
    encoding: BodyEncoding = BodyEncoding.JSON

    @classmethod
    def json(cls, data: Any) -> "RequestBody":
        """Create a body which will be encoded as JSON.

        Args:
            data: Any JSON-serializable value or pydantic model.

        Returns:
            RequestBody with JSON encoding.
        """
        return cls(data, BodyEncoding.JSON)

    @property
    def content_type(self) -> str:
        """Content type produced by the body's encoder."""
        return self.encoding.encoder.content_type

    def encoded(self) -> bytes:
        """Encode the payload.

        Returns:
            Encoded body bytes.

        Raises:
            BodyEncodingError: If the payload is not encodable.
        """
        return self.encoding.encoder.encode(self.data)
