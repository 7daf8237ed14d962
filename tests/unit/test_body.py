"""Unit tests for request body encoding."""

import json

import pytest
from pydantic import BaseModel

from servicekit.body import BodyEncoder, BodyEncoding, JsonEncoder, RequestBody
from servicekit.errors import BodyEncodingError, NetworkErrorClass


class _User(BaseModel):
    id: int
    name: str


class TestJsonEncoder:
    """Tests for JsonEncoder."""

    def test_round_trip(self) -> None:
        """Encoded JSON decodes to the same value."""
        data = JsonEncoder().encode({"x": 1})

        assert json.loads(data) == {"x": 1}

    def test_compact_output(self) -> None:
        """Output uses compact separators."""
        assert JsonEncoder().encode({"x": 1, "y": [1, 2]}) == b'{"x":1,"y":[1,2]}'

    def test_encodes_pydantic_model(self) -> None:
        """Pydantic models are dumped before encoding."""
        data = JsonEncoder().encode(_User(id=5, name="ana"))

        assert json.loads(data) == {"id": 5, "name": "ana"}

    def test_unserializable_raises_encoding_error(self) -> None:
        """Unserializable payloads raise a structured error."""
        with pytest.raises(BodyEncodingError) as exc_info:
            JsonEncoder().encode({"when": object()})

        assert exc_info.value.error_class == NetworkErrorClass.ENCODING
        assert exc_info.value.encoding == "json"

    def test_nan_raises_encoding_error(self) -> None:
        """NaN is not valid JSON."""
        with pytest.raises(BodyEncodingError):
            JsonEncoder().encode({"x": float("nan")})

    def test_satisfies_protocol(self) -> None:
        """JsonEncoder implements BodyEncoder."""
        assert isinstance(JsonEncoder(), BodyEncoder)


class TestRequestBody:
    """Tests for RequestBody."""

    def test_json_factory(self) -> None:
        """RequestBody.json tags the payload as JSON."""
        body = RequestBody.json({"x": 1})

        assert body.encoding == BodyEncoding.JSON
        assert body.content_type == "application/json"
        assert json.loads(body.encoded()) == {"x": 1}

    def test_encoding_error_is_raised_on_encode(self) -> None:
        """Construction succeeds; encoding reports the failure."""
        body = RequestBody.json({1, 2, 3})

        with pytest.raises(BodyEncodingError):
            body.encoded()
