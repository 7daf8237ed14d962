"""Operations that execute a request and decode its JSON body."""

from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from servicekit.errors import MissingEndpointError, ResponseDecodingError
from servicekit.protocols import RequestDescriptor, RequestExecutor


T = TypeVar("T")


class JsonOperation(Generic[T]):
    """Execute a request and validate its JSON body as ``output_type``.

    Attributes:
        request: Request to execute; executing without one fails with
            MissingEndpointError.
    """

    def __init__(
        self,
        request: RequestDescriptor | None = None,
        output_type: type[T] | Any = Any,
    ) -> None:
        self.request = request
        self._adapter: TypeAdapter[T] = TypeAdapter(output_type)

    async def execute(self, service: RequestExecutor) -> T:
        """Execute the request in a service.

        Args:
            service: Service to execute the request with.

        Returns:
            Decoded body.

        Raises:
            MissingEndpointError: If no request is set.
            ResponseDecodingError: If the body is not valid for output_type.
            NetworkError: If the execution itself fails.
        """
        if self.request is None:
            raise MissingEndpointError()

        response = await service.execute(self.request)
        try:
            return self._adapter.validate_json(response.body or b"")
        except ValidationError as e:
            raise ResponseDecodingError(response, str(e)) from e
