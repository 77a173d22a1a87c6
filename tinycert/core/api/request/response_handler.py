"""Response handler for API responses."""
import json
import typing
from typing import Any, List, Optional

from ...exceptions import DecodeError, ServerError

# A model class with ``from_dict``, ``List[model]`` or None
ResponseShape = Any


class ResponseHandler:
    """
    Turns raw HTTP responses into typed results.

    A response shape is one of:

    - a model class exposing ``from_dict`` (a JSON object is expected),
    - ``List[model]`` (a JSON array of objects is expected),
    - ``None`` (any valid JSON is accepted and discarded).
    """

    OK = 200

    @staticmethod
    def check_status(status_code: int, body: str, endpoint: Optional[str] = None) -> None:
        """Raises ServerError for any status other than 200."""
        if status_code != ResponseHandler.OK:
            raise ServerError(status_code, body, endpoint)

    @staticmethod
    def parse_json(body: str) -> Any:
        """Parses JSON response."""
        try:
            return json.loads(body)
        except (ValueError, RecursionError) as e:
            raise DecodeError(f"Invalid JSON response: {e}", body) from e

    @classmethod
    def decode(cls, body: str, shape: ResponseShape = None) -> Any:
        """
        Decodes ``body`` into ``shape``.

        Raises:
            DecodeError: On malformed JSON or a payload not fitting ``shape``
        """
        if shape is not None:
            cls.check_shape(shape)
        data = cls.parse_json(body)
        if shape is None:
            return None
        try:
            return cls.convert(data, shape)
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(
                f"Response does not match {cls.describe_shape(shape)}: {e!r}", body
            ) from e

    @classmethod
    def convert(cls, data: Any, shape: ResponseShape) -> Any:
        if typing.get_origin(shape) in (list, List):
            (item_shape,) = typing.get_args(shape)
            if data is None:
                return []
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            return [cls.convert(item, item_shape) for item in data]

        return shape.from_dict(data)

    @classmethod
    def check_shape(cls, shape: ResponseShape) -> None:
        """Raises TypeError for a shape that cannot be decoded into."""
        if typing.get_origin(shape) in (list, List):
            (item_shape,) = typing.get_args(shape)
            cls.check_shape(item_shape)
        elif not callable(getattr(shape, 'from_dict', None)):
            raise TypeError(f"unsupported response shape: {shape!r}")

    @staticmethod
    def describe_shape(shape: ResponseShape) -> str:
        if typing.get_origin(shape) in (list, List):
            (item_shape,) = typing.get_args(shape)
            return f"List[{getattr(item_shape, '__name__', item_shape)}]"
        return getattr(shape, '__name__', repr(shape))
