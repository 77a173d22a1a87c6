"""
Authenticated TinyCert session.

Owns the credentials and the connection state and exposes the single
``call`` primitive every API operation goes through.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

from ..config import APIConfig
from ..request import (
    FieldCollection,
    RequestBuilder,
    RequestHandler,
    ResponseHandler,
    ResponseShape,
)
from ..request.fields import FieldValue
from .session_factory import SessionFactory
from ...exceptions import AuthenticationError, NotConnectedError, TinyCertError
from ...logging import get_logger
from ...resources.models import TokenResponse

Fields = Union[FieldCollection, Iterable[Tuple[str, FieldValue]]]


@dataclass(frozen=True)
class Unconnected:
    """No token: only ``connect`` is meaningful."""


@dataclass(frozen=True)
class Connected:
    """Holds the token returned by ``connect``."""
    token: str

    def __repr__(self) -> str:
        return 'Connected(token=***)'


SessionState = Union[Unconnected, Connected]

UNCONNECTED = Unconnected()


class Session:
    """
    TinyCert API session.

    Not safe for concurrent use: the state changes on ``connect`` and
    ``disconnect``. Use one session per thread or serialize access.

    Example:
        >>> with Session(APIConfig.from_env()) as session:
        ...     for item in session.ca.list():
        ...         print(item.name)
    """

    def __init__(self, config: Optional[APIConfig] = None, http=None):
        """
        Initialize session.

        Args:
            config: API configuration (read from the environment if not provided)
            http: HTTP session to use; a ``requests.Session`` is created
                when omitted and closed by ``close()``
        """
        self._config = config if config is not None else APIConfig.from_env()
        self._owns_http = http is None
        self._http = http if http is not None else SessionFactory.create_http_session(self._config)
        self._builder = RequestBuilder(self._config)
        self._handler = RequestHandler(self._http, self._config)
        self._state: SessionState = UNCONNECTED
        self.logger = get_logger('session')

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return isinstance(self._state, Connected)

    @property
    def token(self) -> Optional[str]:
        if isinstance(self._state, Connected):
            return self._state.token
        return None

    @property
    def ca(self):
        """CA operations bound to this session."""
        from ...resources import CAResource
        return CAResource(self)

    @property
    def certificates(self):
        """Certificate operations bound to this session."""
        from ...resources import CertificateResource
        return CertificateResource(self)

    def connect(self) -> None:
        """
        Authenticate with email and passphrase and store the token.

        Calling this while already connected is a caller error and is not
        checked.

        Raises:
            AuthenticationError: If the server rejects the credentials or
                the call fails for any other reason
        """
        fields = FieldCollection([
            ('email', self._config.email),
            ('passphrase', self._config.passphrase),
        ])
        try:
            response = self.call('connect', fields, TokenResponse)
        except TinyCertError as e:
            self.logger.warning(f"connect failed: {e}")
            raise AuthenticationError(f"Unable to connect to TinyCert: {e}") from e

        if not response.token:
            raise AuthenticationError("Unable to connect to TinyCert: empty token in response")

        self._state = Connected(response.token)
        self.logger.info("Connected to TinyCert")

    def disconnect(self) -> None:
        """Invalidate the token on the server, then locally."""
        self.call('disconnect', FieldCollection())
        self._state = UNCONNECTED
        self.logger.info("Disconnected from TinyCert")

    def require_connected(self) -> str:
        """
        Return the token, failing fast when not connected.

        Raises:
            NotConnectedError: If ``connect`` has not succeeded
        """
        if not isinstance(self._state, Connected):
            raise NotConnectedError("Session is not connected; call connect() first")
        return self._state.token

    def call(self, endpoint: str, fields: Fields = (), shape: ResponseShape = None) -> Any:
        """
        Perform one signed API call.

        When connected the token is appended to a copy of ``fields``;
        otherwise the fields are sent as given.

        Args:
            endpoint: Endpoint name relative to the server path, e.g. ``ca/new``
            fields: Request fields
            shape: Response shape to decode into (see ``ResponseHandler``)

        Returns:
            The decoded response (``None`` when ``shape`` is ``None``)

        Raises:
            TransportError: If no response was received
            ServerError: If the HTTP status is not 200
            DecodeError: If the body does not fit ``shape``
        """
        if not isinstance(fields, FieldCollection):
            fields = FieldCollection(fields)

        request = self._builder.build(endpoint, fields, self.token)
        self.logger.debug(
            f"calling {endpoint} with payload: "
            f"{self._builder.describe(self._builder.prepare_fields(fields, self.token))}"
        )

        raw = self._handler.execute(request)
        if raw.status_code != ResponseHandler.OK:
            self.logger.warning(f"{endpoint} failed with status {raw.status_code}")
        ResponseHandler.check_status(raw.status_code, raw.body, endpoint)
        return ResponseHandler.decode(raw.body, shape)

    def close(self) -> None:
        """Close the HTTP session if it was created here."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> 'Session':
        try:
            self.connect()
        except TinyCertError:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            if self.is_connected:
                self.disconnect()
        finally:
            self.close()

    def __repr__(self) -> str:
        return f"Session(server_path={self._config.server_path!r}, state={self._state!r})"
