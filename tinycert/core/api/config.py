"""
API configuration module.

Provides the configuration for the TinyCert API client. Environment
defaults are resolved once, in ``APIConfig.from_env``, and the resulting
value is handed to the session explicitly.
"""
import os
from dataclasses import dataclass, field, replace
from typing import Optional, Dict, Any, Mapping, Tuple, Union

DEFAULT_SERVER_PATH = 'https://www.tinycert.org/api/v1/'

ENV_EMAIL = 'TINYCERT_EMAIL'
ENV_PASSPHRASE = 'TINYCERT_PASSWORD'
ENV_API_KEY = 'TINYCERT_APIKEY'
ENV_SERVER_PATH = 'TINYCERT_SERVER'


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Applied to both http and https traffic.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_requests_proxies(self) -> Optional[Dict[str, str]]:
        """Convert to the ``proxies`` mapping understood by requests."""
        if not self.url:
            return None

        url = self.url
        if self.username and self.password and '://' in url:
            protocol, rest = url.split('://', 1)
            url = f"{protocol}://{self.username}:{self.password}@{rest}"

        return {'http': url, 'https': url}


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Attributes:
        verify: Verify the server certificate
        ca_file: Custom CA bundle used for verification
        cert_file: Client certificate
        key_file: Client certificate key
    """
    verify: bool = True
    ca_file: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None

    def to_requests_verify(self) -> Union[bool, str]:
        if not self.verify:
            return False
        return self.ca_file or True

    def to_requests_cert(self) -> Optional[Union[str, Tuple[str, str]]]:
        if not self.cert_file:
            return None
        if self.key_file:
            return (self.cert_file, self.key_file)
        return self.cert_file


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""
    connect: float = 10.0
    read: float = 60.0

    def to_requests_timeout(self) -> Tuple[float, float]:
        return (self.connect, self.read)


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Holds the account credentials next to the transport settings. The
    credentials are opaque secrets and are masked in ``repr``.

    Example:
        >>> config = APIConfig.from_env().with_api_key("secret")
        >>> with Session(config) as session:
        ...     CA(session).list()
    """
    # Credentials
    email: str = field(default='', repr=False)
    passphrase: str = field(default='', repr=False)
    api_key: str = field(default='', repr=False)

    # Endpoint
    server_path: str = DEFAULT_SERVER_PATH

    # User agent
    user_agent: str = 'tinycert-python/1.0.0'

    # Sub-configurations
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.server_path and not self.server_path.endswith('/'):
            self.server_path += '/'

    def __repr__(self) -> str:
        def mask(value: str) -> str:
            return '***' if value else "''"

        return (
            f"APIConfig(email={mask(self.email)}, passphrase={mask(self.passphrase)}, "
            f"api_key={mask(self.api_key)}, server_path={self.server_path!r})"
        )

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> 'APIConfig':
        """
        Create configuration from ``TINYCERT_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``
            **overrides: Field values taking precedence over the environment

        Returns:
            APIConfig instance
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {
            'email': env.get(ENV_EMAIL, ''),
            'passphrase': env.get(ENV_PASSPHRASE, ''),
            'api_key': env.get(ENV_API_KEY, ''),
        }
        if env.get(ENV_SERVER_PATH):
            values['server_path'] = env[ENV_SERVER_PATH]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_email(self, email: str) -> 'APIConfig':
        return replace(self, email=email)

    def with_passphrase(self, passphrase: str) -> 'APIConfig':
        return replace(self, passphrase=passphrase)

    def with_api_key(self, api_key: str) -> 'APIConfig':
        return replace(self, api_key=api_key)

    def validate(self) -> None:
        """
        Check that all credentials are present.

        Raises:
            ValueError: Naming every missing credential
        """
        missing = [
            name for name in ('email', 'passphrase', 'api_key')
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(f"Missing TinyCert credentials: {', '.join(missing)}")

    def endpoint_url(self, endpoint: str) -> str:
        """Build the full URL for an API endpoint."""
        return f"{self.server_path}{endpoint}"

    def get_headers(self) -> Dict[str, str]:
        """Get headers sent with every request."""
        return {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

    def get_request_kwargs(self) -> Dict[str, Any]:
        """Get per-request kwargs for ``requests.Session.post``."""
        kwargs: Dict[str, Any] = {
            'timeout': self.timeout.to_requests_timeout(),
            'verify': self.ssl.to_requests_verify(),
        }
        cert = self.ssl.to_requests_cert()
        if cert:
            kwargs['cert'] = cert
        if self.proxy:
            proxies = self.proxy.to_requests_proxies()
            if proxies:
                kwargs['proxies'] = proxies
        return kwargs
