"""Session factory using Factory Pattern."""
import requests
from requests.adapters import HTTPAdapter

from ..config import APIConfig


class SessionFactory:
    """Factory for creating HTTP sessions."""

    @staticmethod
    def create_http_session(config: APIConfig) -> requests.Session:
        """Creates a synchronous HTTP session without transport retries."""
        session = requests.Session()
        session.headers.update(config.get_headers())
        adapter = HTTPAdapter(max_retries=0)
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        return session
