"""
Rubber Node — Connection Provider
=================================

A Node holds one Elasticsearch client per connection prefix and knows
which prefix is active. Facade calls ask the node for the active client
and send a Request through it.

Example:
    node = Node()
    node.connect(["http://localhost:9200"])
    node.connect(["https://archive:9200"], prefix="archive", api_key="...")

    node.prefix_switch("archive")   # subsequent calls go to the archive cluster
    node.stop()
"""

from typing import Any, Dict, List, Optional, Tuple

import structlog
from elasticsearch import Elasticsearch
from elastic_transport import ApiResponse

from .config import Settings
from .errors import NotConnectedError
from .models import Request

logger = structlog.get_logger(__name__)

DEFAULT_PREFIX = "default"

JSON_HEADERS = {"accept": "application/json", "content-type": "application/json"}
TEXT_HEADERS = {"accept": "text/plain"}


class Node:
    """
    Named Elasticsearch connections with a switchable active prefix.

    The active prefix is a plain attribute: switching it is a single
    assignment with no ordering against calls already in flight.

    Args:
        settings: Defaults for connect() and the initial prefix
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._clients: Dict[str, Elasticsearch] = {}
        self._prefix = self.settings.prefix or DEFAULT_PREFIX

    @property
    def prefix(self) -> str:
        return self._prefix

    def prefix_switch(self, key: str) -> str:
        """Make `key` the active connection prefix."""
        self._prefix = key
        return key

    def prefixes(self) -> List[str]:
        return list(self._clients)

    def connect(
        self,
        hosts: Optional[List[str]] = None,
        prefix: Optional[str] = None,
        api_key: Optional[str] = None,
        basic_auth: Optional[Tuple[str, str]] = None,
        verify_certs: Optional[bool] = None,
        request_timeout: Optional[float] = None,
    ) -> Elasticsearch:
        """
        Open a client and register it under a prefix.

        Arguments left as None fall back to the node settings. A client
        already registered under the same prefix is closed and replaced.

        Args:
            hosts: List of ES node URLs
            prefix: Connection prefix to register under, the active one by default
            api_key: API key for authentication
            basic_auth: Tuple of (username, password)
            verify_certs: Verify SSL certificates
            request_timeout: Per request timeout in seconds

        Returns:
            The new client
        """
        conn_kwargs: Dict[str, Any] = {
            "hosts": hosts or self.settings.host_list,
            "verify_certs": self.settings.verify_certs if verify_certs is None else verify_certs,
            "request_timeout": request_timeout or self.settings.request_timeout,
        }

        api_key = api_key or self.settings.api_key
        basic_auth = basic_auth or self.settings.basic_auth
        if api_key:
            conn_kwargs["api_key"] = api_key
        elif basic_auth:
            conn_kwargs["basic_auth"] = basic_auth

        prefix = prefix or self._prefix
        client = Elasticsearch(**conn_kwargs)
        previous = self._clients.get(prefix)
        self._clients[prefix] = client
        if previous is not None:
            previous.close()
        logger.info("connected", prefix=prefix, hosts=conn_kwargs["hosts"])
        return client

    def connection(self, prefix: Optional[str] = None) -> Elasticsearch:
        """
        Client registered under `prefix`, or under the active prefix.

        Raises:
            NotConnectedError: If nothing is registered under that prefix
        """
        key = prefix or self._prefix
        try:
            return self._clients[key]
        except KeyError:
            raise NotConnectedError(f"no connection for prefix {key!r}", prefix=key) from None

    def request(self, req: Request, prefix: Optional[str] = None) -> ApiResponse:
        """
        Send a request through the active connection.

        A HEAD answered with 404 comes back as a response; any other
        non-2xx status raises the client's ApiError subclass.
        """
        headers = TEXT_HEADERS if req.url[0] == "_cat" else JSON_HEADERS
        return self.connection(prefix).perform_request(
            req.method.upper(),
            req.path,
            headers=headers,
            body=req.body,
        )

    def stop(self, prefix: Optional[str] = None) -> None:
        """Close one connection, or all of them when no prefix is given."""
        keys = [prefix] if prefix else list(self._clients)
        for key in keys:
            client = self._clients.pop(key, None)
            if client is not None:
                client.close()
                logger.info("disconnected", prefix=key)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
