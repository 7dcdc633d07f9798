"""
Minimal client for the AllegroGraph HTTP protocol.

Only the three calls the store sink needs are implemented: the repository
size, clearing every statement, and inserting a single quad. Every request is
synchronous and is neither retried nor given a client side timeout; a failure
surfaces as a `RepositoryError`.

Repository URLs have the form
    http://<host>:<port>/repositories/<id>
or, when a catalog is given,
    http://<host>:<port>/catalogs/<catalog>/repositories/<id>
"""

import requests
from loguru import logger
from rdflib import Dataset

from converters.errors import ConfigurationError, RepositoryError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 10035
NQUADS_CONTENT_TYPE = "text/x-nquads"


def nquad_line(quad):
    """Serialize an (s, p, o, g) tuple of rdflib terms as N-Quads."""
    subject, predicate, obj, context = quad
    dataset = Dataset()
    dataset.graph(context).add((subject, predicate, obj))
    return dataset.serialize(format="nquads")


class AllegroGraphRepository:
    def __init__(
        self,
        repository,
        host=DEFAULT_HOST,
        port=DEFAULT_PORT,
        catalog=None,
        username=None,
        password=None,
        session=None,
    ):
        if not repository:
            raise ConfigurationError("A repository id is required.")
        self.repository = repository
        self.catalog = catalog
        self.server_url = f"http://{host}:{int(port)}"
        self.session = session if session is not None else requests.Session()
        if username:
            self.session.auth = (username, password or "")

    @property
    def url(self):
        if self.catalog:
            return (
                f"{self.server_url}/catalogs/{self.catalog}"
                f"/repositories/{self.repository}"
            )
        return f"{self.server_url}/repositories/{self.repository}"

    def _request(self, method, path, **kwargs):
        url = f"{self.url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RepositoryError(f"{method} {url} failed: {e}") from e
        return response

    def size(self):
        """Return the number of statements held by the repository."""
        response = self._request("GET", "/size", headers={"Accept": "text/plain"})
        try:
            return int(response.text.strip())
        except ValueError as e:
            raise RepositoryError(
                f"Unexpected size response from {self.url}: {response.text!r}"
            ) from e

    def clear(self):
        """Delete every statement in the repository."""
        self._request("DELETE", "/statements")
        logger.info(f"Cleared repository {self.url}")

    def insert(self, quad):
        """Add one (subject, predicate, object, context) quad."""
        self._request(
            "POST",
            "/statements",
            data=nquad_line(quad).encode("utf-8"),
            headers={"Content-Type": f"{NQUADS_CONTENT_TYPE}; charset=utf-8"},
        )

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
