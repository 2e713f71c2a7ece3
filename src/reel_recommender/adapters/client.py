import logging
from typing import Any, Dict, Optional

import certifi  # Provides Mozilla's CA bundle for SSL certificate verification
import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from reel_recommender.settings import get_settings

logger = logging.getLogger(__name__)


def _ssl_verify() -> Any:
    cfg = get_settings()
    if cfg.verify_ssl is False:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        return False
    return certifi.where()


class APIClient:
    def __init__(self,
                base_url: str,
                headers: Optional[Dict[str, str]] = None,
                default_params: Optional[Dict[str, Any]] = None,
                timeout: Optional[float] = None,
                pool_maxsize: int = 20):
        """
        Initializes a requests.Session for one upstream with:
            - default headers (auth, JSON accept header)
            - default query params sent with every request (e.g. api keys)
            - HTTPAdapter with retries disabled: upstream failures surface immediately
            - a pool large enough for the concurrent per-candidate lookups
        """
        cfg = get_settings()
        self.base_url = str(base_url).rstrip("/")
        self.default_params = dict(default_params or {})
        self.timeout = timeout if timeout is not None else cfg.upstream_timeout_seconds
        self.verify = _ssl_verify()

        self.session = requests.Session()
        adapter = HTTPAdapter(
            max_retries=Retry(total=0, raise_on_status=False),
            pool_connections=pool_maxsize,
            pool_maxsize=pool_maxsize,
        )
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        self.session.headers.update({"Accept": "application/json"})
        if headers:
            self.session.headers.update(headers)

    def _handle_response(self, resp: requests.Response) -> Any:
        """
            Handle API response with proper error checking and JSON parsing.

            Args:
                resp: HTTP response object

            Returns:
                Parsed JSON data

            Raises:
                requests.HTTPError: For 4xx/5xx HTTP status codes
                ValueError: If response is not valid JSON
            """
        try:
            resp.raise_for_status()

            if not resp.content:
                logger.warning(f"Empty response received for {resp.url}")
                return {}

            return resp.json()

        except requests.HTTPError:
            logger.error(f"HTTP {resp.status_code} error for {resp.url}: {resp.text[:200]}")
            raise

        except ValueError as e:
            logger.error(f"Invalid JSON response from {resp.url}: {resp.text[:200]}...")
            raise ValueError(f"Invalid JSON response: {e}")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _params(self, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = dict(self.default_params)
        if params:
            merged.update(params)
        return merged

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Perform a GET request against the upstream, returning parsed JSON."""
        resp = self.session.get(self._url(path), params=self._params(params),
                                timeout=self.timeout, verify=self.verify)
        return self._handle_response(resp)

    def post(self, path: str, payload: Dict[str, Any], params: Optional[Dict[str, Any]] = None) -> Any:
        """Perform a POST request with a JSON body, returning parsed JSON."""
        resp = self.session.post(self._url(path), json=payload, params=self._params(params),
                                 timeout=self.timeout, verify=self.verify)
        return self._handle_response(resp)

    def close(self) -> None:
        self.session.close()
