from __future__ import annotations

from typing import Any, Optional

import requests

from deflate.config import API_URL, ClientSettings
from deflate.credentials import DeflateCredentials
from deflate.errors import AuthenticationError, ConfigurationError
from deflate.logger import DeflateLogger, get_logger
from deflate.webhook import Body, callback_response

__all__ = ["API_URL", "SDK_VERSION", "USER_AGENT", "DeflateCredentials", "DeflateClient"]

SDK_VERSION = "1.0.0"
USER_AGENT = f"Deflate SDK - Version {SDK_VERSION}"


def _succeeded(response: Any) -> bool:
    return isinstance(response, dict) and bool(response.get("success"))


class DeflateClient:
    """
    Client for the Deflate image compression API.

    Every call is a single JSON POST to ``{base_url}{action}`` carrying the
    credentials under ``auth``. Failed calls return None instead of raising;
    the only exceptions are ConfigurationError for bad arguments and
    AuthenticationError from the constructor.

    Rules:
    - Do not log secrets or request bodies
    - No retries; failures surface immediately
    """

    def __init__(
        self,
        creds: DeflateCredentials,
        settings: Optional[ClientSettings] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[DeflateLogger] = None,
    ) -> None:
        self._creds = creds
        self._settings = settings or ClientSettings()
        self._log = logger or get_logger()
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

        # The account lookup doubles as the credential check
        self.account_info = self.account()
        if not self.account_info:
            self.close()
            raise AuthenticationError("Unable to connect to Deflate API using provided credentials.")

    @classmethod
    def connect(cls, api_key: str, api_secret: str, **kwargs: Any) -> "DeflateClient":
        return cls(DeflateCredentials(api_key=api_key, api_secret=api_secret), **kwargs)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "DeflateClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, action: str, data: Optional[dict[str, Any]] = None) -> Optional[Any]:
        """POST ``data`` plus credentials to ``action`` and return the decoded JSON, or None."""
        if data and "auth" in data:
            raise ConfigurationError("'auth' is reserved for credentials and cannot be sent as request data")

        body: dict[str, Any] = {"auth": self._creds.as_auth()}
        if data:
            body.update(data)

        url = self._settings.url_for(action)
        self._log.request(action, url)
        try:
            resp = self._session.post(
                url,
                json=body,
                headers={"User-Agent": USER_AGENT},
                timeout=self._settings.timeout,
                verify=self._settings.verify,
            )
        except requests.RequestException as e:
            self._log.transport_failure(action, e)
            return None

        # The status code is not inspected; error responses still carry a JSON body
        try:
            payload = resp.json()
        except ValueError as e:
            self._log.transport_failure(action, e)
            return None

        self._log.response(action, resp.status_code, _succeeded(payload))
        return payload

    def account(self) -> Optional[Any]:
        response = self._request("account")
        if _succeeded(response):
            return response.get("account")
        self._log.rejected("account", "account lookup did not succeed")
        return None

    @staticmethod
    def _job(wait: bool, callback: Optional[str], custom: Any) -> dict[str, Any]:
        if not wait and not callback:
            raise ConfigurationError("A callback must be defined when not waiting for the result.")
        job: dict[str, Any] = {}
        if callback:
            job["callback"] = callback
        if custom:
            job["custom"] = custom
        return job

    def compress(
        self,
        image: str,
        image_type: str,
        image_id: Any = None,
        wait: bool = True,
        callback: Optional[str] = None,
        custom: Any = None,
    ) -> Optional[dict[str, Any]]:
        """Compress one image.

        ``image`` is whatever the API accepts for a single image (a URL or an
        encoded payload). With ``wait=False`` the result is delivered to
        ``callback`` and the response only acknowledges the job.
        """
        extra = self._job(wait, callback, custom)
        request: dict[str, Any] = {"image": image, "type": image_type, "wait": wait}
        if image_id is not None:
            request["id"] = image_id
        request.update(extra)

        response = self._request("deflate", request)
        if _succeeded(response):
            return response
        self._log.rejected("deflate", "compression request did not succeed")
        return None

    def compress_multiple(
        self,
        images: list[Any],
        image_type: str,
        wait: bool = True,
        callback: Optional[str] = None,
        custom: Any = None,
    ) -> Optional[dict[str, Any]]:
        extra = self._job(wait, callback, custom)
        request: dict[str, Any] = {"images": list(images), "type": image_type, "wait": wait}
        request.update(extra)

        response = self._request("deflate", request)
        if _succeeded(response):
            return response
        self._log.rejected("deflate", "batch compression request did not succeed")
        return None

    def limit(self) -> Optional[Any]:
        """Maximum number of images accepted by one compress_multiple call."""
        response = self._request("limit")
        # Judged on the limit field itself, not on the success flag
        if isinstance(response, dict) and response.get("limit"):
            return response["limit"]
        return None

    def supported(self, kind: Optional[str] = None) -> Optional[Any]:
        """Supported formats: ``"extensions"``, ``"mime"`` types, or the whole response."""
        response = self._request("supported")
        if not _succeeded(response):
            return None
        if kind == "extensions":
            return response.get("extensions")
        if kind == "mime":
            return response.get("types")
        return response

    def callback_response(self, body: Body) -> Optional[Any]:
        return callback_response(body)
