"""Clients for the third-party host that stores uploaded images."""

from __future__ import annotations

import abc
import hashlib
import logging
import os
import time
import uuid
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional

import httpx
from fastapi import Request

from ..errors import ConfigurationError, UpstreamError

LOGGER = logging.getLogger(__name__)

MEDIA_PROVIDER_ENV = "MEDIA_PROVIDER"


class MediaUploadError(UpstreamError):
    """Raised when the media host rejects or cannot receive a request."""


@dataclass
class UploadedMedia:
    """Metadata reported by the media host for a stored asset."""

    public_id: str
    url: str
    secure_url: str
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[int] = None
    format: Optional[str] = None


class MediaClient(abc.ABC):
    """Interface implemented by media hosts."""

    @abc.abstractmethod
    def upload(self, content: bytes, *, filename: str, folder: str) -> UploadedMedia:
        """Store ``content`` under ``folder`` and return its metadata."""

    @abc.abstractmethod
    def destroy(self, public_id: str) -> None:
        """Remove the asset identified by ``public_id``."""


class InMemoryMediaClient(MediaClient):
    """Placeholder host used when no media host is configured.

    Uploads are acknowledged with generated metadata; no payload bytes or
    deletion history are retained.
    """

    base_url = "https://media.invalid"

    def upload(self, content: bytes, *, filename: str, folder: str) -> UploadedMedia:
        extension = PurePosixPath(filename).suffix.lower().lstrip(".") or None
        public_id = f"{folder}/{uuid.uuid4().hex}"
        location = f"{self.base_url}/{public_id}"
        if extension:
            location = f"{location}.{extension}"
        return UploadedMedia(
            public_id=public_id,
            url=location.replace("https://", "http://", 1),
            secure_url=location,
            size=len(content),
            format="jpg" if extension == "jpeg" else extension,
        )

    def destroy(self, public_id: str) -> None:
        LOGGER.debug("Discarding placeholder asset %s", public_id)


def sign_parameters(params: dict[str, object], api_secret: str) -> str:
    """Return the SHA-1 signature Cloudinary expects for ``params``."""

    payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{payload}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryMediaClient(MediaClient):
    """Signed uploads and deletions against the Cloudinary REST API."""

    api_base = "https://api.cloudinary.com/v1_1"

    def __init__(
        self,
        *,
        cloud_name: str | None,
        api_key: str | None,
        api_secret: str | None,
        timeout: float = 30.0,
    ) -> None:
        if not cloud_name:
            raise ConfigurationError("CLOUDINARY_CLOUD_NAME is required for Cloudinary uploads")
        if not api_key:
            raise ConfigurationError("CLOUDINARY_API_KEY is required for Cloudinary uploads")
        if not api_secret:
            raise ConfigurationError("CLOUDINARY_API_SECRET is required for Cloudinary uploads")
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def _endpoint(self, action: str) -> str:
        return f"{self.api_base}/{self.cloud_name}/image/{action}"

    def _signed(self, params: dict[str, object]) -> dict[str, object]:
        params = {**params, "timestamp": int(time.time())}
        return {
            **params,
            "api_key": self.api_key,
            "signature": sign_parameters(params, self.api_secret),
        }

    def _post(self, action: str, data: dict[str, object], files=None) -> dict:
        try:
            response = httpx.post(
                self._endpoint(action),
                data={key: str(value) for key, value in data.items()},
                files=files,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise MediaUploadError(f"Network error contacting Cloudinary: {exc}") from exc

        if response.status_code >= 400:
            LOGGER.error("Cloudinary %s failed (%s): %s", action, response.status_code, response.text)
            raise MediaUploadError(f"Cloudinary {action} failed with status {response.status_code}")
        return response.json()

    def upload(self, content: bytes, *, filename: str, folder: str) -> UploadedMedia:
        result = self._post("upload", self._signed({"folder": folder}), files={"file": (filename, content)})
        return UploadedMedia(
            public_id=result["public_id"],
            url=result.get("url") or result["secure_url"],
            secure_url=result["secure_url"],
            width=result.get("width"),
            height=result.get("height"),
            size=result.get("bytes"),
            format=result.get("format"),
        )

    def destroy(self, public_id: str) -> None:
        result = self._post("destroy", self._signed({"public_id": public_id}))
        if result.get("result") not in {"ok", "not found"}:
            raise MediaUploadError(f"Cloudinary could not delete {public_id}: {result.get('result')}")


def build_media_client_from_env() -> MediaClient:
    provider = os.getenv(MEDIA_PROVIDER_ENV, "memory").strip().lower()
    if provider == "cloudinary":
        return CloudinaryMediaClient(
            cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
            api_key=os.getenv("CLOUDINARY_API_KEY"),
            api_secret=os.getenv("CLOUDINARY_API_SECRET"),
        )
    if provider != "memory":
        raise ConfigurationError(
            f"Unsupported {MEDIA_PROVIDER_ENV}={provider!r}; use cloudinary or memory"
        )
    LOGGER.warning("Media host not configured; uploads are acknowledged but not stored")
    return InMemoryMediaClient()


def get_media_client(request: Request) -> MediaClient:
    """Dependency returning the media client created during application startup."""
    return request.app.state.media_client
