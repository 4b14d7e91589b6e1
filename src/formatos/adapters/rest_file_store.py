from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import requests

from formatos.domain.errors import NetworkFailureError, PermissionDeniedError, StoreRejectedError
from formatos.domain.file_types import classify_name
from formatos.domain.models import FileEntry, Listing, UploadItem, UploadResult
from formatos.ports.file_store_port import FileStorePort

logger = logging.getLogger(__name__)


class RestFileStoreAdapter(FileStorePort):
    def __init__(self, base_url: str, access_token: str = "", timeout: float = 30) -> None:
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._timeout = timeout

    def list(self, path: str) -> Listing:
        response = self._request(
            "GET", "/files", context="list files", params={"path": path or ""}
        )
        payload = _json(response, context="list files")
        files = [_parse_file_entry(item) for item in payload.get("files") or []]
        folders = [str(name) for name in payload.get("folders") or []]
        return Listing(files=files, folders=folders)

    def upload(self, item: UploadItem, path: str) -> UploadResult:
        response = self._request(
            "POST",
            "/files/upload",
            context="upload file",
            files={"file": (item.name, item.content, item.content_type)},
            data={"path": path or ""},
        )
        payload = _json(response, context="upload file")
        return UploadResult(path=payload.get("path", ""), url=payload.get("url"))

    def download_url(self, path: str) -> str:
        response = self._request(
            "GET", f"/files/download-url/{_encode(path)}", context="get download URL"
        )
        url = _json(response, context="get download URL").get("url")
        if not url:
            raise StoreRejectedError("Download URL missing from response.")
        return url

    def delete_file(self, path: str) -> None:
        self._request("DELETE", f"/files/{_encode(path)}", context="delete file")

    def create_folder(self, name: str, parent_path: str) -> dict:
        response = self._request(
            "POST",
            "/files/folder",
            context="create folder",
            json={"name": name, "parentPath": parent_path or ""},
        )
        if not response.content:
            return {}
        return _json(response, context="create folder")

    def rename_folder(self, old_name: str, new_name: str, parent_path: str) -> None:
        self._request(
            "PUT",
            "/files/folder/rename",
            context="rename folder",
            json={"oldName": old_name, "newName": new_name, "parentPath": parent_path or ""},
        )

    def delete_folder(self, path: str) -> None:
        self._request("DELETE", f"/files/folder/{_encode(path)}", context="delete folder")

    def _request(self, method: str, endpoint: str, context: str, **kwargs: Any) -> requests.Response:
        url = f"{self._base_url}{endpoint}"
        logger.debug("%s %s", method, url)
        try:
            response = requests.request(
                method,
                url,
                headers=self._auth_header(),
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise NetworkFailureError(f"Could not reach the file server to {context}: {exc}") from exc
        self._raise_for_status(response, context=context)
        return response

    def _auth_header(self) -> dict[str, str]:
        if not self._access_token:
            return {}
        return {"Authorization": f"Bearer {self._access_token}"}

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code < 400:
            return
        message = _backend_message(response)
        if response.status_code in (401, 403):
            raise PermissionDeniedError(message or f"Not allowed to {context}.")
        if response.status_code == 404:
            raise StoreRejectedError(
                message or f"Resource not found while attempting to {context}.",
                status_code=response.status_code,
            )
        raise StoreRejectedError(
            message or f"File server error {response.status_code} while attempting to {context}.",
            status_code=response.status_code,
        )


def _encode(path: str) -> str:
    return quote(path, safe="")


def _json(response: requests.Response, context: str) -> dict:
    """Decode a successful response body, which must be a JSON object."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise StoreRejectedError(
            f"File server returned an unreadable response while attempting to {context}.",
            status_code=response.status_code,
        ) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise StoreRejectedError(
            f"File server returned an unexpected response while attempting to {context}.",
            status_code=response.status_code,
        )
    return payload


def _backend_message(response: requests.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


def _parse_file_entry(item: Any) -> FileEntry:
    if not isinstance(item, dict):
        raise StoreRejectedError(f"Malformed file entry in listing: {item!r}")
    name = str(item.get("nombre") or item.get("name") or "")
    return FileEntry(
        file_id=str(item.get("id") or name),
        name=name,
        size_bytes=_parse_size(item.get("tamaño", item.get("size"))),
        created_at=_parse_timestamp(item.get("createdAt")),
        mime_category=classify_name(name),
    )


def _parse_size(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug("Unparseable size value: %r", value)
        return None


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparseable createdAt value: %r", value)
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None
