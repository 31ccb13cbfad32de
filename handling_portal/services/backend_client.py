from dataclasses import dataclass
from urllib.parse import quote
import logging
import requests

from handling_portal.core.config import settings

log = logging.getLogger(__name__)


@dataclass
class BackendConfig:
    base_url: str          # e.g. https://<project>.example.co
    anon_key: str          # public key sent as `apikey`
    service_key: str = ""  # privileged key for storage writes
    timeout: int = 20


class BackendError(RuntimeError):
    """A failed call to the managed backend, carrying its human-readable message."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(data: dict, status_code: int) -> str:
    for key in ("error_description", "msg", "message", "error"):
        val = data.get(key) if isinstance(data, dict) else None
        if val:
            return str(val)
    return f"Backend request failed ({status_code})"


class BackendClient:
    """Identity and storage REST calls of the managed backend."""

    def __init__(self, cfg: BackendConfig):
        self.cfg = cfg
        self.base_url = cfg.base_url.rstrip("/")

    def _headers(self, access_token: str | None = None, key: str | None = None) -> dict:
        apikey = key or self.cfg.anon_key
        return {
            "apikey": apikey,
            "Authorization": f"Bearer {access_token or apikey}",
        }

    def request(self, method: str, path: str, *, json: dict | None = None, data: bytes | None = None,
                params: dict | None = None, headers: dict | None = None) -> dict:
        url = f"{self.base_url}{path}"
        try:
            r = requests.request(method=method.upper(), url=url, json=json, data=data, params=params,
                                 headers=headers or self._headers(), timeout=self.cfg.timeout)
        except requests.RequestException as e:
            log.error("backend unreachable", extra={"url": url, "error": str(e)})
            raise BackendError("Layanan sedang tidak dapat dihubungi. Silakan coba lagi.") from e
        try:
            body = r.json() if r.text else {}
        except ValueError:
            body = {"raw": r.text}
        if r.status_code >= 400:
            msg = _error_message(body, r.status_code)
            log.warning("backend error", extra={"url": url, "status": r.status_code, "error": msg})
            raise BackendError(msg, status_code=r.status_code)
        return body

    # -------------------------
    # identity
    # -------------------------
    def sign_up(self, *, email: str, password: str, metadata: dict | None = None) -> dict:
        return self.request("POST", "/auth/v1/signup", json={"email": email, "password": password, "data": metadata or {}})

    def sign_in_with_password(self, *, email: str, password: str) -> dict:
        return self.request("POST", "/auth/v1/token", params={"grant_type": "password"},
                            json={"email": email, "password": password})

    def sign_out(self, access_token: str) -> None:
        self.request("POST", "/auth/v1/logout", headers=self._headers(access_token))

    def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        self.request("POST", "/auth/v1/recover", params={"redirect_to": redirect_to}, json={"email": email})

    def update_user_password(self, access_token: str, password: str) -> dict:
        return self.request("PUT", "/auth/v1/user", json={"password": password}, headers=self._headers(access_token))

    # -------------------------
    # storage
    # -------------------------
    def upload(self, bucket: str, path: str, content: bytes, content_type: str) -> str:
        headers = self._headers(key=self.cfg.service_key or None)
        headers.update({"Content-Type": content_type or "application/octet-stream",
                        "cache-control": "3600", "x-upsert": "false"})
        self.request("POST", f"/storage/v1/object/{bucket}/{quote(path)}", data=content, headers=headers)
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"


def get_backend_client() -> BackendClient:
    return BackendClient(BackendConfig(
        base_url=settings.BACKEND_URL,
        anon_key=settings.BACKEND_ANON_KEY,
        service_key=settings.BACKEND_SERVICE_KEY,
        timeout=settings.BACKEND_TIMEOUT,
    ))


@dataclass
class UploadedDocument:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        return self.filename.rsplit(".", 1)[-1].lower() if "." in self.filename else "bin"


def store_public_document(client: BackendClient, bucket: str, path_stem: str, doc: UploadedDocument) -> str:
    """Upload to `<bucket>/<path_stem>.<ext>` and return its public URL."""
    if not doc.content:
        raise ValueError(f"{doc.filename or 'file'} is empty")
    if len(doc.content) > settings.MAX_UPLOAD_BYTES:
        raise ValueError(f"{doc.filename} exceeds {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB")
    path = f"{path_stem}.{doc.extension}"
    client.upload(bucket, path, doc.content, doc.content_type)
    return client.public_url(bucket, path)
