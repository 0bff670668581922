"""HTTP client for the SmartSaver backend (auth, profile, datasets, uploads)."""

import logging
from dataclasses import dataclass

import requests

from .models import Dataset
from .profiles import PROFILES

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class Unauthorized(ApiError):
    """401 from the backend: the stored token is no longer accepted."""


class AuthError(ApiError):
    """Login / signup answered with success = false."""


@dataclass
class AuthResult:
    token: str
    name: str = ""
    email: str = ""

    def logged_in_user(self) -> dict:
        return {"name": self.name, "email": self.email}


def display_name(user: dict | None) -> str:
    user = user or {}
    username = (user.get("username") or user.get("name") or "").strip()
    if username:
        return username
    email = user.get("email") or ""
    if email:
        return email.split("@")[0]
    return "User"


class SmartSaverClient:
    def __init__(self, base_url: str, token: str | None = None,
                 session: requests.Session | None = None, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ---------------- plumbing ----------------
    def _headers(self) -> dict:
        # backend expects the bare token, no "Bearer" prefix
        return {"Authorization": self.token} if self.token else {}

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            resp = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ApiError(f"Could not reach the SmartSaver backend: {e}") from e
        if resp.status_code == 401:
            raise Unauthorized("Session expired. Please log in again.", 401)
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        if resp.status_code >= 400:
            message = (payload or {}).get("message") if isinstance(payload, dict) else None
            logger.error("%s %s -> %s %s", method, path, resp.status_code, message or "")
            raise ApiError(message or f"Request failed ({resp.status_code})", resp.status_code)
        return payload

    def _auth(self, path: str, body: dict, failure: str) -> AuthResult:
        data = self._request("POST", path, json=body)
        if not isinstance(data, dict):
            logger.error("POST %s returned a non-object body", path)
            raise AuthError(failure)
        if not data.get("success"):
            raise AuthError(data.get("message") or failure)
        result = AuthResult(token=data.get("jwtToken", ""), name=data.get("name", ""),
                            email=data.get("email", ""))
        self.token = result.token
        logger.info("Authenticated %s via %s", result.email or "user", path)
        return result

    # ---------------- auth ----------------
    def login(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            raise AuthError("Email and password are required")
        return self._auth("/auth/login", {"email": email, "password": password}, "Login failed")

    def google_login(self, credential: str) -> AuthResult:
        return self._auth("/auth/google", {"credential": credential},
                          "Google Login failed. Try again.")

    def signup(self, name: str, email: str, password: str) -> AuthResult:
        if not name or not email or not password:
            raise AuthError("All fields are required")
        return self._auth("/auth/signup", {"name": name, "email": email, "password": password},
                          "Signup failed")

    def profile(self) -> dict:
        return self._request("GET", "/dashboard/users/profile") or {}

    # ---------------- datasets ----------------
    def list_datasets(self, utility: str | None = None) -> list[Dataset]:
        """Datasets of the current user, newest first (backend order)."""
        raw = self._request("GET", "/dataset/datasets") or []
        datasets = [Dataset.from_json(d) for d in raw if isinstance(d, dict)]
        if utility:
            datasets = [d for d in datasets if d.utility == utility]
        logger.debug("Fetched %d %s datasets", len(datasets), utility or "")
        return datasets

    def upload(self, filename: str, content: bytes, utility: str) -> dict:
        if utility not in PROFILES:
            raise ValueError(f"Unknown utility type: {utility!r}")
        files = {"dataset": (filename, content)}
        data = self._request("POST", f"/dataset/upload/{utility}", files=files) or {}
        logger.info("Uploaded %s as %s dataset", filename, utility)
        return data

    def upload_generic(self, filename: str, content: bytes) -> dict:
        """Older endpoint: {success, usagePerDay, summary}."""
        data = self._request("POST", "/dataset/upload", files={"dataset": (filename, content)})
        if not isinstance(data, dict) or not data.get("success"):
            raise ApiError("Upload failed.")
        return data
