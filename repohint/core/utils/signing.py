"""
Signing of pull request re-check links.

The same HMAC scheme produces the token embedded in failure comments and
verifies it when the callback endpoint is hit.
"""

import hashlib
import hmac
from urllib.parse import urlencode

RECHECK_PATH = "/api/pr/check"


def sign_pr_number(secret_key: str, pr_number: str | int) -> str:
    """Return the hex HMAC-SHA256 of the PR number under ``secret_key``."""
    mac = hmac.new(secret_key.encode("utf-8"), msg=str(pr_number).encode("utf-8"), digestmod=hashlib.sha256)
    return mac.hexdigest()


def verify_pr_signature(secret_key: str, pr_number: str | int, token: str | None) -> bool:
    """Check a re-check token in constant time."""
    if not secret_key or not token:
        return False
    expected = sign_pr_number(secret_key, pr_number)
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


def build_recheck_url(base_url: str, pr_number: str | int, token: str) -> str:
    """Build the re-check link, e.g. ``http://host:8080/api/pr/check?pr=42&token=...``."""
    query = urlencode({"pr": str(pr_number), "token": token})
    return f"{base_url}{RECHECK_PATH}?{query}"
