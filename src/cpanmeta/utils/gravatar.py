"""Gravatar URL construction."""

import hashlib
from urllib.parse import urlencode


SECURE_BASE_URL = "https://secure.gravatar.com/avatar/"
BASE_URL = "http://www.gravatar.com/avatar/"


def gravatar_hash(email: str) -> str:
    """MD5 hex digest of the trimmed, lower-cased address."""
    return hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()


def gravatar_url(email: str, *, size: int | None = None, default: str | None = None, https: bool = True) -> str:
    """Build the avatar URL for an e-mail address.

    Args:
        email: Address whose hash identifies the avatar
        size: Square image size in pixels
        default: Fallback image policy when no avatar is registered (e.g. "identicon")
        https: Use the secure host

    Returns:
        Avatar URL, e.g. ``https://secure.gravatar.com/avatar/<md5>?s=130&d=identicon``
    """
    params: dict[str, str | int] = {}
    if size is not None:
        params["s"] = size
    if default is not None:
        params["d"] = default

    url = (SECURE_BASE_URL if https else BASE_URL) + gravatar_hash(email)
    if params:
        url += "?" + urlencode(params)
    return url
