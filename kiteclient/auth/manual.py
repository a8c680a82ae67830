from __future__ import annotations

from urllib.parse import parse_qs, urlparse


def prompt(text: str = "") -> str:
    """Blocking input prompt (interactive flows)."""

    return input(text)


def extract_request_token(value: str) -> str:
    """Accept either a bare request token or the full redirect URL carrying it."""

    value = value.strip()
    if "request_token=" in value:
        query = parse_qs(urlparse(value).query)
        return (query.get("request_token") or [""])[0].strip()
    return value


def manual_exchange_request_token(login_url: str) -> str:
    """Guide user to open URL and paste request token."""

    print(
        "\nManual login:\n"
        f"1) Open this URL in a browser and complete login:\n{login_url}\n"
        "2) Copy the 'request_token' (or the whole redirected URL) and paste below.\n"
    )
    token = extract_request_token(prompt("Token: "))
    if not token:
        raise ValueError("Empty token provided")
    return token
