"""Minimal Datawrapper API client: push data, annotations and notes, publish.

Every call reads its API key from an environment variable, named by the
``api_key`` argument (``DATAWRAPPER_KEY`` by default). Failures are
raised, never retried.
"""

from __future__ import annotations

import os
from typing import Any, Literal

import httpx

from asciiviz.errors import AuthError, ConfigurationError, NetworkError, RemoteError

BASE_URL = "https://api.datawrapper.de/v3"
DEFAULT_KEY_ENV = "DATAWRAPPER_KEY"
_TIMEOUT = 30.0

DataFormat = Literal["csv", "json"]


def update_data_dw(
    chart_id: str,
    data: str | list | dict,
    *,
    format: DataFormat = "csv",
    api_key: str = DEFAULT_KEY_ENV,
    return_response: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Response | None:
    """Replace the chart's data.

    *data* is a CSV string by default. With ``format="json"`` it is a
    JSON string or a list/dict to serialize, as locator maps expect.
    """
    match format:
        case "csv":
            if not isinstance(data, str):
                raise ConfigurationError("CSV data must be passed as a string.")
            body = {"content": data.encode("utf-8"), "headers": {"Content-Type": "text/csv"}}
        case "json":
            if isinstance(data, str):
                body = {
                    "content": data.encode("utf-8"),
                    "headers": {"Content-Type": "application/json"},
                }
            else:
                body = {"json": data}
        case _:
            raise ConfigurationError(f"Data format must be 'csv' or 'json', not {format!r}.")
    return _request(
        "PUT",
        f"charts/{chart_id}/data",
        api_key=api_key,
        return_response=return_response,
        transport=transport,
        **body,
    )


def update_annotations_dw(
    chart_id: str,
    annotations: list[dict[str, Any]],
    *,
    api_key: str = DEFAULT_KEY_ENV,
    return_response: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Response | None:
    """Replace the chart's text annotations."""
    return _request(
        "PATCH",
        f"charts/{chart_id}",
        api_key=api_key,
        return_response=return_response,
        transport=transport,
        json={"metadata": {"visualize": {"text-annotations": annotations}}},
    )


def update_notes_dw(
    chart_id: str,
    note: str,
    *,
    api_key: str = DEFAULT_KEY_ENV,
    return_response: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Response | None:
    return _request(
        "PATCH",
        f"charts/{chart_id}",
        api_key=api_key,
        return_response=return_response,
        transport=transport,
        json={"metadata": {"annotate": {"notes": note}}},
    )


def publish_chart_dw(
    chart_id: str,
    *,
    api_key: str = DEFAULT_KEY_ENV,
    return_response: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Response | None:
    return _request(
        "POST",
        f"charts/{chart_id}/publish",
        api_key=api_key,
        return_response=return_response,
        transport=transport,
    )


# ── Helpers ───────────────────────────────────────────────────────


def resolve_key(env_name: str) -> str:
    """Read the API key from *env_name*, failing if it is unset or blank."""
    key = os.environ.get(env_name, "").strip()
    if not key:
        raise AuthError(f"Set the {env_name} environment variable to your Datawrapper API key.")
    return key


def _request(
    method: str,
    endpoint: str,
    *,
    api_key: str,
    return_response: bool,
    transport: httpx.BaseTransport | None,
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> httpx.Response | None:
    token = resolve_key(api_key)
    headers = {"Authorization": f"Bearer {token}", **(headers or {})}

    try:
        with httpx.Client(base_url=BASE_URL, timeout=_TIMEOUT, transport=transport) as client:
            response = client.request(method, endpoint, headers=headers, **kwargs)
    except httpx.TransportError as e:
        raise NetworkError(f"{method} {endpoint} failed: {e}") from e

    if not response.is_success:
        raise RemoteError(
            f"{method} {endpoint} returned HTTP {response.status_code}: {response.text}",
            status_code=response.status_code,
            response_data=response.text,
        )
    return response if return_response else None
