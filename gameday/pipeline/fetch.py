import requests

from gameday import config


class TransportError(Exception):
    """A source could not be fetched (network failure or non-2xx response)."""


def _get(url, headers=None, params=None):
    try:
        resp = requests.get(
            url,
            headers=headers or config.REQUEST_HEADERS,
            params=params,
            timeout=config.REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise TransportError(f"{url} returned {e.response.status_code}") from e
    except requests.exceptions.RequestException as e:
        raise TransportError(f"{url} could not be fetched: {e}") from e
    return resp


def fetch_text(url, headers=None):
    return _get(url, headers=headers).text


def fetch_json(url, params=None):
    """Decoded JSON body. A body that is not JSON raises ValueError, not TransportError."""
    return _get(url, headers={"Accept": "application/json"}, params=params).json()
