"""
Outbound JSON calls to other services.
"""
from typing import Any, Optional, Tuple

import requests

from ..api.exceptions import JSONEncodeError, RemotePostError
from ..core.logging_config import get_logger
from .json_service import encode_json

logger = get_logger(__name__)


def post_json(
    uri: str,
    payload: Any,
    client: Optional[requests.Session] = None,
    timeout: Optional[float] = None
) -> Tuple[requests.Response, int]:
    """
    POST payload as JSON to uri.

    A new session is used unless client is supplied.

    Returns:
        The response and its status code

    Raises:
        RemotePostError: If payload cannot be encoded or the request fails;
            its status_code is 400
    """
    try:
        body = encode_json(payload)
    except JSONEncodeError as e:
        raise RemotePostError(str(e)) from e

    session = client if client is not None else requests.Session()
    try:
        response = session.post(
            uri,
            data=body,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.warning(f"POST to {uri} failed: {e}")
        raise RemotePostError(str(e)) from e
    finally:
        if client is None:
            session.close()

    logger.debug(f"POST to {uri} returned {response.status_code}")
    return response, response.status_code
