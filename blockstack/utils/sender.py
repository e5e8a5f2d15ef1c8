import http.client
import json
import logging
from typing import Any, Mapping, Sequence, Tuple

from blockstack.block import BlockInfo
from blockstack.config import Option
from blockstack.errors import BlockStackError
from blockstack.utils.serializer import make_orders

logger = logging.getLogger(__name__)

SHOW_PATH = "/api/show"
DEFAULT_TIMEOUT = 5.0


def post_orders(host: str, port: int, payload: Mapping[str, Any],
                path: str = SHOW_PATH, timeout: float = DEFAULT_TIMEOUT) -> Tuple[int, str]:
    """POST `payload` as JSON and return (status, body)."""
    body = json.dumps(payload)
    logger.info("Connecting to %s:%d", host, port)
    conn = http.client.HTTPConnection(host, port, timeout=timeout)
    try:
        conn.request("POST", path, body=body, headers={
            "Accept": "*/*",
            "Content-Type": "application/json",
            "Connection": "close",
        })
        logger.debug("Sent: %s", body)
        response = conn.getresponse()
        text = response.read().decode("utf-8", errors="replace")
    finally:
        conn.close()
    logger.info("Status %d: %s", response.status, text)
    return response.status, text


def send_to_server(option: Option, blocks: Sequence[BlockInfo], host: str, port: int) -> bool:
    """
    Send the orders for `blocks` to the show server.

    Failures are logged rather than raised; the caller just tries again with
    the next stack. Returns True when the server answered with 2xx.
    """
    try:
        status, _ = post_orders(host, port, make_orders(option, blocks))
    except (BlockStackError, OSError, http.client.HTTPException) as e:
        logger.error("Sending orders failed: %s", e)
        return False
    return 200 <= status < 300
