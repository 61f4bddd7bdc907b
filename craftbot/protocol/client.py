"""
Server list ping — the end-to-end status query.

One call runs strictly in order:

    resolve host → connect → send handshake → send status request
        → read response frame → parse JSON → ServerStatus

Any step can fail; the first failure ends the call with a PingError
subclass. There is no retry here; callers decide whether to try again.

Only the connect step is bounded by a timeout. Concurrent pings share
nothing except the (read-only) HostResolver.
"""

from __future__ import annotations

import asyncio

from craftbot.config.logging import get_logger
from craftbot.protocol.errors import ConnectFailed, ConnectTimeout, ProtocolError
from craftbot.protocol.models import ServerStatus
from craftbot.protocol.packets import (
    create_handshake_packet,
    create_status_request,
    parse_status_response,
    read_packet,
)
from craftbot.protocol.resolver import Endpoint, HostResolver

logger = get_logger(__name__)

DEFAULT_PORT = 25565
DEFAULT_PROTOCOL_VERSION = 770
CONNECT_TIMEOUT = 5.0


async def open_connection(
    endpoint: Endpoint,
    timeout: float = CONNECT_TIMEOUT,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """
    Open a TCP connection to endpoint within timeout seconds.

    Raises:
        ConnectTimeout: If the connection is not established in time
        ConnectFailed: If the connection is refused, reset or unreachable
    """
    logger.debug(f"Connecting to {endpoint} (timeout {timeout}s)")
    try:
        return await asyncio.wait_for(
            asyncio.open_connection(str(endpoint.address), endpoint.port),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise ConnectTimeout(f"Connection to {endpoint} timed out after {timeout}s") from e
    except OSError as e:
        raise ConnectFailed(f"Connection to {endpoint} failed: {e}", cause=e) from e


async def _exchange(
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    hostname: str,
    port: int,
    protocol_version: int,
) -> str:
    writer.write(create_handshake_packet(protocol_version, hostname, port))
    writer.write(create_status_request())
    await writer.drain()

    frame = await read_packet(reader)
    return parse_status_response(frame)


async def ping(
    hostname: str,
    default_port: int = DEFAULT_PORT,
    protocol_version: int = DEFAULT_PROTOCOL_VERSION,
    *,
    resolver: HostResolver | None = None,
    connect_timeout: float = CONNECT_TIMEOUT,
) -> ServerStatus:
    """
    Query a server's status.

    Args:
        hostname: Server hostname or IP literal as typed by the user
        default_port: Port to use when no SRV record overrides it
        protocol_version: Protocol number sent in the handshake
        resolver: Shared HostResolver. If omitted, a new one is built in a
            worker thread; its constructor reads the system DNS configuration
        connect_timeout: Seconds to wait for the TCP connection

    Returns:
        The parsed server status

    Raises:
        PingError: Subclass identifying the step that failed
    """
    if resolver is None:
        resolver = await asyncio.to_thread(HostResolver)

    endpoint = await resolver.resolve(hostname, default_port)
    reader, writer = await open_connection(endpoint, connect_timeout)

    try:
        payload = await _exchange(reader, writer, hostname, endpoint.port, protocol_version)
    except asyncio.IncompleteReadError as e:
        raise ProtocolError(
            f"Truncated frame from {endpoint}: got {len(e.partial)} of {e.expected} bytes"
        ) from e
    except OSError as e:
        raise ConnectFailed(f"Connection to {endpoint} lost: {e}", cause=e) from e
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug(f"Error closing connection to {endpoint}: {e}")

    logger.debug(f"Received {len(payload)}-character status payload from {endpoint}")
    return ServerStatus.from_json(payload)
