"""
Host resolution for server pings.

Turns a user-supplied hostname into a concrete address and port:

1. IP literals are used as-is with the default port.
2. Otherwise a `_minecraft._tcp.<hostname>` SRV record is looked up; the
   first record overrides both host and port.
3. If the SRV lookup itself fails (NXDOMAIN, no answer, no reachable
   nameserver) the original hostname and default port are used.

The chosen host is then resolved to an IP address with the event loop's
getaddrinfo.

A HostResolver is meant to be built once at startup and shared between
concurrent pings; it holds no per-call state.
"""

from __future__ import annotations

import asyncio
import ipaddress
import socket
from dataclasses import dataclass

import dns.asyncresolver
import dns.exception
import dns.resolver

from craftbot.config.logging import get_logger
from craftbot.protocol.errors import HostResolutionFailed, SrvResolutionFailed

logger = get_logger(__name__)

SRV_PREFIX = "_minecraft._tcp."

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


@dataclass(frozen=True)
class Endpoint:
    """A resolved address and port for a single ping."""

    address: IPAddress
    port: int

    def __str__(self) -> str:
        if self.address.version == 6:
            return f"[{self.address}]:{self.port}"
        return f"{self.address}:{self.port}"


def parse_ip(hostname: str) -> IPAddress | None:
    """Return hostname as an IP address, or None if it is not a literal."""
    try:
        return ipaddress.ip_address(hostname)
    except ValueError:
        return None


class HostResolver:
    """
    Resolves server hostnames, honouring SRV records.

    Args:
        dns_resolver: dnspython async resolver to use for SRV queries. If None,
            one is built from the system configuration. When the system has no
            resolver configuration, SRV lookups are skipped.
        timeout: Overall lifetime of a single SRV query in seconds
    """

    def __init__(
        self,
        dns_resolver: dns.asyncresolver.Resolver | None = None,
        timeout: float = 5.0,
    ):
        if dns_resolver is None:
            try:
                dns_resolver = dns.asyncresolver.Resolver()
            except dns.resolver.NoResolverConfiguration:
                logger.warning("No DNS resolver configuration found; SRV lookups disabled")
        self._dns_resolver = dns_resolver
        self._timeout = timeout

    async def resolve_target(self, hostname: str, default_port: int) -> tuple[str, int]:
        """
        Decide which host and port to connect to, before address resolution.

        Returns:
            (host or IP string, port)

        Raises:
            SrvResolutionFailed: If the SRV query answered with no records
        """
        ip = parse_ip(hostname)
        if ip is not None:
            return str(ip), default_port

        if self._dns_resolver is None:
            return hostname, default_port

        srv_name = f"{SRV_PREFIX}{hostname}"
        try:
            answer = await self._dns_resolver.resolve(srv_name, "SRV", lifetime=self._timeout)
        except dns.exception.DNSException as e:
            logger.debug(f"SRV lookup for {srv_name} failed ({e!r}); using {hostname}:{default_port}")
            return hostname, default_port

        record = next(iter(answer), None)
        if record is None:
            raise SrvResolutionFailed(f"No SRV records found for {srv_name}")

        target = record.target.to_text(omit_final_dot=True)
        logger.debug(f"SRV {srv_name} -> {target}:{record.port}")
        return target, record.port

    async def lookup_address(self, host: str, port: int) -> Endpoint:
        """
        Resolve host to the first address getaddrinfo returns.

        Raises:
            HostResolutionFailed: If the lookup errors or yields nothing
        """
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as e:
            raise HostResolutionFailed(f"Could not resolve {host}: {e}") from e

        if not infos:
            raise HostResolutionFailed(f"No addresses found for {host}")

        sockaddr = infos[0][4]
        return Endpoint(address=ipaddress.ip_address(sockaddr[0]), port=port)

    async def resolve(self, hostname: str, default_port: int) -> Endpoint:
        """Resolve hostname to the endpoint a ping should connect to."""
        host, port = await self.resolve_target(hostname, default_port)
        endpoint = await self.lookup_address(host, port)
        logger.debug(f"Resolved {hostname} to {endpoint}")
        return endpoint
