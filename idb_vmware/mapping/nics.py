"""
Network interface extraction from VMware Tools guest info.

Malformed data is expected here: guests report link-local junk, empty
strings and prefix lengths that don't fit the address family. Bad entries
are skipped or get the "unknown" netmask; nothing raises.
"""

import ipaddress
import logging
from typing import List, Optional

from idb_vmware.errors import InvalidPrefixLength
from idb_vmware.mapping.netmask import prefix_to_netmask_v4
from idb_vmware.models import GuestInfo, IPAddress, IpConfigAddress, Nic

logger = logging.getLogger(__name__)

UNKNOWN_NETMASK = "unknown"


def _parse_ip(text: str):
    """Parse an address string, None if it is not a plain IP address."""
    # Zone-scoped addresses (fe80::1%eth0) are not accepted as plain IPs
    if not text or "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _is_four_byte(ip) -> bool:
    if ip.version == 4:
        return True
    return ip.ipv4_mapped is not None


def _nic_from_address(index: int, entry: IpConfigAddress, log: logging.Logger) -> Optional[Nic]:
    ip_string = entry.ip_address

    ip = _parse_ip(ip_string)
    if ip is None:
        log.debug(f"{ip_string!r} is not a valid ip address")
        return None

    name = f"unknown{index}"

    if _is_four_byte(ip):
        try:
            netmask = prefix_to_netmask_v4(entry.prefix_length)
        except InvalidPrefixLength as e:
            log.debug(f"{e}, using netmask {UNKNOWN_NETMASK!r} for {ip_string}")
            netmask = UNKNOWN_NETMASK

        log.debug(f"found nic with v4 address: {ip_string} network: {netmask}")
        return Nic(name=name, ip_address=IPAddress(addr=ip_string, netmask=netmask))

    prefix = str(entry.prefix_length)
    log.debug(f"found nic with v6 address: {ip_string}/{prefix}")
    return Nic(name=name, ip_address=IPAddress(addr_v6=ip_string, netmask_v6=prefix))


def extract_nics(guest: Optional[GuestInfo], log: Optional[logging.Logger] = None) -> Optional[List[Nic]]:
    """
    Build the NIC list of a VM from its guest network adapters.

    Each entry is named after the position of its adapter ("unknown0",
    "unknown1", ...), so a dual-stack adapter yields two entries with the
    same name. Entries keep the order in which vSphere reports them.

    Args:
        guest: Guest info of the VM, None when VMware Tools never reported
        log: Logger for skip/fallback decisions, defaults to the module logger

    Returns:
        List of Nic, or None when there is no guest info or adapter list
    """
    log = log or logger

    if guest is None:
        log.debug("guest info is absent, no nics")
        return None

    if guest.net is None:
        log.debug("guest info has no network adapters")
        return None

    nics: List[Nic] = []
    for index, adapter in enumerate(guest.net):
        if adapter.ip_config is None:
            log.debug(f"adapter {index} has no ip config")
            continue

        if not adapter.ip_config.ip_address:
            log.debug(f"adapter {index} has no ip addresses")
            continue

        for entry in adapter.ip_config.ip_address:
            nic = _nic_from_address(index, entry, log)
            if nic is not None:
                nics.append(nic)

    return nics
