"""
FQDN resolution for virtual machines.

The IDB keys machines by FQDN, so every VM must end up with one that
contains a dot, whatever the guest reports. Resolution order:

1. guest host name reported by VMware Tools
2. reverse DNS of the guest's IPv4 addresses (if lookups are enabled)
3. the VM name from vCenter

A result without a dot gets the configured unknown suffix appended.
VMs without any guest info become "noguest<suffix>".
"""

import logging
import socket
from typing import Callable, List, Optional

from idb_vmware.mapping.hostname import normalize_hostname
from idb_vmware.mapping.nics import extract_nics
from idb_vmware.models import VirtualMachineRecord

logger = logging.getLogger(__name__)

NOGUEST_HOSTNAME = "noguest"

ReverseLookup = Callable[[str], List[str]]


def lookup_addr(address: str) -> List[str]:
    """
    Reverse lookup of an IP address via the system resolver.

    Returns the primary name followed by its aliases, or an empty list when
    the address does not resolve.
    """
    try:
        hostname, aliases, _ = socket.gethostbyaddr(address)
    except OSError:
        # herror, gaierror and resolver timeouts
        return []
    return [hostname] + list(aliases)


def _reverse_lookup_fqdn(vm: VirtualMachineRecord, reverse_lookup: ReverseLookup, log: logging.Logger) -> str:
    """Reverse lookup every IPv4 address of the VM; the last hit wins."""
    host_name = ""

    for nic in extract_nics(vm.guest, log=log) or []:
        address = nic.ip_address.addr
        if not address:
            continue

        log.debug(f"reverse lookup for: {address}")
        names = reverse_lookup(address)
        if not names:
            log.debug(f"no hostname found for {address}")
            continue

        log.debug(f"found hostname {names[0]} for {address}")
        host_name = names[0]

    return host_name


def resolve_fqdn(
    vm: VirtualMachineRecord,
    lookup: bool,
    unknown_suffix: str,
    strip: bool,
    reverse_lookup: Optional[ReverseLookup] = None,
    log: Optional[logging.Logger] = None,
) -> str:
    """
    Derive the FQDN of a VM.

    Args:
        vm: Source record from vCenter
        lookup: Try reverse DNS when the guest reports no host name
        unknown_suffix: Appended to names without a dot, e.g. ".vmware.example.com"
        strip: Lowercase and drop characters invalid in host names
        reverse_lookup: Resolver returning names for an address, defaults to lookup_addr
        log: Logger for fallback decisions, defaults to the module logger

    Returns:
        The FQDN; never empty as long as unknown_suffix is not
    """
    log = log or logger
    reverse_lookup = reverse_lookup or lookup_addr

    log.debug(f"trying to find fqdn for vm {vm.name!r}")

    if vm.guest is None:
        log.debug("guest info is absent, using noguest fqdn")
        return f"{NOGUEST_HOSTNAME}{unknown_suffix}"

    host_name = ""
    if vm.guest.host_name:
        log.debug("using guest host name as fqdn")
        host_name = vm.guest.host_name
    elif lookup:
        log.debug("trying to reverse-lookup fqdn")
        host_name = _reverse_lookup_fqdn(vm, reverse_lookup, log)

    if not host_name:
        log.debug(f"no fqdn found, falling back to: {vm.name}")
        host_name = vm.name

    if "." not in host_name:
        log.debug("fqdn doesn't contain '.', appending unknown suffix")
        host_name = f"{host_name}{unknown_suffix}"

    log.debug(f"using fqdn: {host_name}")

    if strip:
        host_name = normalize_hostname(host_name)
        log.debug(f"removed invalid characters from fqdn: {host_name}")

    return host_name
