"""Mapping of vSphere VM records to IDB machine records"""

from .netmask import prefix_to_netmask_v4
from .hostname import normalize_hostname
from .nics import extract_nics, UNKNOWN_NETMASK
from .guest_os import identify_os
from .fqdn import lookup_addr, resolve_fqdn, NOGUEST_HOSTNAME
from .machine import MachineMapper, diskspace_from_vm

__all__ = [
    'prefix_to_netmask_v4',
    'normalize_hostname',
    'extract_nics',
    'UNKNOWN_NETMASK',
    'identify_os',
    'lookup_addr',
    'resolve_fqdn',
    'NOGUEST_HOSTNAME',
    'MachineMapper',
    'diskspace_from_vm',
]
