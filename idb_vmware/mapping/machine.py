"""
Machine mapping: vSphere VM record -> IDB machine record.

The result must always be usable by the IDB; missing values are replaced by
sane defaults. The only hard failure is an unresolvable ESXi host.
"""

import logging
from typing import Callable, Optional

from idb_vmware.errors import HostLookupError, MappingError
from idb_vmware.mapping.fqdn import ReverseLookup, resolve_fqdn
from idb_vmware.mapping.guest_os import identify_os
from idb_vmware.mapping.nics import extract_nics
from idb_vmware.models import DEVICE_TYPE_VIRTUAL, Machine, VirtualMachineRecord

logger = logging.getLogger(__name__)

HostNameLookup = Callable[[str], str]


def diskspace_from_vm(vm: VirtualMachineRecord) -> int:
    """Committed storage of the VM in bytes, 0 when vCenter reports none."""
    if vm.summary.storage is None:
        return 0
    return vm.summary.storage.committed


class MachineMapper:
    """Builds IDB machine records from vSphere VM records."""

    def __init__(
        self,
        host_names: HostNameLookup,
        lookup: bool,
        unknown_suffix: str,
        fqdn_strip: bool,
        reverse_lookup: Optional[ReverseLookup] = None,
        log: Optional[logging.Logger] = None,
    ):
        """
        Args:
            host_names: Resolves a HostSystem MoRef id to the ESXi host name
            lookup: Reverse-lookup FQDNs of guests without a host name
            unknown_suffix: Suffix for machines with an invalid or unknown fqdn
            fqdn_strip: Strip invalid characters from fqdns
            reverse_lookup: Resolver used for FQDN reverse lookups
            log: Logger handed down to every mapping step
        """
        self.host_names = host_names
        self.lookup = lookup
        self.unknown_suffix = unknown_suffix
        self.fqdn_strip = fqdn_strip
        self.reverse_lookup = reverse_lookup
        self.log = log or logger

    @classmethod
    def from_settings(cls, settings, host_names: HostNameLookup, reverse_lookup: Optional[ReverseLookup] = None,
                      log: Optional[logging.Logger] = None) -> "MachineMapper":
        return cls(
            host_names=host_names,
            lookup=settings.lookup,
            unknown_suffix=settings.unknown_suffix,
            fqdn_strip=settings.fqdn_strip,
            reverse_lookup=reverse_lookup,
            log=log,
        )

    def _vmhost(self, vm: VirtualMachineRecord) -> str:
        host_ref = vm.summary.host
        if not host_ref:
            raise HostLookupError(f"VM {vm.name!r} has no host reference")

        host_name = self.host_names(host_ref)
        self.log.debug(f"found vm host name: {host_name}")
        return host_name

    def map_vm(self, vm: VirtualMachineRecord) -> Machine:
        """
        Map one VM.

        Raises:
            HostLookupError: the hosting ESXi server can't be resolved
            MappingError: the resolved fqdn is empty
        """
        os_name, os_release = identify_os(vm.guest, log=self.log)
        fqdn = resolve_fqdn(
            vm,
            lookup=self.lookup,
            unknown_suffix=self.unknown_suffix,
            strip=self.fqdn_strip,
            reverse_lookup=self.reverse_lookup,
            log=self.log,
        )
        if not fqdn.strip():
            raise MappingError(f"VM {vm.name!r} has no usable fqdn, check UnknownSuffix", vm_name=vm.name)

        nics = None
        if vm.guest is not None:
            nics = extract_nics(vm.guest, log=self.log)

        return Machine(
            fqdn=fqdn,
            os=os_name,
            os_release=os_release,
            cores=vm.summary.num_cpu,
            ram=vm.summary.memory_size_mb,
            diskspace=diskspace_from_vm(vm),
            nics=nics,
            vmhost=self._vmhost(vm),
            device_type_id=DEVICE_TYPE_VIRTUAL,
        )
