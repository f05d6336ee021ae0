"""
Pydantic models for vSphere source records and IDB machine records.

Source models mirror the subset of vim.VirtualMachine that the mapping
reads. Every nested structure vSphere may leave unset is Optional; mapping
code checks for None before touching it.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# IDB device types
DEVICE_TYPE_PHYSICAL = 1
DEVICE_TYPE_VIRTUAL = 2


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# vSphere source records
# =============================================================================

class IpConfigAddress(_Frozen):
    """One address of a guest NIC (vim.net.IpConfigInfo.IpAddress)."""
    ip_address: str = ""
    prefix_length: int = 0


class IpConfig(_Frozen):
    """IP configuration of a guest NIC (vim.net.IpConfigInfo)."""
    ip_address: Optional[List[IpConfigAddress]] = None


class GuestNic(_Frozen):
    """Guest network adapter (vim.vm.GuestInfo.NicInfo)."""
    ip_config: Optional[IpConfig] = None


class GuestInfo(_Frozen):
    """Guest self-description reported by VMware Tools (vim.vm.GuestInfo)."""
    host_name: str = ""
    guest_id: str = ""
    guest_family: str = ""
    guest_full_name: str = ""
    net: Optional[List[GuestNic]] = None


class StorageSummary(_Frozen):
    """Storage usage of a VM (vim.vm.Summary.StorageSummary)."""
    committed: int = 0


class VmSummary(_Frozen):
    """Resource summary of a VM (vim.vm.Summary)."""
    num_cpu: int = 0
    memory_size_mb: int = 0
    storage: Optional[StorageSummary] = None
    host: Optional[str] = None  # HostSystem MoRef id, e.g. "host-42"


class VirtualMachineRecord(_Frozen):
    """A virtual machine as retrieved from vCenter."""
    name: str = ""
    guest: Optional[GuestInfo] = None
    summary: VmSummary = Field(default_factory=VmSummary)


# =============================================================================
# IDB machine records
# =============================================================================

class IPAddress(_Frozen):
    """Address of a NIC: either IPv4 (addr/netmask) or IPv6 (addr_v6/netmask_v6)."""
    addr: Optional[str] = None
    netmask: Optional[str] = None
    addr_v6: Optional[str] = None
    netmask_v6: Optional[str] = None

    @model_validator(mode="after")
    def _one_family(self) -> "IPAddress":
        has_v4 = self.addr is not None or self.netmask is not None
        has_v6 = self.addr_v6 is not None or self.netmask_v6 is not None
        if has_v4 == has_v6:
            raise ValueError("an IP address entry carries exactly one of IPv4 or IPv6")
        return self


class Nic(_Frozen):
    """Network interface of an IDB machine."""
    name: str
    ip_address: IPAddress


class Machine(_Frozen):
    """Canonical machine record as accepted by the IDB."""
    fqdn: str
    os: str = ""
    os_release: str = ""
    cores: int = 0
    ram: int = 0  # MB
    diskspace: int = 0  # bytes
    nics: Optional[List[Nic]] = None
    vmhost: str = ""
    device_type_id: int = DEVICE_TYPE_VIRTUAL

    @model_validator(mode="after")
    def _fqdn_not_blank(self) -> "Machine":
        if not self.fqdn.strip():
            raise ValueError("fqdn can't be empty")
        return self

    def to_idb_payload(self) -> Dict[str, Any]:
        """JSON document for the IDB machines API; absent fields are omitted."""
        return self.model_dump(exclude_none=True)
