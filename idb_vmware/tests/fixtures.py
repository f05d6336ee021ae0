"""Builders for source VM records used across the test suite."""

from typing import List, Optional, Sequence, Tuple

from idb_vmware.models import (
    GuestInfo,
    GuestNic,
    IpConfig,
    IpConfigAddress,
    StorageSummary,
    VirtualMachineRecord,
    VmSummary,
)


def adapter(*addresses: Tuple[str, int]) -> GuestNic:
    """Guest NIC reporting the given (address, prefix_length) pairs."""
    return GuestNic(ip_config=IpConfig(ip_address=[
        IpConfigAddress(ip_address=address, prefix_length=prefix) for address, prefix in addresses
    ]))


def guest(host_name: str = "", adapters: Optional[Sequence[GuestNic]] = None, **kwargs) -> GuestInfo:
    net: Optional[List[GuestNic]] = list(adapters) if adapters is not None else None
    return GuestInfo(host_name=host_name, net=net, **kwargs)


def make_vm(
    name: str = "vm-01",
    guest_info: Optional[GuestInfo] = None,
    num_cpu: int = 2,
    memory_size_mb: int = 4096,
    committed: Optional[int] = 10 * 1024 ** 3,
    host: Optional[str] = "host-42",
) -> VirtualMachineRecord:
    storage = StorageSummary(committed=committed) if committed is not None else None
    return VirtualMachineRecord(
        name=name,
        guest=guest_info,
        summary=VmSummary(num_cpu=num_cpu, memory_size_mb=memory_size_mb, storage=storage, host=host),
    )
