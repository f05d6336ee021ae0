"""
vCenter PropertyCollector helpers for VM inventory.

All VM properties are fetched in one batched PropertyCollector call over a
ContainerView, then converted from pyVmomi data objects into
VirtualMachineRecord models. pyVmomi leaves unset properties as None (or
empty arrays); conversion turns them into the explicit Optional fields of
idb_vmware.models.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pyVmomi import vim

from idb_vmware.models import (
    GuestInfo,
    GuestNic,
    IpConfig,
    IpConfigAddress,
    StorageSummary,
    VirtualMachineRecord,
    VmSummary,
)

logger = logging.getLogger(__name__)

# Properties retrieved for every VM
VM_PROPERTIES = ["name", "guest", "summary"]

# Objects per RetrievePropertiesEx page
PAGE_SIZE = 1000


# =============================================================================
# Retrieval
# =============================================================================

def _parse_object_content(oc) -> Tuple[Any, Dict[str, Any]]:
    """
    Parse PropertyCollector ObjectContent into (obj, props) tuple.

    Args:
        oc: vim.PropertyCollector.ObjectContent

    Returns:
        Tuple of (vim_object, {property_name: property_value})
    """
    obj = oc.obj
    props = {p.name: p.val for p in (oc.propSet or [])}
    return obj, props


def _build_filter_spec(view_ref, properties: List[str]) -> vim.PropertyCollector.FilterSpec:
    """FilterSpec selecting `properties` of every VM in a ContainerView."""
    traversal_spec = vim.PropertyCollector.TraversalSpec(
        name="viewTraversal",
        type=vim.view.ContainerView,
        path="view",
        skip=False
    )

    obj_spec = vim.PropertyCollector.ObjectSpec(
        obj=view_ref,
        selectSet=[traversal_spec],
        skip=True
    )

    prop_spec = vim.PropertyCollector.PropertySpec(
        type=vim.VirtualMachine,
        pathSet=properties,
        all=False
    )

    return vim.PropertyCollector.FilterSpec(
        objectSet=[obj_spec],
        propSet=[prop_spec]
    )


def retrieve_vm_properties(property_collector, view_ref,
                           properties: Optional[List[str]] = None) -> List[Dict[str, Any]]:
    """
    Fetch properties of all VMs in a ContainerView.

    Args:
        property_collector: content.propertyCollector
        view_ref: ContainerView over vim.VirtualMachine
        properties: Property paths, defaults to VM_PROPERTIES

    Returns:
        One {property_name: value} dict per VM, in the order vCenter returns them
    """
    filter_spec = _build_filter_spec(view_ref, properties or VM_PROPERTIES)
    options = vim.PropertyCollector.RetrieveOptions(maxObjects=PAGE_SIZE)

    result = property_collector.RetrievePropertiesEx(specSet=[filter_spec], options=options)
    if result is None:
        return []

    objects = list(result.objects or [])
    token = result.token

    while token:
        result = property_collector.ContinueRetrievePropertiesEx(token)
        objects.extend(result.objects or [])
        token = result.token

    logger.info(f"PropertyCollector fetched {len(objects)} VMs")

    return [_parse_object_content(oc)[1] for oc in objects]


def retrieve_object_property(property_collector, obj, obj_type, path: str) -> Any:
    """
    Fetch a single property of a single managed object.

    Returns:
        The property value, None if vCenter returned nothing for it
    """
    obj_spec = vim.PropertyCollector.ObjectSpec(obj=obj, skip=False)
    prop_spec = vim.PropertyCollector.PropertySpec(type=obj_type, pathSet=[path], all=False)
    filter_spec = vim.PropertyCollector.FilterSpec(objectSet=[obj_spec], propSet=[prop_spec])

    for oc in property_collector.RetrieveProperties(specSet=[filter_spec]) or []:
        _, props = _parse_object_content(oc)
        if path in props:
            return props[path]
    return None


# =============================================================================
# Conversion
# =============================================================================

def _ip_config_from_vim(ip_config) -> Optional[IpConfig]:
    if ip_config is None:
        return None

    addresses = getattr(ip_config, "ipAddress", None)
    if not addresses:
        return IpConfig(ip_address=None)

    return IpConfig(ip_address=[
        IpConfigAddress(
            ip_address=getattr(addr, "ipAddress", None) or "",
            prefix_length=getattr(addr, "prefixLength", None) or 0,
        )
        for addr in addresses
    ])


def _guest_from_vim(guest) -> Optional[GuestInfo]:
    """Convert vim.vm.GuestInfo; unset arrays become None."""
    if guest is None:
        return None

    net = getattr(guest, "net", None)
    nics = None
    if net:
        nics = [GuestNic(ip_config=_ip_config_from_vim(getattr(nic, "ipConfig", None))) for nic in net]

    return GuestInfo(
        host_name=getattr(guest, "hostName", None) or "",
        guest_id=getattr(guest, "guestId", None) or "",
        guest_family=getattr(guest, "guestFamily", None) or "",
        guest_full_name=getattr(guest, "guestFullName", None) or "",
        net=nics,
    )


def _moref_id(obj) -> Optional[str]:
    if obj is None:
        return None
    return getattr(obj, "_moId", None) or None


def _summary_from_vim(summary) -> VmSummary:
    """Convert vim.vm.Summary; a missing summary maps to zero values."""
    if summary is None:
        return VmSummary()

    config = getattr(summary, "config", None)
    runtime = getattr(summary, "runtime", None)
    storage = getattr(summary, "storage", None)

    return VmSummary(
        num_cpu=(getattr(config, "numCpu", None) or 0) if config else 0,
        memory_size_mb=(getattr(config, "memorySizeMB", None) or 0) if config else 0,
        storage=StorageSummary(committed=getattr(storage, "committed", None) or 0) if storage else None,
        host=_moref_id(getattr(runtime, "host", None)) if runtime else None,
    )


def vm_record_from_properties(props: Dict[str, Any]) -> VirtualMachineRecord:
    """Build a VirtualMachineRecord from PropertyCollector results of one VM."""
    return VirtualMachineRecord(
        name=props.get("name") or "",
        guest=_guest_from_vim(props.get("guest")),
        summary=_summary_from_vim(props.get("summary")),
    )
