"""
Error types for idb-vmware-sync

Every failure that aborts a sync run derives from IdbVmwareError. Per-field
mapping anomalies (bad IPs, bad prefixes, failed reverse lookups) never
raise; see idb_vmware.mapping.
"""

import re
from typing import Any, Dict, Optional


class IdbVmwareError(Exception):
    """Base exception for idb-vmware-sync"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ConfigError(IdbVmwareError):
    """Raised when the configuration file is unreadable or incomplete"""

    def __init__(self, message: str):
        super().__init__(message, error_code="CONFIG")


class InvalidPrefixLength(IdbVmwareError):
    """Raised when an IPv4 prefix length is outside [0, 32]"""

    def __init__(self, prefix_length: Any):
        message = f"Invalid prefix length: {prefix_length}"
        super().__init__(message, error_code="INVALID_PREFIX_LENGTH")
        self.prefix_length = prefix_length


class PlatformQueryError(IdbVmwareError):
    """Raised when vCenter connection, discovery or property retrieval fails"""

    def __init__(self, message: str, fault_type: Optional[str] = None):
        super().__init__(message, error_code="PLATFORM_QUERY")
        self.fault_type = fault_type


class HostLookupError(IdbVmwareError):
    """Raised when the ESXi host of a VM cannot be resolved to a name"""

    def __init__(self, message: str, host_ref: Optional[str] = None):
        super().__init__(message, error_code="HOST_LOOKUP")
        self.host_ref = host_ref


class MappingError(IdbVmwareError):
    """Raised when a VM cannot be mapped to a valid IDB machine record"""

    def __init__(self, message: str, vm_name: str = ""):
        super().__init__(message, error_code="MAPPING")
        self.vm_name = vm_name


class IdbSubmissionError(IdbVmwareError):
    """Raised when the IDB rejects or does not answer a machine update"""

    def __init__(self, message: str, fqdn: str = "", status_code: Optional[int] = None):
        super().__init__(message, error_code="IDB_SUBMISSION")
        self.fqdn = fqdn
        self.status_code = status_code


# Mapping of vSphere fault patterns to operator-friendly messages
VSPHERE_FAULT_MESSAGES: Dict[str, Dict[str, str]] = {
    'vim.fault.InvalidLogin': {
        'title': 'Authentication Failed',
        'message': 'Invalid credentials for vCenter connection. Check VmwareUrl.',
    },
    'vim.fault.NoPermission': {
        'title': 'Permission Denied',
        'message': 'The vCenter user lacks read permission on the inventory.',
    },
    'vim.fault.NotAuthenticated': {
        'title': 'Session Expired',
        'message': 'The vCenter session is no longer authenticated.',
    },
    'vmodl.fault.ManagedObjectNotFound': {
        'title': 'Object Not Found',
        'message': 'The object was removed from vCenter while the sync was running.',
    },
    'vim.fault.Timedout': {
        'title': 'Operation Timeout',
        'message': 'The vCenter operation timed out.',
    },
    'vmodl.fault.InvalidArgument': {
        'title': 'Invalid Argument',
        'message': 'vCenter rejected the property query.',
    },
    'vmodl.fault.HostCommunication': {
        'title': 'Host Unreachable',
        'message': 'vCenter could not communicate with the ESXi host.',
    },
}

_MSG_PATTERN = re.compile(r"msg\s*=\s*'([^']+)'")


def describe_vsphere_fault(error: Exception) -> str:
    """
    Turn a pyVmomi fault (or any exception) into a one-line description.

    Known fault types are prefixed with a title and a hint; the fault's own
    msg field is appended when present.
    """
    error_str = str(error)
    error_type = type(error).__name__

    msg_match = _MSG_PATTERN.search(error_str)
    actual_msg = msg_match.group(1) if msg_match else None

    for fault_pattern, info in VSPHERE_FAULT_MESSAGES.items():
        short_name = fault_pattern.rsplit('.', 1)[-1]
        if fault_pattern in error_str or short_name == error_type:
            if actual_msg:
                return f"{info['title']}: {info['message']} ({actual_msg})"
            return f"{info['title']}: {info['message']}"

    if actual_msg:
        return actual_msg

    return error_str or error_type
