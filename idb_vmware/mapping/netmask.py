"""IPv4 prefix length to dotted-decimal netmask conversion."""

from idb_vmware.errors import InvalidPrefixLength


def prefix_to_netmask_v4(prefix_length: int) -> str:
    """
    Convert an IPv4 prefix length to a netmask, e.g. 24 -> "255.255.255.0".

    Raises:
        InvalidPrefixLength: prefix_length is not an integer in [0, 32]
    """
    if isinstance(prefix_length, bool) or not isinstance(prefix_length, int):
        raise InvalidPrefixLength(prefix_length)
    if prefix_length < 0 or prefix_length > 32:
        raise InvalidPrefixLength(prefix_length)

    mask = (0xFFFFFFFF << (32 - prefix_length)) & 0xFFFFFFFF
    return ".".join(str((mask >> shift) & 0xFF) for shift in (24, 16, 8, 0))
