"""Guest operating system identification."""

import logging
from typing import Optional, Tuple

from idb_vmware.models import GuestInfo

logger = logging.getLogger(__name__)


def identify_os(guest: Optional[GuestInfo], log: Optional[logging.Logger] = None) -> Tuple[str, str]:
    """
    Return (os, os_release) for a guest.

    os is guestId, falling back to guestFamily; os_release is guestFullName.
    Both are empty strings when nothing was reported.
    See: https://pubs.vmware.com/vsphere-60/topic/com.vmware.wssdk.apiref.doc/vim.vm.GuestInfo.html
    """
    log = log or logger

    if guest is None:
        log.debug("guest info is absent, os unknown")
        return "", ""

    os_name = ""
    if guest.guest_id:
        log.debug("using guest id as os")
        os_name = guest.guest_id
    elif guest.guest_family:
        log.debug("using guest family as os")
        os_name = guest.guest_family

    os_release = ""
    if guest.guest_full_name:
        log.debug("using guest full name as os release")
        os_release = guest.guest_full_name

    return os_name, os_release
