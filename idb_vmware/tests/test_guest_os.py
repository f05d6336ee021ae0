import unittest

from idb_vmware.mapping.guest_os import identify_os
from idb_vmware.models import GuestInfo


class IdentifyOsTests(unittest.TestCase):
    def test_absent_guest(self):
        self.assertEqual(identify_os(None), ("", ""))

    def test_guest_id_preferred_over_family(self):
        info = GuestInfo(guest_id="ubuntu64Guest", guest_family="linuxGuest",
                         guest_full_name="Ubuntu Linux (64-bit)")

        self.assertEqual(identify_os(info), ("ubuntu64Guest", "Ubuntu Linux (64-bit)"))

    def test_family_used_when_id_empty(self):
        info = GuestInfo(guest_family="windowsGuest", guest_full_name="Microsoft Windows Server 2019 (64-bit)")

        self.assertEqual(identify_os(info), ("windowsGuest", "Microsoft Windows Server 2019 (64-bit)"))

    def test_release_empty_without_full_name(self):
        self.assertEqual(identify_os(GuestInfo(guest_id="otherGuest")), ("otherGuest", ""))

    def test_nothing_reported(self):
        self.assertEqual(identify_os(GuestInfo()), ("", ""))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
