import logging
import unittest

from idb_vmware.mapping.nics import UNKNOWN_NETMASK, extract_nics
from idb_vmware.models import GuestInfo, GuestNic, IpConfig, IPAddress, Nic
from idb_vmware.tests.fixtures import adapter, guest


class ExtractNicsTests(unittest.TestCase):
    def test_absent_guest_yields_no_result(self):
        self.assertIsNone(extract_nics(None))

    def test_absent_adapter_list_yields_no_result(self):
        self.assertIsNone(extract_nics(GuestInfo(host_name="db01")))

    def test_single_ipv4_address(self):
        nics = extract_nics(guest(adapters=[adapter(("10.0.0.5", 24))]))

        self.assertEqual(nics, [
            Nic(name="unknown0", ip_address=IPAddress(addr="10.0.0.5", netmask="255.255.255.0")),
        ])

    def test_invalid_address_skipped_without_shifting_names(self):
        nics = extract_nics(guest(adapters=[
            adapter(("not-an-ip", 24), ("10.0.0.5", 24), ("", 24)),
            adapter(("192.168.1.10", 16)),
        ]))

        self.assertEqual([(n.name, n.ip_address.addr, n.ip_address.netmask) for n in nics], [
            ("unknown0", "10.0.0.5", "255.255.255.0"),
            ("unknown1", "192.168.1.10", "255.255.0.0"),
        ])

    def test_dual_stack_adapter_yields_two_entries_with_same_name(self):
        nics = extract_nics(guest(adapters=[
            adapter(("10.0.0.5", 24), ("fe80::250:56ff:fe9a:1", 64)),
        ]))

        self.assertEqual(nics, [
            Nic(name="unknown0", ip_address=IPAddress(addr="10.0.0.5", netmask="255.255.255.0")),
            Nic(name="unknown0", ip_address=IPAddress(addr_v6="fe80::250:56ff:fe9a:1", netmask_v6="64")),
        ])

    def test_invalid_ipv4_prefix_uses_unknown_netmask(self):
        nics = extract_nics(guest(adapters=[adapter(("10.0.0.5", 64), ("10.0.0.6", -1))]))

        self.assertEqual([n.ip_address.netmask for n in nics], [UNKNOWN_NETMASK, UNKNOWN_NETMASK])
        self.assertEqual([n.ip_address.addr for n in nics], ["10.0.0.5", "10.0.0.6"])

    def test_ipv6_prefix_kept_as_string_even_when_large(self):
        nics = extract_nics(guest(adapters=[adapter(("2001:db8::10", 128))]))

        self.assertEqual(nics[0].ip_address, IPAddress(addr_v6="2001:db8::10", netmask_v6="128"))

    def test_ipv4_mapped_ipv6_address_is_treated_as_ipv4(self):
        nics = extract_nics(guest(adapters=[adapter(("::ffff:10.0.0.7", 24))]))

        self.assertEqual(nics[0].ip_address, IPAddress(addr="::ffff:10.0.0.7", netmask="255.255.255.0"))

    def test_zone_scoped_address_is_skipped(self):
        nics = extract_nics(guest(adapters=[adapter(("fe80::1%eth0", 64), ("10.0.0.5", 24))]))

        self.assertEqual([n.ip_address.addr for n in nics], ["10.0.0.5"])

    def test_adapters_without_addresses_still_count_for_names(self):
        nics = extract_nics(guest(adapters=[
            GuestNic(ip_config=None),
            GuestNic(ip_config=IpConfig(ip_address=None)),
            GuestNic(ip_config=IpConfig(ip_address=[])),
            adapter(("10.1.1.1", 8)),
        ]))

        self.assertEqual(nics, [
            Nic(name="unknown3", ip_address=IPAddress(addr="10.1.1.1", netmask="255.0.0.0")),
        ])

    def test_guest_with_adapters_but_no_addresses_yields_empty_list(self):
        self.assertEqual(extract_nics(guest(adapters=[GuestNic(ip_config=None)])), [])

    def test_skips_are_logged_on_injected_logger(self):
        log = logging.getLogger("test.nics")

        with self.assertLogs(log, level="DEBUG") as cm:
            extract_nics(guest(adapters=[adapter(("999.1.1.1", 24))]), log=log)

        self.assertTrue(any("is not a valid ip address" in line for line in cm.output))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
