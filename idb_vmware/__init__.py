"""
idb-vmware-sync - VMware vSphere inventory sync for the IDB.

Reads every virtual machine of a vCenter datacenter and pushes one
normalized machine record per VM into an IDB instance:
- FQDN derivation (guest host name, reverse DNS, VM name)
- Guest OS identification
- Network interfaces with IPv4 netmasks / IPv6 prefixes
- CPU, RAM, committed disk space and hosting ESXi server
"""

__version__ = "0.1.0"
__author__ = "bytemine"
