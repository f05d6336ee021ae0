"""
One sync pass: vCenter VMs -> IDB machines.

VMs are mapped and submitted one at a time in discovery order. Any error
aborts the whole pass; there is no partial-success handling and no retry.
"""

import logging
import time
from typing import Any, Dict, Optional

from idb_vmware.config import Settings
from idb_vmware.idb_client import IdbClient
from idb_vmware.mapping import MachineMapper
from idb_vmware.mapping.fqdn import ReverseLookup
from idb_vmware.vsphere import VSphereClient

logger = logging.getLogger(__name__)


class InventorySync:
    """Runs a single vCenter -> IDB sync pass."""

    def __init__(
        self,
        settings: Settings,
        dry_run: bool = False,
        vsphere: Optional[VSphereClient] = None,
        idb: Optional[IdbClient] = None,
        reverse_lookup: Optional[ReverseLookup] = None,
    ):
        self.settings = settings
        self.dry_run = dry_run
        self.vsphere = vsphere or VSphereClient(settings.vmware_url, verify_ssl=not settings.insecure_skip_verify)
        self.idb = idb
        if self.idb is None and not dry_run:
            self.idb = IdbClient(settings.idb_url, settings.idb_token, verify_ssl=not settings.insecure_skip_verify)
        self.mapper = MachineMapper.from_settings(settings, self.vsphere.host_name, reverse_lookup=reverse_lookup)

    def run(self) -> Dict[str, Any]:
        """
        Map every VM of the default datacenter and submit it to the IDB.

        Returns:
            {"vms": int, "submitted": int, "dry_run": bool, "elapsed_seconds": float}

        Raises:
            IdbVmwareError: the first error of any kind; later VMs are not processed
        """
        start_time = time.time()
        submitted = 0

        if self.dry_run:
            logger.info("Dry run: machines will not be written to the IDB")

        self.vsphere.connect()
        try:
            vms = self.vsphere.list_virtual_machines()
            logger.info(f"Found {len(vms)} virtual machines")

            for vm in vms:
                machine = self.mapper.map_vm(vm)

                if not self.dry_run:
                    self.idb.update_machine(machine, self.settings.create)
                    submitted += 1

                if self.settings.debug:
                    logger.debug(f"VMware machine:\n{vm.model_dump_json(indent=2)}")
                    logger.debug(f"IDB machine:\n{machine.model_dump_json(indent=2, exclude_none=True)}")

                logger.info(f"Mapped {vm.name} -> {machine.fqdn}")
        finally:
            self.vsphere.disconnect()

        elapsed = time.time() - start_time
        logger.info(f"Synced {submitted}/{len(vms)} machines in {elapsed:.2f}s")

        return {
            "vms": len(vms),
            "submitted": submitted,
            "dry_run": self.dry_run,
            "elapsed_seconds": round(elapsed, 2),
        }
