"""
IDB API client.

Machines are created/updated one at a time through the v3 machines API.
There are no retries: any failure raises IdbSubmissionError and the caller
aborts the run.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
import urllib3

from idb_vmware.errors import IdbSubmissionError
from idb_vmware.models import Machine
from idb_vmware.utils import safe_json_parse

logger = logging.getLogger(__name__)

API_PATH = "/api/v3"
TOKEN_HEADER = "X-IDB-API-Token"
DEFAULT_TIMEOUT = 30


class IdbClient:
    """Client for the IDB machines API."""

    def __init__(self, url: str, token: str, verify_ssl: bool = True,
                 timeout: int = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.url = url.rstrip("/")
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            TOKEN_HEADER: token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

        if not verify_ssl:
            # Suppress SSL warnings for self-signed IDB certificates
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def machine_url(self, fqdn: str) -> str:
        return f"{self.url}{API_PATH}/machines/{quote(fqdn, safe='')}"

    def update_machine(self, machine: Machine, create: bool) -> Dict[str, Any]:
        """
        Update a machine in the IDB.

        Args:
            machine: Machine record, keyed by its fqdn
            create: Create the machine if it doesn't exist

        Returns:
            Machine document returned by the IDB

        Raises:
            IdbSubmissionError: transport error or non-2xx response
        """
        payload = machine.to_idb_payload()
        payload["create_machine"] = create

        url = self.machine_url(machine.fqdn)
        logger.debug(f"PUT {url}")

        try:
            response = self.session.put(url, json=payload, verify=self.verify_ssl, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise IdbSubmissionError(
                f"Failed to update machine {machine.fqdn}: {e}",
                fqdn=machine.fqdn
            ) from e

        body = safe_json_parse(response)
        if not response.ok:
            raise IdbSubmissionError(
                f"IDB rejected machine {machine.fqdn}: HTTP {response.status_code} {body}",
                fqdn=machine.fqdn,
                status_code=response.status_code
            )

        logger.debug(f"IDB updated machine {machine.fqdn}")
        return body
