"""
Command line entry point.

Meant to be run regularly by cron:
    idb-vmware-sync --config /etc/bytemine/idbvmware.json
"""

import logging
import sys

import click

from idb_vmware import __version__
from idb_vmware.config import DEFAULT_CONFIG_FILE, EXAMPLE_FILENAME, example_settings, load_settings, write_settings
from idb_vmware.errors import IdbVmwareError
from idb_vmware.sync import InventorySync

logger = logging.getLogger("idb_vmware")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )


@click.command()
@click.option("--config", "config_file", default=DEFAULT_CONFIG_FILE, show_default=True,
              type=click.Path(dir_okay=False), help="Config file.")
@click.option("--example", is_flag=True, default=False,
              help=f"Write an example config to {EXAMPLE_FILENAME} in the current dir.")
@click.option("--dryrun", is_flag=True, default=False, help="Do nothing in the IDB.")
@click.version_option(__version__, message="%(version)s")
def main(config_file: str, example: bool, dryrun: bool) -> None:
    """Query virtual machines from VMware vSphere and add them to an IDB."""
    if example:
        try:
            write_settings(EXAMPLE_FILENAME, example_settings())
        except OSError as e:
            raise click.ClickException(f"can't write {EXAMPLE_FILENAME}: {e}")
        click.echo(f"Wrote example config to {EXAMPLE_FILENAME}")
        return

    configure_logging(debug=False)

    try:
        settings = load_settings(config_file)
        configure_logging(debug=settings.debug)
        summary = InventorySync(settings, dry_run=dryrun).run()
    except IdbVmwareError as e:
        logger.error(e.message)
        sys.exit(1)

    logger.info(f"Done: {summary['vms']} VMs, {summary['submitted']} submitted")


if __name__ == "__main__":
    main()
