"""vSphere access via pyVmomi"""

from .client import VSphereClient
from .property_collector import VM_PROPERTIES, retrieve_vm_properties, vm_record_from_properties

__all__ = ['VSphereClient', 'VM_PROPERTIES', 'retrieve_vm_properties', 'vm_record_from_properties']
