"""
Runtime-local import path for host faults:

    from mint_vm.runtime.error import VmError

The canonical implementation lives in mint_vm.errors; this module simply
re-exports it so runtime modules can use a relative import.
"""

from mint_vm.errors import VmError

__all__ = ["VmError"]
