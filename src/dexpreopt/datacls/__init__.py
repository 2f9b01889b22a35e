"""
dexpreopt Data Classes

- targets: OsType, ArchType, NativeBridge and Target
- contexts: BuildContext, the owner of per-build cached values
- images: BootImageConfig, one resolved boot image variant
"""

from .targets import OsType, ArchType, NativeBridge, Target
from .contexts import BuildContext
from .images import BootImageConfig, stem_of, module_files

__all__ = [
    'OsType',
    'ArchType',
    'NativeBridge',
    'Target',
    'BuildContext',
    'BootImageConfig',
    'stem_of',
    'module_files',
]
