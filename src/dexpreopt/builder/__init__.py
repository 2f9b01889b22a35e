"""
dexpreopt Builder Module

Derivations over a BuildContext, each computed once per context:
- global_config: the global dexpreopt config (file, test injection or default)
- targets: architectures to dexpreopt for
- classpath: system server classpath and default bootclasspath
- boot_image: boot image variant construction
- variants: the named boot image variants
- makevars: flattening into make variables
"""

from .global_config import (
    GlobalConfigSource,
    select_global_config_source,
    dexpreopt_global_config,
    dexpreopt_global_config_raw,
    set_dexpreopt_test_global_config,
)
from .targets import dexpreopt_targets
from .boot_image import get_boot_image_config
from .variants import (
    BootImageVariant,
    variant_registry,
    default_boot_image_config,
    apex_boot_image_config,
    art_boot_image_config,
    boot_image_config,
    boot_image_variants,
)
from .classpath import split_apex_jar_pair, system_server_classpath, default_bootclasspath
from .makevars import (
    MakeVarsCollector,
    register_make_vars_provider,
    dexpreopt_config_makevars,
    collect_make_vars,
    format_make_vars,
)

__all__ = [
    'GlobalConfigSource',
    'select_global_config_source',
    'dexpreopt_global_config',
    'dexpreopt_global_config_raw',
    'set_dexpreopt_test_global_config',
    'dexpreopt_targets',
    'get_boot_image_config',
    'BootImageVariant',
    'variant_registry',
    'default_boot_image_config',
    'apex_boot_image_config',
    'art_boot_image_config',
    'boot_image_config',
    'boot_image_variants',
    'split_apex_jar_pair',
    'system_server_classpath',
    'default_bootclasspath',
    'MakeVarsCollector',
    'register_make_vars_provider',
    'dexpreopt_config_makevars',
    'collect_make_vars',
    'format_make_vars',
]
