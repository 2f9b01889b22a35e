"""
dexpreopt configuration resolver

Derives, once per build configuration, what is needed to dexpreopt a
device's bootclasspath and boot images: which jars belong to which boot
image variant, where their compiled outputs live on device and on disk,
and the classpaths exported to make.

Main modules:
- config: Global dexpreopt config model and loader
- cache: Compute-once memoization owned by a build context
- datacls: Targets, build context and boot image records
- builder: Classpath and boot image derivations, make variable export
- utils: Logging setup and list helpers

Quick start example:
```python
from dexpreopt import BuildContext, Target, ArchType, OsType, default_boot_image_config

ctx = BuildContext(
    device_name="generic_arm64",
    targets={OsType.ANDROID: [Target(arch=ArchType.ARM64)]},
    dexpreopt_global_config="out/soong/dexpreopt.config",
)
image = default_boot_image_config(ctx)
print(image.dex_locations)
```
"""

__version__ = "0.3.0"

from .config import GlobalConfig, GlobalConfigAndRaw, load_global_config, parse_global_config
from .cache import OnceKey, OnceCache
from .datacls import OsType, ArchType, NativeBridge, Target, BuildContext, BootImageConfig, stem_of
from .builder import (
    dexpreopt_global_config,
    set_dexpreopt_test_global_config,
    dexpreopt_targets,
    get_boot_image_config,
    default_boot_image_config,
    apex_boot_image_config,
    art_boot_image_config,
    boot_image_config,
    split_apex_jar_pair,
    system_server_classpath,
    default_bootclasspath,
    collect_make_vars,
)
from .exceptions import (
    DexpreoptError,
    ConfigurationError,
    ConfigValidationError,
    DefinitionError,
    MalformedApexJarError,
    SetupError,
)

__all__ = [
    # Version
    '__version__',
    # Config
    'GlobalConfig',
    'GlobalConfigAndRaw',
    'load_global_config',
    'parse_global_config',
    # Cache
    'OnceKey',
    'OnceCache',
    # Data classes
    'OsType',
    'ArchType',
    'NativeBridge',
    'Target',
    'BuildContext',
    'BootImageConfig',
    'stem_of',
    # Derivations
    'dexpreopt_global_config',
    'set_dexpreopt_test_global_config',
    'dexpreopt_targets',
    'get_boot_image_config',
    'default_boot_image_config',
    'apex_boot_image_config',
    'art_boot_image_config',
    'boot_image_config',
    'split_apex_jar_pair',
    'system_server_classpath',
    'default_bootclasspath',
    'collect_make_vars',
    # Exceptions
    'DexpreoptError',
    'ConfigurationError',
    'ConfigValidationError',
    'DefinitionError',
    'MalformedApexJarError',
    'SetupError',
]
