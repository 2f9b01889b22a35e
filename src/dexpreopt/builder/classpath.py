import logging
from typing import Tuple

from .. import constants
from ..cache import OnceKey
from ..datacls import BuildContext
from ..exceptions import MalformedApexJarError
from ..utils import copy_of, join_path
from .global_config import dexpreopt_global_config
from .variants import default_boot_image_config

logger = logging.getLogger(__name__)

SYSTEM_SERVER_CLASSPATH_KEY = OnceKey("systemServerClasspath")
DEFAULT_BOOTCLASSPATH_KEY = OnceKey("defaultBootclasspath")


def split_apex_jar_pair(apex_jar_value: str) -> Tuple[str, str]:
    """
    Split "<apex>:<jar>" on its first colon.

    Raises:
        MalformedApexJarError: the value has no colon or an empty side
    """
    apex, sep, jar = apex_jar_value.partition(constants.APEX_JAR_SEPARATOR)
    if not sep or not apex or not jar:
        raise MalformedApexJarError(
            f"malformed apexJarValue: {apex_jar_value!r}, expected format: <apex>:<jar>"
        )
    return apex, jar


def system_server_classpath(ctx: BuildContext) -> Tuple[str, ...]:
    """
    On-device locations of the system server jars: platform jars from
    /system/framework first, then the updatable ones from their apexes.
    Computed once per context.
    """
    return ctx.once(SYSTEM_SERVER_CLASSPATH_KEY, lambda: _system_server_classpath(ctx))


def _system_server_classpath(ctx: BuildContext) -> Tuple[str, ...]:
    global_config = dexpreopt_global_config(ctx)

    locations = []
    for module in global_config.system_server_jars:
        locations.append(join_path(constants.SYSTEM_FRAMEWORK_DIR, module + constants.JAR_SUFFIX))
    for value in global_config.updatable_system_server_jars:
        apex, jar = split_apex_jar_pair(value)
        locations.append(join_path(
            constants.APEX_ROOT, apex, constants.APEX_JAVALIB_SUBDIR, jar + constants.JAR_SUFFIX
        ))
    logger.debug(f"System server classpath has {len(locations)} entries")
    return tuple(locations)


def default_bootclasspath(ctx: BuildContext) -> Tuple[str, ...]:
    """
    The device bootclasspath: the default boot image's jars followed by the
    product-updatable boot locations. Computed once per context.
    """
    return ctx.once(DEFAULT_BOOTCLASSPATH_KEY, lambda: _default_bootclasspath(ctx))


def _default_bootclasspath(ctx: BuildContext) -> Tuple[str, ...]:
    global_config = dexpreopt_global_config(ctx)
    image = default_boot_image_config(ctx)
    bootclasspath = copy_of(image.dex_locations)
    bootclasspath.extend(global_config.product_updatable_boot_locations)
    return tuple(bootclasspath)
