import logging
from enum import Enum
from typing import Optional

from ..cache import OnceKey
from ..config import GlobalConfig, GlobalConfigAndRaw, load_global_config
from ..datacls import BuildContext
from ..exceptions import ConfigAlreadyResolvedError

logger = logging.getLogger(__name__)

GLOBAL_CONFIG_KEY = OnceKey("DexpreoptGlobalConfig")
TEST_GLOBAL_CONFIG_KEY = OnceKey("TestDexpreoptGlobalConfig")


class GlobalConfigSource(str, Enum):
    FILE = "file"
    TEST = "test"
    DEFAULT = "default"


def select_global_config_source(config_path: Optional[str], has_test_config: bool) -> GlobalConfigSource:
    """
    Pick where the global config comes from.

    A configured file always wins, then a config injected by a test, then the
    built-in default with preopting disabled.
    """
    if config_path:
        return GlobalConfigSource.FILE
    if has_test_config:
        return GlobalConfigSource.TEST
    return GlobalConfigSource.DEFAULT


def dexpreopt_global_config_raw(ctx: BuildContext) -> GlobalConfigAndRaw:
    """
    The global config and its raw bytes, loaded the first time it is requested
    for `ctx` and shared by every later call.
    """
    return ctx.once(GLOBAL_CONFIG_KEY, lambda: _resolve_global_config(ctx))


def dexpreopt_global_config(ctx: BuildContext) -> GlobalConfig:
    return dexpreopt_global_config_raw(ctx).global_config


def set_dexpreopt_test_global_config(ctx: BuildContext, global_config: GlobalConfig):
    """
    Register the GlobalConfig that `dexpreopt_global_config` returns for `ctx`
    when no config file is set. Must be called before the first resolution.

    Raises:
        ConfigAlreadyResolvedError: resolution has started or finished for
            `ctx`, or a test config is already registered
    """
    registered = ctx.cache.try_insert(
        TEST_GLOBAL_CONFIG_KEY,
        GlobalConfigAndRaw(global_config=global_config),
        blocked_by=(GLOBAL_CONFIG_KEY,),
    )
    if not registered:
        raise ConfigAlreadyResolvedError(
            "The dexpreopt global config is already resolved, being resolved, or has a test "
            "config for this context; inject the test config once, before the first lookup."
        )
    logger.debug("Registered test dexpreopt global config")


def _resolve_global_config(ctx: BuildContext) -> GlobalConfigAndRaw:
    source = select_global_config_source(
        ctx.dexpreopt_global_config, ctx.cache.contains(TEST_GLOBAL_CONFIG_KEY)
    )
    logger.debug(f"Resolving dexpreopt global config from source '{source.value}'")

    if source is GlobalConfigSource.FILE:
        path = ctx.dexpreopt_global_config
        ctx.add_file_deps(path)
        global_config, data = load_global_config(path)
        return GlobalConfigAndRaw(global_config=global_config, data=data)

    if source is GlobalConfigSource.TEST:
        return ctx.cache.peek(TEST_GLOBAL_CONFIG_KEY)

    logger.info("No dexpreopt global config set, preopting is disabled")
    return GlobalConfigAndRaw(global_config=GlobalConfig.disabled())
