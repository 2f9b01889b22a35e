import logging

import pytest

from dexpreopt.builder import set_dexpreopt_test_global_config
from dexpreopt.config import GlobalConfig
from dexpreopt.datacls import ArchType, BuildContext, NativeBridge, OsType, Target

ART_JARS = ["core-oj", "core-libart", "okhttp", "bouncycastle", "apache-xml"]
FRAMEWORK_JARS = ["framework-minus-apex", "ext", "telephony-common", "voip-common", "ims-common"]

BASE_CONFIG = {
    "DisablePreopt": False,
    "ArtApexJars": ART_JARS,
    "BootJars": ART_JARS + FRAMEWORK_JARS + ["updatable-media"],
    "ProductUpdatableBootModules": ["updatable-media"],
    "ProductUpdatableBootLocations": ["/apex/com.android.media/javalib/updatable-media.jar"],
    "SystemServerJars": ["services", "ethernet-service"],
    "UpdatableSystemServerJars": ["com.android.wifi:wifi-service"],
}


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by setup_logger so CLI tests don't leak streams."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def global_config() -> GlobalConfig:
    return GlobalConfig.model_validate(BASE_CONFIG)


@pytest.fixture
def make_ctx():
    """Factory for build contexts with an injected test global config."""
    def _make(config=None, archs=(ArchType.ARM64, ArchType.ARM), native_bridge_archs=(), **kwargs) -> BuildContext:
        targets = [Target(arch=arch) for arch in archs]
        targets += [Target(arch=arch, native_bridge=NativeBridge.ENABLED) for arch in native_bridge_archs]
        kwargs.setdefault("device_name", "generic_arm64")
        kwargs.setdefault("out_dir", "out")
        ctx = BuildContext(targets={OsType.ANDROID: targets}, **kwargs)
        if config is not None:
            if isinstance(config, dict):
                config = GlobalConfig.model_validate(config)
            set_dexpreopt_test_global_config(ctx, config)
        return ctx
    return _make


@pytest.fixture
def ctx(make_ctx, global_config) -> BuildContext:
    return make_ctx(global_config)
