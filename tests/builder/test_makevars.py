import pytest

from dexpreopt.builder import (
    MakeVarsCollector,
    collect_make_vars,
    default_bootclasspath,
    default_boot_image_config,
    dexpreopt_config_makevars,
    format_make_vars,
    system_server_classpath,
)
from dexpreopt.builder.makevars import make_vars_providers
from dexpreopt.datacls import BuildContext
from dexpreopt.exceptions import DuplicateMakeVarError, MalformedApexJarError


class TestMakeVars:

    def test_exported_values(self, ctx):
        make_vars = collect_make_vars(ctx)
        image = default_boot_image_config(ctx)
        assert make_vars == {
            "PRODUCT_BOOTCLASSPATH": ":".join(default_bootclasspath(ctx)),
            "PRODUCT_DEX2OAT_BOOTCLASSPATH": ":".join(image.dex_locations),
            "PRODUCT_SYSTEM_SERVER_CLASSPATH": ":".join(system_server_classpath(ctx)),
            "DEXPREOPT_BOOT_JARS_MODULES": ":".join(image.modules),
        }

    def test_system_server_value(self, ctx):
        assert collect_make_vars(ctx)["PRODUCT_SYSTEM_SERVER_CLASSPATH"] == (
            "/system/framework/services.jar:"
            "/system/framework/ethernet-service.jar:"
            "/apex/com.android.wifi/javalib/wifi-service.jar"
        )

    def test_modules_value_starts_with_art(self, ctx):
        assert collect_make_vars(ctx)["DEXPREOPT_BOOT_JARS_MODULES"].startswith("core-oj:core-libart:")

    def test_disabled_config_exports_empty_values(self):
        make_vars = collect_make_vars(BuildContext())
        assert set(make_vars.values()) == {""}

    def test_provider_registered(self):
        assert dexpreopt_config_makevars in make_vars_providers()

    def test_errors_propagate(self, make_ctx):
        ctx = make_ctx({"UpdatableSystemServerJars": ["malformed"]})
        with pytest.raises(MalformedApexJarError):
            collect_make_vars(ctx)

    def test_duplicate_export(self):
        collector = MakeVarsCollector()
        collector.strict("A", "1")
        with pytest.raises(DuplicateMakeVarError):
            collector.strict("A", "2")

    def test_format(self):
        assert format_make_vars({"A": "x:y", "B": ""}) == "A := x:y\nB := \n"
