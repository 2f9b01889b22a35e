import threading

import pytest
from pydantic import ValidationError

from dexpreopt.builder import boot_image as boot_image_module
from dexpreopt.builder import (
    apex_boot_image_config,
    art_boot_image_config,
    default_boot_image_config,
    get_boot_image_config,
)
from dexpreopt.cache import OnceKey
from dexpreopt.datacls import ArchType, BuildContext, stem_of

from conftest import ART_JARS, FRAMEWORK_JARS


class TestModulePartitioning:

    def test_default_is_art_then_framework(self, ctx):
        image = default_boot_image_config(ctx)
        assert image.modules == tuple(ART_JARS + FRAMEWORK_JARS)

    def test_product_updatable_modules_excluded(self, ctx):
        assert "updatable-media" not in default_boot_image_config(ctx).modules

    def test_art_listed_in_boot_jars_not_duplicated(self, make_ctx):
        ctx = make_ctx({"ArtApexJars": ["core-oj"], "BootJars": ["framework", "core-oj", "ext"]})
        assert default_boot_image_config(ctx).modules == ("core-oj", "framework", "ext")

    def test_art_only_variant(self, ctx):
        assert art_boot_image_config(ctx).modules == tuple(ART_JARS)

    def test_apex_variant_has_same_modules_as_default(self, ctx):
        assert apex_boot_image_config(ctx).modules == default_boot_image_config(ctx).modules

    def test_disabled_default_config_is_empty(self):
        image = default_boot_image_config(BuildContext())
        assert image.modules == ()
        assert image.dex_locations == ()


class TestLocations:

    def test_aligned_sequences(self, ctx):
        for image in (default_boot_image_config(ctx), apex_boot_image_config(ctx), art_boot_image_config(ctx)):
            assert len(image.modules) == len(image.dex_locations) == len(image.dex_paths)
            for module, location, path in zip(image.modules, image.dex_locations, image.dex_paths):
                assert location.endswith("/" + stem_of(module) + ".jar")
                assert path.endswith("/" + module + ".jar")

    def test_dex_locations(self, ctx):
        locations = default_boot_image_config(ctx).dex_locations
        assert locations[0] == "/apex/com.android.art/javalib/core-oj.jar"
        assert locations[len(ART_JARS)] == "/system/framework/framework.jar"
        assert locations[-1] == "/system/framework/ims-common.jar"

    def test_framework_minus_apex_stem(self, ctx):
        for image in (default_boot_image_config(ctx), apex_boot_image_config(ctx)):
            index = image.modules.index("framework-minus-apex")
            assert image.dex_locations[index] == "/system/framework/framework.jar"
            assert image.dex_paths[index].endswith("/framework-minus-apex.jar")

    def test_framework_minus_apex_in_art_set(self, make_ctx):
        ctx = make_ctx({"ArtApexJars": ["framework-minus-apex"]})
        assert art_boot_image_config(ctx).dex_locations == ("/apex/com.android.art/javalib/framework.jar",)

    def test_leading_slash_module_stays_under_its_dir(self, make_ctx):
        ctx = make_ctx({"ArtApexJars": ["/core-oj"], "BootJars": ["/core-oj", "/ext"]})
        image = default_boot_image_config(ctx)
        assert image.dex_locations == (
            "/apex/com.android.art/javalib/core-oj.jar",
            "/system/framework/ext.jar",
        )
        assert image.dex_paths[1] == "out/generic_arm64/dex_bootjars_input/ext.jar"

    def test_dex_paths(self, ctx):
        assert default_boot_image_config(ctx).dex_paths[0] == "out/generic_arm64/dex_bootjars_input/core-oj.jar"
        assert art_boot_image_config(ctx).dex_paths[0] == "out/generic_arm64/dex_artjars_input/core-oj.jar"

    def test_output_dirs(self, ctx):
        image = apex_boot_image_config(ctx)
        assert image.dir == "out/generic_arm64/dex_apexjars"
        assert image.symbols_dir == "out/generic_arm64/dex_apexjars_unstripped"


class TestZip:

    def test_only_default_has_zip(self, ctx):
        assert default_boot_image_config(ctx).zip == "out/generic_arm64/dex_bootjars/boot.zip"
        assert apex_boot_image_config(ctx).zip is None
        assert art_boot_image_config(ctx).zip is None


class TestImages:

    def test_images_per_target(self, ctx):
        image = default_boot_image_config(ctx)
        assert image.archs == (ArchType.ARM64, ArchType.ARM)
        assert image.images == {
            ArchType.ARM64: "out/generic_arm64/dex_bootjars/system/framework/arm64/boot.art",
            ArchType.ARM: "out/generic_arm64/dex_bootjars/system/framework/arm/boot.art",
        }

    def test_native_bridge_has_no_image(self, make_ctx, global_config):
        ctx = make_ctx(global_config, archs=(ArchType.X86_64,), native_bridge_archs=(ArchType.ARM64,))
        image = default_boot_image_config(ctx)
        assert list(image.images) == [ArchType.X86_64]
        assert list(image.images_deps) == [ArchType.X86_64]

    def test_images_deps(self, ctx):
        image = art_boot_image_config(ctx)
        deps = image.images_deps[ArchType.ARM64]
        image_dir = "out/generic_arm64/dex_artjars/system/framework/arm64"
        assert len(deps) == 3 * len(image.modules)
        assert deps[0] == image.images[ArchType.ARM64]
        assert deps[:6] == (
            f"{image_dir}/boot.art",
            f"{image_dir}/boot.oat",
            f"{image_dir}/boot.vdex",
            f"{image_dir}/boot-core-libart.art",
            f"{image_dir}/boot-core-libart.oat",
            f"{image_dir}/boot-core-libart.vdex",
        )
        assert deps == image.module_files(image.image_dir(ArchType.ARM64), ".art", ".oat", ".vdex")

    def test_images_deps_use_stem_override(self, ctx):
        deps = default_boot_image_config(ctx).images_deps[ArchType.ARM]
        assert "out/generic_arm64/dex_bootjars/system/framework/arm/boot-framework.oat" in deps

    def test_apex_stem(self, ctx):
        assert apex_boot_image_config(ctx).images[ArchType.ARM].endswith("/apex.art")


class TestMemoization:

    def test_same_object_each_call(self, ctx):
        assert default_boot_image_config(ctx) is default_boot_image_config(ctx)
        assert art_boot_image_config(ctx) is art_boot_image_config(ctx)

    def test_variants_are_distinct(self, ctx):
        assert default_boot_image_config(ctx) is not apex_boot_image_config(ctx)

    def test_immutable(self, ctx):
        image = default_boot_image_config(ctx)
        with pytest.raises(ValidationError):
            image.stem = "other"

    def test_arch_maps_are_read_only(self, ctx):
        image = default_boot_image_config(ctx)
        expected_image = image.images[ArchType.ARM64]
        expected_deps = image.images_deps[ArchType.ARM64]

        with pytest.raises(TypeError):
            image.images[ArchType.ARM64] = "corrupted"
        with pytest.raises(TypeError):
            image.images_deps[ArchType.ARM64] = ()
        with pytest.raises(TypeError):
            del image.images[ArchType.ARM]

        again = default_boot_image_config(ctx)
        assert again.images[ArchType.ARM64] == expected_image
        assert again.images_deps[ArchType.ARM64] == expected_deps

    def test_sequences_are_tuples(self, ctx):
        image = default_boot_image_config(ctx)
        for sequence in (image.modules, image.dex_locations, image.dex_paths, image.targets,
                         *image.images_deps.values()):
            assert isinstance(sequence, tuple)

    def test_dump_gives_plain_dicts(self, ctx):
        dumped = default_boot_image_config(ctx).model_dump(mode="json")
        assert dumped["images"]["arm"] == "out/generic_arm64/dex_bootjars/system/framework/arm/boot.art"
        assert isinstance(dumped["images_deps"]["arm64"], list)

    def test_key_identity_controls_caching(self, ctx):
        key = OnceKey("custom")
        first = get_boot_image_config(ctx, key, "custom", "custom", False, True)
        second = get_boot_image_config(ctx, key, "ignored", "ignored", True, False)
        assert first is second
        assert second.name == "custom"

    def test_concurrent_first_access_builds_once(self, ctx, monkeypatch):
        calls = []
        original = boot_image_module._build_boot_image_config

        def counting(*args, **kwargs):
            calls.append(1)
            return original(*args, **kwargs)

        monkeypatch.setattr(boot_image_module, "_build_boot_image_config", counting)

        start = threading.Barrier(6)
        results = []

        def worker():
            start.wait()
            results.append(default_boot_image_config(ctx))

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert all(r is results[0] for r in results)
