import logging

from .. import constants
from ..cache import OnceKey
from ..datacls import BootImageConfig, BuildContext, module_files, stem_of
from ..datacls.images import image_dir_for
from ..utils import concat, join_path, remove_list_from_list
from .global_config import dexpreopt_global_config
from .targets import dexpreopt_targets

logger = logging.getLogger(__name__)


def get_boot_image_config(ctx: BuildContext, key: OnceKey, name: str, stem: str,
                          needs_zip: bool, art_only: bool) -> BootImageConfig:
    """
    Construct a variant of the global config for dexpreopted bootclasspath jars.

    Variants differ in their input jars (ART only, or ART plus framework), in
    the naming scheme of their outputs, and in whether a zip archive is made.
    The result is built once per (ctx, key) and shared afterwards.

    Args:
        key: cache slot of the variant
        name: unique per variant, used in output directory names
        stem: basename of the image, files are <stem>[-<jar>].{art,oat,vdex}
        needs_zip: add <dir>/<stem>.zip
        art_only: leave out the framework jars
    """
    return ctx.once(key, lambda: _build_boot_image_config(ctx, name, stem, needs_zip, art_only))


def _build_boot_image_config(ctx: BuildContext, name: str, stem: str,
                             needs_zip: bool, art_only: bool) -> BootImageConfig:
    global_config = dexpreopt_global_config(ctx)

    art_modules = list(global_config.art_apex_jars)
    image_modules = list(art_modules)

    boot_locations = []
    for module in art_modules:
        boot_locations.append(join_path(constants.ART_APEX_JAVALIB_DIR, stem_of(module) + constants.JAR_SUFFIX))

    if not art_only:
        non_framework_modules = concat(art_modules, global_config.product_updatable_boot_modules)
        framework_modules = remove_list_from_list(global_config.boot_jars, non_framework_modules)
        image_modules = concat(image_modules, framework_modules)

        for module in framework_modules:
            boot_locations.append(join_path(constants.SYSTEM_FRAMEWORK_DIR, stem_of(module) + constants.JAR_SUFFIX))

    # Known locations the bootclasspath jars are copied to before they are compiled
    input_dir = constants.BOOT_JARS_INPUT_DIR_TEMPLATE.format(name=name)
    boot_dex_paths = [
        ctx.path_for_device_output(input_dir, module + constants.JAR_SUFFIX)
        for module in image_modules
    ]

    boot_dir = ctx.path_for_device_output(constants.BOOT_JARS_DIR_TEMPLATE.format(name=name))
    symbols_dir = ctx.path_for_device_output(constants.BOOT_JARS_SYMBOLS_DIR_TEMPLATE.format(name=name))

    zip_path = join_path(boot_dir, stem + constants.ZIP_SUFFIX) if needs_zip else None

    targets = dexpreopt_targets(ctx)
    images = {}
    images_deps = {}
    for target in targets:
        image_dir = image_dir_for(boot_dir, target.arch)
        images[target.arch] = join_path(image_dir, stem + constants.IMAGE_SUFFIX)
        images_deps[target.arch] = module_files(image_dir, stem, tuple(image_modules), *constants.IMAGE_DEP_SUFFIXES)

    logger.debug(f"Boot image '{name}': {len(image_modules)} modules, "
                 f"archs [{', '.join(str(t.arch) for t in targets)}]")

    return BootImageConfig(
        name=name,
        stem=stem,
        modules=tuple(image_modules),
        dex_locations=tuple(boot_locations),
        dex_paths=tuple(boot_dex_paths),
        dir=boot_dir,
        symbols_dir=symbols_dir,
        zip=zip_path,
        targets=tuple(targets),
        images=images,
        images_deps=images_deps,
    )
