from types import MappingProxyType
from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator
from typing import Dict, Mapping, Optional, Tuple

from .. import constants
from ..utils import join_path
from .targets import ArchType, Target


def stem_of(module_name: str) -> str:
    """Basename of the jar a module installs."""
    return constants.STEM_OVERRIDES.get(module_name, module_name)


class BootImageConfig(BaseModel):
    """
    One boot image variant, fully resolved.

    `modules`, `dex_locations` and `dex_paths` are aligned by index. `images`
    and `images_deps` hold one entry per architecture of `targets` and are
    read-only views. The resulting filenames are <stem>[-<jar>].{art,oat,vdex}.
    """
    model_config = ConfigDict(frozen=True)

    # unique per variant, used in output directory names
    name: str
    stem: str

    modules: Tuple[str, ...] = ()
    # on-device locations of the dex jars
    dex_locations: Tuple[str, ...] = ()
    # build-output locations the dex jars are copied to before compilation
    dex_paths: Tuple[str, ...] = ()

    dir: str
    symbols_dir: str
    zip: Optional[str] = None

    targets: Tuple[Target, ...] = ()
    images: Mapping[ArchType, str] = Field(default_factory=dict)
    images_deps: Mapping[ArchType, Tuple[str, ...]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def freeze_arch_maps(self) -> "BootImageConfig":
        """Replace the per-arch dicts with read-only views"""
        object.__setattr__(self, "images", MappingProxyType(dict(self.images)))
        object.__setattr__(self, "images_deps", MappingProxyType(dict(self.images_deps)))
        return self

    @field_serializer("images")
    def dump_images(self, images: Mapping[ArchType, str]) -> Dict[ArchType, str]:
        return dict(images)

    @field_serializer("images_deps")
    def dump_images_deps(self, images_deps: Mapping[ArchType, Tuple[str, ...]]) -> Dict[ArchType, Tuple[str, ...]]:
        return dict(images_deps)

    def image_dir(self, arch: ArchType) -> str:
        return image_dir_for(self.dir, arch)

    def module_files(self, directory: str, *exts: str) -> Tuple[str, ...]:
        return module_files(directory, self.stem, self.modules, *exts)

    @property
    def archs(self) -> Tuple[ArchType, ...]:
        return tuple(target.arch for target in self.targets)


def image_dir_for(boot_dir: str, arch: ArchType) -> str:
    return join_path(boot_dir, constants.IMAGE_SUBDIR, arch.value)


def module_files(directory: str, stem: str, modules: Tuple[str, ...], *exts: str) -> Tuple[str, ...]:
    """
    Per-module image files under `directory`.

    The first module's files are <stem><ext>, later ones <stem>-<jar><ext>,
    each module contributing one file per extension, in order.
    """
    files = []
    for i, module in enumerate(modules):
        name = stem if i == 0 else f"{stem}-{stem_of(module)}"
        for ext in exts:
            files.append(join_path(directory, name + ext))
    return tuple(files)
