"""
Named boot image variants.

- boot: the image that goes in the system image, ART and framework jars
- apex: used for the JIT-zygote experiment, ART and framework jars with only
  the ART jars AOT-compiled downstream
- art: the image of the ART apex, ART jars only
"""

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..cache import OnceKey
from ..datacls import BootImageConfig, BuildContext
from ..exceptions import DefinitionError, UnknownVariantError
from .boot_image import get_boot_image_config

logger = logging.getLogger(__name__)


class BootImageVariant(BaseModel):
    """Fixed parameters of one named call to `get_boot_image_config`."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: OnceKey = Field(exclude=True)
    name: str
    stem: str
    needs_zip: bool
    art_only: bool

    def resolve(self, ctx: BuildContext) -> BootImageConfig:
        return get_boot_image_config(ctx, self.key, self.name, self.stem, self.needs_zip, self.art_only)


class VariantRegistry:
    """Registry of boot image variants by name, in registration order."""

    def __init__(self):
        self._registry: Dict[str, BootImageVariant] = {}

    def register(self, variant: BootImageVariant) -> BootImageVariant:
        if variant.name in self._registry:
            raise DefinitionError(f"Boot image variant '{variant.name}' is already registered")
        self._registry[variant.name] = variant
        logger.debug(f"Registered boot image variant '{variant.name}'")
        return variant

    def get(self, name: str) -> Optional[BootImageVariant]:
        return self._registry.get(name)

    def names(self) -> List[str]:
        return list(self._registry)

    @property
    def registry(self) -> Dict[str, BootImageVariant]:
        return self._registry


variant_registry = VariantRegistry()

DEFAULT_VARIANT = variant_registry.register(BootImageVariant(
    key=OnceKey("defaultBootImageConfig"), name="boot", stem="boot", needs_zip=True, art_only=False,
))
APEX_VARIANT = variant_registry.register(BootImageVariant(
    key=OnceKey("apexBootImageConfig"), name="apex", stem="apex", needs_zip=False, art_only=False,
))
ART_VARIANT = variant_registry.register(BootImageVariant(
    key=OnceKey("artBootImageConfig"), name="art", stem="boot", needs_zip=False, art_only=True,
))


def default_boot_image_config(ctx: BuildContext) -> BootImageConfig:
    return DEFAULT_VARIANT.resolve(ctx)


def apex_boot_image_config(ctx: BuildContext) -> BootImageConfig:
    return APEX_VARIANT.resolve(ctx)


def art_boot_image_config(ctx: BuildContext) -> BootImageConfig:
    return ART_VARIANT.resolve(ctx)


def boot_image_variants() -> List[BootImageVariant]:
    return list(variant_registry.registry.values())


def boot_image_config(ctx: BuildContext, variant_name: str) -> BootImageConfig:
    """
    Resolve a variant by name.

    Raises:
        UnknownVariantError: no variant is registered under `variant_name`
    """
    variant = variant_registry.get(variant_name)
    if variant is None:
        raise UnknownVariantError(
            f"Unknown boot image variant '{variant_name}', expected one of: {', '.join(variant_registry.names())}"
        )
    return variant.resolve(ctx)
