import json
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union
from pydantic import BaseModel, Field, ValidationError, model_validator, ConfigDict

from . import constants
from .exceptions import (
    ConfigParsingError,
    ConfigFileMissingError,
    ConfigValidationError,
)


logger = logging.getLogger(__name__)


class GlobalConfig(BaseModel):
    """
        Class Config-Validation Model describing the global dexpreopt.config

    Attribute names are snake_case; the PascalCase keys written by the build
    are accepted as aliases.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    disable_preopt: bool = Field(False, alias="DisablePreopt")
    disable_generate_profile: bool = Field(False, alias="DisableGenerateProfile")
    only_preopt_boot_image_and_system_server: bool = Field(False, alias="OnlyPreoptBootImageAndSystemServer")
    generate_apex_image: bool = Field(False, alias="GenerateApexImage")
    use_apex_image: bool = Field(False, alias="UseApexImage")
    has_system_other: bool = Field(False, alias="HasSystemOther")

    # ART apex jars come first on the bootclasspath
    art_apex_jars: Tuple[str, ...] = Field(default=(), alias="ArtApexJars")
    boot_jars: Tuple[str, ...] = Field(default=(), alias="BootJars")
    product_updatable_boot_modules: Tuple[str, ...] = Field(default=(), alias="ProductUpdatableBootModules")
    product_updatable_boot_locations: Tuple[str, ...] = Field(default=(), alias="ProductUpdatableBootLocations")
    system_server_jars: Tuple[str, ...] = Field(default=(), alias="SystemServerJars")
    # <apex>:<jar>
    updatable_system_server_jars: Tuple[str, ...] = Field(default=(), alias="UpdatableSystemServerJars")

    boot_image_profiles: Tuple[str, ...] = Field(default=(), alias="BootImageProfiles")
    dirty_image_objects: Optional[str] = Field(None, alias="DirtyImageObjects")
    default_compiler_filter: Optional[str] = Field(None, alias="DefaultCompilerFilter")
    system_server_compiler_filter: Optional[str] = Field(None, alias="SystemServerCompilerFilter")

    @model_validator(mode='after')
    def check_module_lists_unique(self) -> 'GlobalConfig':
        """A module may appear only once per list"""
        for field_name in (
            "art_apex_jars",
            "boot_jars",
            "product_updatable_boot_modules",
            "system_server_jars",
            "updatable_system_server_jars",
        ):
            seen = set()
            duplicates = []
            for module in getattr(self, field_name):
                if module in seen and module not in duplicates:
                    duplicates.append(module)
                seen.add(module)
            if duplicates:
                alias = type(self).model_fields[field_name].alias
                raise ConfigValidationError(f"Duplicate modules found in '{alias}': {', '.join(duplicates)}")
        return self

    @classmethod
    def disabled(cls) -> 'GlobalConfig':
        """Config used when no file is given: preopting and profile generation off."""
        return cls(disable_preopt=True, disable_generate_profile=True)


class GlobalConfigAndRaw(BaseModel):
    """The parsed global config together with the bytes it was read from."""
    model_config = ConfigDict(frozen=True)

    global_config: GlobalConfig
    data: Optional[bytes] = None


def parse_global_config(data: Union[bytes, str], source: str = "<memory>") -> GlobalConfig:
    """
    Parse and validate a global config document.

    Documents whose source ends in `.json` are decoded as JSON, everything
    else as YAML.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigParsingError(f"Configuration file '{source}' is not valid UTF-8: {e}")

    try:
        if Path(source).suffix in constants.JSON_CONFIG_SUFFIXES:
            raw: Any = json.loads(data)
        else:
            raw = yaml.safe_load(data)
    except json.JSONDecodeError as e:
        raise ConfigParsingError(f"Error parsing JSON file '{source}': {e}")
    except yaml.YAMLError as e:
        raise ConfigParsingError(f"Error parsing YAML file '{source}': {e}")

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigParsingError(f"Configuration file '{source}' must contain a mapping at top level.")

    try:
        config = GlobalConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Configuration validation failed for '{source}':\n{e}")
    logger.debug(f"Global config '{source}' validated: {len(config.boot_jars)} boot jars, "
                 f"{len(config.art_apex_jars)} ART jars, {len(config.system_server_jars)} system server jars")
    return config


def load_global_config(path: Union[str, Path]) -> Tuple[GlobalConfig, bytes]:
    """
    Load the global dexpreopt config from `path`.

    Returns:
        The validated config and the raw file contents.

    Raises:
        ConfigFileMissingError: the file does not exist
        ConfigParsingError: the file is not valid JSON/YAML
        ConfigValidationError: the content does not describe a GlobalConfig
    """
    path = Path(path)
    logger.info(f"Loading global dexpreopt config from '{path}'...")
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        raise ConfigFileMissingError(f"Global dexpreopt config not found at: {path}")
    except IsADirectoryError:
        raise ConfigFileMissingError(f"Global dexpreopt config path is a directory: {path}")
    return parse_global_config(data, str(path)), data


def dump_global_config(config: GlobalConfig) -> Dict[str, Any]:
    """Serialize a config with the same keys the build writes."""
    return config.model_dump(by_alias=True, mode="json")
