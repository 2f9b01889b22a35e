from enum import Enum

# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "gc": "dexpreopt.builder.global_config",
    "global": "dexpreopt.builder.global_config",
    "tgt": "dexpreopt.builder.targets",
    "cp": "dexpreopt.builder.classpath",
    "img": "dexpreopt.builder.boot_image",
    "image": "dexpreopt.builder.boot_image",
    "var": "dexpreopt.builder.variants",
    "mk": "dexpreopt.builder.makevars",
    "conf": "dexpreopt.config",
    "once": "dexpreopt.cache.once",
    "cache": "dexpreopt.cache",
}

# Top-level modules within dexpreopt for auto-prefixing
KNOWN_TOP_MODULES = {
    "builder",
    "cache",
    "datacls",
    "utils",
    "exceptions",
    "config",
    "cli",
}

LOG_LEVELS_ENV = "DEXPREOPT_LOG_LEVELS"


# --- On-device locations ---
SYSTEM_FRAMEWORK_DIR = "/system/framework"
APEX_ROOT = "/apex"
APEX_JAVALIB_SUBDIR = "javalib"
ART_APEX_NAME = "com.android.art"
ART_APEX_JAVALIB_DIR = f"{APEX_ROOT}/{ART_APEX_NAME}/{APEX_JAVALIB_SUBDIR}"

APEX_JAR_SEPARATOR = ":"
CLASSPATH_SEPARATOR = ":"
JAR_SUFFIX = ".jar"


# --- Boot image outputs ---
# dex_<name>jars, dex_<name>jars_input, dex_<name>jars_unstripped
BOOT_JARS_DIR_TEMPLATE = "dex_{name}jars"
BOOT_JARS_INPUT_DIR_TEMPLATE = "dex_{name}jars_input"
BOOT_JARS_SYMBOLS_DIR_TEMPLATE = "dex_{name}jars_unstripped"
IMAGE_SUBDIR = "system/framework"

IMAGE_SUFFIX = ".art"
OAT_SUFFIX = ".oat"
VDEX_SUFFIX = ".vdex"
ZIP_SUFFIX = ".zip"
IMAGE_DEP_SUFFIXES = (IMAGE_SUFFIX, OAT_SUFFIX, VDEX_SUFFIX)

# Modules whose installed artifact is not named after the module.
STEM_OVERRIDES = {
    "framework-minus-apex": "framework",
}


# --- Make variables ---
class MakeVar(str, Enum):
    PRODUCT_BOOTCLASSPATH = "PRODUCT_BOOTCLASSPATH"
    PRODUCT_DEX2OAT_BOOTCLASSPATH = "PRODUCT_DEX2OAT_BOOTCLASSPATH"
    PRODUCT_SYSTEM_SERVER_CLASSPATH = "PRODUCT_SYSTEM_SERVER_CLASSPATH"
    DEXPREOPT_BOOT_JARS_MODULES = "DEXPREOPT_BOOT_JARS_MODULES"


# --- Config files ---
JSON_CONFIG_SUFFIXES = {".json"}
DEFAULT_DEVICE_NAME = "generic"
DEFAULT_OUT_DIR = "out"
