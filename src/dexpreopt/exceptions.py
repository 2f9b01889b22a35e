class DexpreoptError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to loading and parsing the global configuration file ---
class ConfigurationError(DexpreoptError):
    """Base class for errors encountered while finding, reading, or parsing config files."""

    pass


class ConfigFileMissingError(ConfigurationError):
    """Raised when the global dexpreopt configuration file cannot be found."""

    pass


class ConfigParsingError(ConfigurationError):
    """Raised when a configuration file is syntactically incorrect."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when the configuration fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors related to the logical validity of values within the config ---
class DefinitionError(DexpreoptError):
    """Base class for errors in the values and references resolved from the config."""

    pass


class MalformedApexJarError(DefinitionError):
    """Raised when an updatable jar is not written as <apex>:<jar>."""

    pass


class UnknownVariantError(DefinitionError):
    """Raised when a boot image variant name is not registered."""

    pass


class CircularDependencyError(DefinitionError):
    """Raised when a memoized computation requests its own result while running."""

    pass


class DuplicateMakeVarError(DefinitionError):
    """Raised when a make variable is exported more than once."""

    pass


# --- 3. Errors caused by the caller setting things up in the wrong order ---
class SetupError(DexpreoptError):
    """Base class for misuse of the resolution API."""

    pass


class ConfigAlreadyResolvedError(SetupError):
    """Raised when a test global config is injected after resolution has started."""

    pass
