import logging
from typing import Callable, Dict, List, Protocol

from .. import constants
from ..datacls import BuildContext
from ..exceptions import DuplicateMakeVarError
from .classpath import default_bootclasspath, system_server_classpath
from .variants import default_boot_image_config

logger = logging.getLogger(__name__)


class MakeVarsContext(Protocol):
    """Sink for exported make variables."""

    def strict(self, name: str, value: str) -> None:
        ...


class MakeVarsCollector:
    """MakeVarsContext that keeps the variables in export order."""

    def __init__(self):
        self._vars: Dict[str, str] = {}

    def strict(self, name: str, value: str) -> None:
        if name in self._vars:
            raise DuplicateMakeVarError(f"Make variable '{name}' is exported more than once.")
        self._vars[name] = value

    @property
    def vars(self) -> Dict[str, str]:
        return dict(self._vars)


MakeVarsProvider = Callable[[BuildContext, MakeVarsContext], None]

_providers: List[MakeVarsProvider] = []


def register_make_vars_provider(provider: MakeVarsProvider) -> MakeVarsProvider:
    """Add `provider` to the providers run by `collect_make_vars`. Usable as a decorator."""
    if provider not in _providers:
        _providers.append(provider)
    return provider


def make_vars_providers() -> List[MakeVarsProvider]:
    return list(_providers)


def _join(values) -> str:
    return constants.CLASSPATH_SEPARATOR.join(values)


@register_make_vars_provider
def dexpreopt_config_makevars(ctx: BuildContext, mctx: MakeVarsContext):
    default_image = default_boot_image_config(ctx)

    mctx.strict(constants.MakeVar.PRODUCT_BOOTCLASSPATH.value, _join(default_bootclasspath(ctx)))
    mctx.strict(constants.MakeVar.PRODUCT_DEX2OAT_BOOTCLASSPATH.value, _join(default_image.dex_locations))
    mctx.strict(constants.MakeVar.PRODUCT_SYSTEM_SERVER_CLASSPATH.value, _join(system_server_classpath(ctx)))

    mctx.strict(constants.MakeVar.DEXPREOPT_BOOT_JARS_MODULES.value, _join(default_image.modules))


def collect_make_vars(ctx: BuildContext) -> Dict[str, str]:
    """Run every registered provider for `ctx` and return the exported variables."""
    collector = MakeVarsCollector()
    for provider in _providers:
        provider(ctx, collector)
    logger.debug(f"Collected {len(collector.vars)} make variables")
    return collector.vars


def format_make_vars(make_vars: Dict[str, str]) -> str:
    return "".join(f"{name} := {value}\n" for name, value in make_vars.items())
