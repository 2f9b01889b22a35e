import logging
from typing import List

from ..datacls import BuildContext, NativeBridge, OsType, Target

logger = logging.getLogger(__name__)


def dexpreopt_targets(ctx: BuildContext) -> List[Target]:
    """
    Android targets relevant to dexpreopting, in configured order.
    Architectures supported only through native bridge are left out.
    """
    targets = []
    for target in ctx.targets.get(OsType.ANDROID, []):
        if target.native_bridge == NativeBridge.DISABLED:
            targets.append(target)
        else:
            logger.debug(f"Skipping native bridge target {target}")
    return targets
