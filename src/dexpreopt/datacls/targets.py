from enum import Enum
from pydantic import BaseModel, ConfigDict


class OsType(str, Enum):
    ANDROID = "android"
    LINUX_GLIBC = "linux_glibc"
    LINUX_BIONIC = "linux_bionic"
    DARWIN = "darwin"
    WINDOWS = "windows"


class ArchType(str, Enum):
    ARM = "arm"
    ARM64 = "arm64"
    X86 = "x86"
    X86_64 = "x86_64"
    RISCV64 = "riscv64"

    def __str__(self) -> str:
        return self.value


class NativeBridge(str, Enum):
    DISABLED = "disabled"
    ENABLED = "enabled"


class Target(BaseModel):
    """
    One OS/architecture pair the build produces code for.

    `native_bridge` is ENABLED for architectures the device only runs through
    binary translation.
    """
    model_config = ConfigDict(frozen=True)

    os: OsType = OsType.ANDROID
    arch: ArchType
    native_bridge: NativeBridge = NativeBridge.DISABLED

    def __str__(self) -> str:
        suffix = "_native_bridge" if self.native_bridge == NativeBridge.ENABLED else ""
        return f"{self.os.value}_{self.arch.value}{suffix}"
