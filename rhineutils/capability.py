"""Linux capability numbers and the helpers that map them to bit masks."""

from __future__ import annotations

LINUX_CAPABILITY_VERSION_1 = 0x19980330
LINUX_CAPABILITY_U32S_1 = 1
LINUX_CAPABILITY_VERSION_2 = 0x20071026
LINUX_CAPABILITY_U32S_2 = 2
LINUX_CAPABILITY_VERSION_3 = 0x20080522
LINUX_CAPABILITY_U32S_3 = 2

LINUX_CAPABILITY_VERSION = LINUX_CAPABILITY_VERSION_1
LINUX_CAPABILITY_U32S = LINUX_CAPABILITY_U32S_1

_LE32_SIZE = 4

VFS_CAP_REVISION_MASK = 0xFF000000
VFS_CAP_REVISION_SHIFT = 24
VFS_CAP_FLAGS_MASK = ~VFS_CAP_REVISION_MASK & 0xFFFFFFFF
VFS_CAP_FLAGS_EFFECTIVE = 0x000001
VFS_CAP_REVISION_1 = 0x01000000
VFS_CAP_U32_1 = 1
XATTR_CAPS_SZ_1 = _LE32_SIZE * (1 + 2 * VFS_CAP_U32_1)
VFS_CAP_REVISION_2 = 0x02000000
VFS_CAP_U32_2 = 2
XATTR_CAPS_SZ_2 = _LE32_SIZE * (1 + 2 * VFS_CAP_U32_2)
XATTR_CAPS_SZ = XATTR_CAPS_SZ_2
VFS_CAP_U32 = VFS_CAP_U32_2
VFS_CAP_REVISION = VFS_CAP_REVISION_2

CAP_CHOWN = 0
CAP_DAC_OVERRIDE = 1
CAP_DAC_READ_SEARCH = 2
CAP_FOWNER = 3
CAP_FSETID = 4
CAP_KILL = 5
CAP_SETGID = 6
CAP_SETUID = 7
CAP_SETPCAP = 8
CAP_LINUX_IMMUTABLE = 9
CAP_NET_BIND_SERVICE = 10
CAP_NET_BROADCAST = 11
CAP_NET_ADMIN = 12
CAP_NET_RAW = 13
CAP_IPC_LOCK = 14
CAP_IPC_OWNER = 15
CAP_SYS_MODULE = 16
CAP_SYS_RAWIO = 17
CAP_SYS_CHROOT = 18
CAP_SYS_PTRACE = 19
CAP_SYS_PACCT = 20
CAP_SYS_ADMIN = 21
CAP_SYS_BOOT = 22
CAP_SYS_NICE = 23
CAP_SYS_RESOURCE = 24
CAP_SYS_TIME = 25
CAP_SYS_TTY_CONFIG = 26
CAP_MKNOD = 27
CAP_LEASE = 28
CAP_AUDIT_WRITE = 29
CAP_AUDIT_CONTROL = 30
CAP_SETFCAP = 31
CAP_MAC_OVERRIDE = 32
CAP_MAC_ADMIN = 33
CAP_SYSLOG = 34
CAP_WAKE_ALARM = 35
CAP_LAST_CAP = CAP_WAKE_ALARM


def cap_valid(cap):
    """Return whether cap is a known capability number."""
    return 0 <= cap <= CAP_LAST_CAP


def cap_to_index(cap):
    """Return which 32-bit word of a capability set holds cap."""
    return cap >> 5


def cap_to_mask(cap):
    """Return the bit for cap within its 32-bit word."""
    return 1 << (cap & 31)