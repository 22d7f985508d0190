"""Android user and group ids and the default ownership of filesystem paths."""

from __future__ import annotations

from dataclasses import dataclass

from rhineutils.capability import CAP_SETGID, CAP_SETUID

AID_ROOT = 0
AID_SYSTEM = 1000
AID_RADIO = 1001
AID_BLUETOOTH = 1002
AID_GRAPHICS = 1003
AID_INPUT = 1004
AID_AUDIO = 1005
AID_CAMERA = 1006
AID_LOG = 1007
AID_COMPASS = 1008
AID_MOUNT = 1009
AID_WIFI = 1010
AID_ADB = 1011
AID_INSTALL = 1012
AID_MEDIA = 1013
AID_DHCP = 1014
AID_SDCARD_RW = 1015
AID_VPN = 1016
AID_KEYSTORE = 1017
AID_USB = 1018
AID_DRM = 1019
AID_MDNSR = 1020
AID_GPS = 1021
AID_UNUSED1 = 1022
AID_MEDIA_RW = 1023
AID_MTP = 1024
AID_UNUSED2 = 1025
AID_DRMRPC = 1026
AID_NFC = 1027
AID_SDCARD_R = 1028
AID_CLAT = 1029
AID_LOOP_RADIO = 1030
AID_MEDIA_DRM = 1031
AID_PACKAGE_INFO = 1032
AID_SDCARD_PICS = 1033
AID_SDCARD_AV = 1034
AID_SDCARD_ALL = 1035
AID_AUDIT = 1036

AID_THEMEMAN = 1300

AID_SHELL = 2000
AID_CACHE = 2001
AID_DIAG = 2002

AID_SONY_IDD = 2987

AID_NET_BT_ADMIN = 3001
AID_NET_BT = 3002
AID_INET = 3003
AID_NET_RAW = 3004
AID_NET_ADMIN = 3005
AID_NET_BW_STATS = 3006
AID_NET_BW_ACCT = 3007
AID_NET_BT_STACK = 3008
AID_QCOM_ONCRPC = 3009
AID_QCOM_DIAG = 3010

AID_MISC = 9998
AID_NOBODY = 9999

AID_APP = 10000

AID_ISOLATED_START = 99000
AID_ISOLATED_END = 99999

AID_USER = 100000

AID_SHARED_GID_START = 50000
AID_SHARED_GID_END = 59999

ANDROID_IDS = (
    ("root", AID_ROOT),
    ("system", AID_SYSTEM),
    ("radio", AID_RADIO),
    ("bluetooth", AID_BLUETOOTH),
    ("graphics", AID_GRAPHICS),
    ("input", AID_INPUT),
    ("audio", AID_AUDIO),
    ("camera", AID_CAMERA),
    ("log", AID_LOG),
    ("compass", AID_COMPASS),
    ("mount", AID_MOUNT),
    ("wifi", AID_WIFI),
    ("adb", AID_ADB),
    ("install", AID_INSTALL),
    ("media", AID_MEDIA),
    ("dhcp", AID_DHCP),
    ("sdcard_rw", AID_SDCARD_RW),
    ("vpn", AID_VPN),
    ("keystore", AID_KEYSTORE),
    ("usb", AID_USB),
    ("drm", AID_DRM),
    ("mdnsr", AID_MDNSR),
    ("gps", AID_GPS),
    ("media_rw", AID_MEDIA_RW),
    ("mtp", AID_MTP),
    ("drmrpc", AID_DRMRPC),
    ("nfc", AID_NFC),
    ("sdcard_r", AID_SDCARD_R),
    ("clat", AID_CLAT),
    ("loop_radio", AID_LOOP_RADIO),
    ("mediadrm", AID_MEDIA_DRM),
    ("package_info", AID_PACKAGE_INFO),
    ("sdcard_pics", AID_SDCARD_PICS),
    ("sdcard_av", AID_SDCARD_AV),
    ("sdcard_all", AID_SDCARD_ALL),
    ("shell", AID_SHELL),
    ("cache", AID_CACHE),
    ("diag", AID_DIAG),
    ("net_bt_admin", AID_NET_BT_ADMIN),
    ("net_bt", AID_NET_BT),
    ("inet", AID_INET),
    ("net_raw", AID_NET_RAW),
    ("net_admin", AID_NET_ADMIN),
    ("net_bw_stats", AID_NET_BW_STATS),
    ("net_bw_acct", AID_NET_BW_ACCT),
    ("qcom_oncrpc", AID_QCOM_ONCRPC),
    ("qcom_diag", AID_QCOM_DIAG),
    ("net_bt_stack", AID_NET_BT_STACK),
    ("sony_idd", AID_SONY_IDD),
    ("misc", AID_MISC),
    ("nobody", AID_NOBODY),
    ("theme_man", AID_THEMEMAN),
    ("audit", AID_AUDIT),
)

# (property prefix, uid, gid) granted on top of the platform defaults.
PROPERTY_PERMS = (("camera.", AID_MEDIA, 0),)
CONTROL_PERMS = (("media.cacao", AID_MEDIA, AID_MEDIA),)


@dataclass(frozen=True)
class PathConfig:
    """Ownership rule for paths starting with prefix; a None prefix matches anything."""

    mode: int
    uid: int
    gid: int
    capabilities: int
    prefix: str | None

    def _matches(self, path, is_dir):
        if self.prefix is None:
            return True
        if is_dir:
            return len(path) >= len(self.prefix) and path.startswith(self.prefix)
        if self.prefix.endswith("*"):
            return path.startswith(self.prefix[:-1])
        return path == self.prefix


@dataclass(frozen=True)
class FsConfig:
    """Ownership, permission bits and capabilities chosen for a path."""

    uid: int
    gid: int
    mode: int
    capabilities: int


# First match wins, so the most specific prefixes come first.
ANDROID_DIRS = (
    PathConfig(0o0770, AID_SYSTEM, AID_CACHE, 0, "cache"),
    PathConfig(0o0771, AID_SYSTEM, AID_SYSTEM, 0, "data/app"),
    PathConfig(0o0771, AID_SYSTEM, AID_SYSTEM, 0, "data/app-private"),
    PathConfig(0o0771, AID_SYSTEM, AID_SYSTEM, 0, "data/dalvik-cache"),
    PathConfig(0o0771, AID_SYSTEM, AID_SYSTEM, 0, "data/data"),
    PathConfig(0o0771, AID_SHELL, AID_SHELL, 0, "data/local/tmp"),
    PathConfig(0o0771, AID_SHELL, AID_SHELL, 0, "data/local"),
    PathConfig(0o1771, AID_SYSTEM, AID_MISC, 0, "data/misc"),
    PathConfig(0o0770, AID_DHCP, AID_DHCP, 0, "data/misc/dhcp"),
    PathConfig(0o0775, AID_MEDIA_RW, AID_MEDIA_RW, 0, "data/media"),
    PathConfig(0o0775, AID_MEDIA_RW, AID_MEDIA_RW, 0, "data/media/Music"),
    PathConfig(0o0771, AID_SYSTEM, AID_SYSTEM, 0, "data"),
    PathConfig(0o0750, AID_ROOT, AID_SHELL, 0, "sbin"),
    PathConfig(0o0755, AID_ROOT, AID_ROOT, 0, "system/addon.d"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "system/bin"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "system/vendor"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "system/xbin"),
    PathConfig(0o0755, AID_ROOT, AID_ROOT, 0, "system/etc/ppp"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "vendor"),
    PathConfig(0o0777, AID_ROOT, AID_ROOT, 0, "sdcard"),
    PathConfig(0o0755, AID_ROOT, AID_ROOT, 0, None),
)

# First match wins; a prefix ending in "*" matches any path that starts with it.
ANDROID_FILES = (
    PathConfig(0o0440, AID_ROOT, AID_SHELL, 0, "system/etc/init.goldfish.rc"),
    PathConfig(0o0550, AID_ROOT, AID_SHELL, 0, "system/etc/init.goldfish.sh"),
    PathConfig(0o0440, AID_ROOT, AID_SHELL, 0, "system/etc/init.trout.rc"),
    PathConfig(0o0550, AID_ROOT, AID_SHELL, 0, "system/etc/init.ril"),
    PathConfig(0o0550, AID_ROOT, AID_SHELL, 0, "system/etc/init.testmenu"),
    PathConfig(0o0550, AID_DHCP, AID_SHELL, 0, "system/etc/dhcpcd/dhcpcd-run-hooks"),
    PathConfig(0o0444, AID_RADIO, AID_AUDIO, 0, "system/etc/AudioPara4.csv"),
    PathConfig(0o0555, AID_ROOT, AID_ROOT, 0, "system/etc/ppp/*"),
    PathConfig(0o0555, AID_ROOT, AID_ROOT, 0, "system/etc/rc.*"),
    PathConfig(0o0755, AID_ROOT, AID_ROOT, 0, "system/addon.d/*"),
    PathConfig(0o0644, AID_SYSTEM, AID_SYSTEM, 0, "data/app/*"),
    PathConfig(0o0644, AID_MEDIA_RW, AID_MEDIA_RW, 0, "data/media/*"),
    PathConfig(0o0644, AID_SYSTEM, AID_SYSTEM, 0, "data/app-private/*"),
    PathConfig(0o0644, AID_APP, AID_APP, 0, "data/data/*"),
    PathConfig(0o0755, AID_ROOT, AID_ROOT, 0, "system/bin/ping"),
    # Intentionally set-gid and not set-uid.
    PathConfig(0o2750, AID_ROOT, AID_INET, 0, "system/bin/netcfg"),
    # Intentionally set-uid; not included on user builds.
    PathConfig(0o6755, AID_ROOT, AID_ROOT, 0, "system/xbin/su"),
    PathConfig(0o6755, AID_ROOT, AID_ROOT, 0, "system/xbin/librank"),
    PathConfig(0o6755, AID_ROOT, AID_ROOT, 0, "system/xbin/procrank"),
    PathConfig(0o6755, AID_ROOT, AID_ROOT, 0, "system/xbin/procmem"),
    PathConfig(0o6755, AID_ROOT, AID_ROOT, 0, "system/xbin/tcpdump"),
    PathConfig(0o4770, AID_ROOT, AID_RADIO, 0, "system/bin/pppd-ril"),
    PathConfig(0o0750, AID_ROOT, AID_SHELL,
               (1 << CAP_SETUID) | (1 << CAP_SETGID), "system/bin/run-as"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "system/bin/*"),
    PathConfig(0o0755, AID_ROOT, AID_ROOT, 0, "system/lib/valgrind/*"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "system/xbin/*"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "system/vendor/bin/*"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "vendor/bin/*"),
    PathConfig(0o0750, AID_ROOT, AID_SHELL, 0, "sbin/*"),
    PathConfig(0o0755, AID_ROOT, AID_ROOT, 0, "bin/*"),
    PathConfig(0o0750, AID_ROOT, AID_SHELL, 0, "init*"),
    PathConfig(0o0750, AID_ROOT, AID_SHELL, 0, "charger*"),
    PathConfig(0o0750, AID_ROOT, AID_SHELL, 0, "sbin/fs_mgr"),
    PathConfig(0o0640, AID_ROOT, AID_SHELL, 0, "fstab.*"),
    PathConfig(0o0755, AID_ROOT, AID_SHELL, 0, "system/etc/init.d/*"),
    PathConfig(0o0644, AID_ROOT, AID_ROOT, 0, None),
)


def fs_config(path, is_dir, mode=0):
    """Return the ownership and permissions for path.

    The permission bits of mode are replaced; its other bits (such as the
    file type) are kept.
    """
    if path.startswith("/"):
        path = path[1:]
    rules = ANDROID_DIRS if is_dir else ANDROID_FILES
    rule = next(rule for rule in rules if rule._matches(path, is_dir))
    return FsConfig(
        uid=rule.uid,
        gid=rule.gid,
        mode=(mode & ~0o7777) | rule.mode,
        capabilities=rule.capabilities,
    )


def android_id(name):
    """Return the id of a named Android user or group; KeyError if unknown."""
    for entry_name, aid in ANDROID_IDS:
        if entry_name == name:
            return aid
    raise KeyError(name)


def android_name(aid):
    """Return the name of an Android user or group id; KeyError if unknown."""
    for name, entry_aid in ANDROID_IDS:
        if entry_aid == aid:
            return name
    raise KeyError(aid)