import copy

import pytest

from fstabkit.fstab.entry.fstab_entry import FstabEntry
from fstabkit.fstab.fstab_store import FileFstabStore, StreamFstabStore

FSTAB_TEXT = """
# /etc/fstab: static file system information.
#
# Use 'blkid' to print the universally unique identifier for a
# device; this may be used with UUID= as a more robust way to name devices
# that works even if disks are added and removed. See fstab(5).
#
# <file system> <mount point>   <type>  <options>       <dump>  <pass>
/dev/mapper/xubuntu--vg--ssd-root /               ext4    noatime,errors=remount-ro 0       1
# /boot was on /dev/sda1 during installation
UUID=378f3c86-b21a-4172-832d-e2b3d4bc7511 /boot           ext2    defaults        0       2
/dev/mapper/xubuntu--vg--ssd-swap_1 none            swap    sw              0       0
UUID=be8a49b9-91a3-48df-b91b-20a0b409ba0f /mnt/raid ext4 errors=remount-ro,user 0 1
# tmpfs /tmp tmpfs rw,nosuid,nodev"""

FSTAB_ENTRIES = [
    FstabEntry(
        device_spec="/dev/mapper/xubuntu--vg--ssd-root",
        mount_point="/",
        fs_type="ext4",
        mount_options=["noatime", "errors=remount-ro"],
        dump=False,
        check_order=1,
    ),
    FstabEntry(
        device_spec="UUID=378f3c86-b21a-4172-832d-e2b3d4bc7511",
        mount_point="/boot",
        fs_type="ext2",
        mount_options=["defaults"],
        dump=False,
        check_order=2,
    ),
    FstabEntry(
        device_spec="/dev/mapper/xubuntu--vg--ssd-swap_1",
        mount_point="none",
        fs_type="swap",
        mount_options=["sw"],
        dump=False,
        check_order=0,
    ),
    FstabEntry(
        device_spec="UUID=be8a49b9-91a3-48df-b91b-20a0b409ba0f",
        mount_point="/mnt/raid",
        fs_type="ext4",
        mount_options=["errors=remount-ro", "user"],
        dump=False,
        check_order=1,
    ),
]


@pytest.fixture()
def fstab_entries():
    return copy.deepcopy(FSTAB_ENTRIES)


@pytest.fixture()
def fstab_path(tmp_path):
    path = tmp_path / "fstab"
    path.write_text(FSTAB_TEXT, encoding="utf-8")
    return path


@pytest.fixture()
def file_store(fstab_path):
    return FileFstabStore(str(fstab_path))


@pytest.fixture()
def stream_store():
    return StreamFstabStore(FSTAB_TEXT)
