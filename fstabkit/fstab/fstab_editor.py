import logging
from typing import Iterable

from fstabkit.fstab.entry.fstab_entry import FstabEntry
from fstabkit.fstab.fstab import Fstab, FstabBuilder, FstabWriter
from fstabkit.fstab.fstab_store import FileFstabStore, FstabStore


class FstabEditor:
    """
    Read and rewrite the entries of a fstab store.

    Every operation reads the whole table from the store, and the mutating
    ones write the whole table back. Nothing is cached between calls, and
    nothing prevents another process from writing to the store in between.
    """

    store: FstabStore

    def __init__(self, store: FstabStore) -> None:
        self.store = store

    def __read(self) -> Fstab:
        return FstabBuilder().from_store(self.store)

    def __write(self, fstab: Fstab) -> int:
        return FstabWriter().to_store(fstab, self.store)

    def __upsert(self, fstab: Fstab, entry: FstabEntry) -> bool:
        """
        Move an entry to the end of the table, adding it if needed.
        Only an entry equal in all its fields is replaced.
        """
        try:
            position = fstab.entries.index(entry)
        except ValueError:
            fstab.entries.append(entry)
            return True
        logging.debug("Removing %d from fstab entries", position)
        del fstab.entries[position]
        fstab.entries.append(entry)
        return False

    def get_entries(self) -> list[FstabEntry]:
        """Get the entries of the fstab, in file order"""
        return self.__read().entries

    def add_entry(self, entry: FstabEntry) -> bool:
        """
        Add an entry to the end of the fstab.

        :returns: True if the fstab didn't contain this entry, False if an
        identical entry was replaced
        """
        fstab = self.__read()
        added = self.__upsert(fstab, entry)
        self.__write(fstab)
        return added

    def add_entries(self, entries: Iterable[FstabEntry]) -> None:
        """Add entries like `add_entry` does, writing the fstab only once"""
        fstab = self.__read()
        for entry in entries:
            self.__upsert(fstab, entry)
        self.__write(fstab)

    def remove_entry(self, device_spec: str) -> bool:
        """
        Remove the first entry for a device spec.
        The fstab is written only if an entry was removed.

        :returns: True if an entry was removed
        """
        fstab = self.__read()
        for position, entry in enumerate(fstab.entries):
            if entry.device_spec == device_spec:
                break
        else:
            return False
        logging.debug("Removing %d from fstab entries", position)
        del fstab.entries[position]
        self.__write(fstab)
        return True


def parse_fstab(fstab_path: str = "/etc/fstab") -> list[FstabEntry]:
    """Get the entries of a fstab file"""
    return FstabEditor(FileFstabStore(fstab_path)).get_entries()


def add_entry(entry: FstabEntry, fstab_path: str = "/etc/fstab") -> bool:
    """Add an entry to a fstab file, see `FstabEditor.add_entry`"""
    return FstabEditor(FileFstabStore(fstab_path)).add_entry(entry)


def add_entries(entries: Iterable[FstabEntry], fstab_path: str = "/etc/fstab") -> None:
    """Add entries to a fstab file, see `FstabEditor.add_entries`"""
    FstabEditor(FileFstabStore(fstab_path)).add_entries(entries)


def remove_entry(device_spec: str, fstab_path: str = "/etc/fstab") -> bool:
    """Remove the first entry of a device spec from a fstab file"""
    return FstabEditor(FileFstabStore(fstab_path)).remove_entry(device_spec)
