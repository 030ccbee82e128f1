import io
import logging
from typing import Iterable, Iterator, Optional, TextIO

from fstabkit.fstab.entry.fstab_entry import FstabEntry
from fstabkit.fstab.entry.fstab_entry_builder import (
    CHECK_ORDER_MAX,
    FIELD_COUNT,
    FstabEntryBuilder,
    FstabFormatError,
)
from fstabkit.fstab.fstab_store import FileFstabStore, FstabStore


class Fstab:
    """
    Ordered list of fstab entries, in the order of the lines they come from.

    Any line oriented table with the same six columns can be read this way,
    but /etc/vfstab (SVR4) and /etc/filesystems (AIX) use other layouts.
    """

    entries: list[FstabEntry]

    def __init__(self, entries: Optional[Iterable[FstabEntry]] = None) -> None:
        self.entries = list(entries) if entries is not None else []

    def __str__(self) -> str:
        return "".join(f"{entry}\n" for entry in self.entries)

    def __iter__(self) -> Iterator[FstabEntry]:
        yield from self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fstab):
            return NotImplemented
        return self.entries == other.entries

    def find(self, device_spec: str) -> list[FstabEntry]:
        """Get the entries for a device spec, in table order"""
        return [entry for entry in self.entries if entry.device_spec == device_spec]


class FstabBuilder:
    def is_comment(self, line: str) -> bool:
        # Only a "#" in first position makes a comment
        return line.startswith("#")

    def from_stream(self, stream: TextIO, name: str = "<stream>") -> Fstab:
        """
        Create a fstab object from a readable text stream

        Comments, blank lines and lines that don't have six fields are skipped.

        :raises FstabFormatError: if a fsck pass number is invalid
        """
        entry_builder = FstabEntryBuilder()
        entries: list[FstabEntry] = []
        # Only "\n" ends a line, a lone "\r" is whitespace inside the line
        for i, line in enumerate(stream.read().split("\n"), start=1):
            line = line.removesuffix("\r")
            if self.is_comment(line):
                logging.debug("[%s:%d] Skipping commented line", name, i)
                continue
            fields = entry_builder.split_line(line)
            if len(fields) != FIELD_COUNT:
                if fields:
                    logging.debug("[%s:%d] Unknown fstab entry: %s", name, i, line)
                continue
            entry = entry_builder.from_fields(fields, line, i)
            logging.debug("[%s:%d] Parsed fstab entry: %s", name, i, entry)
            entries.append(entry)
        logging.debug("Loaded fstab from %s with %d entries", name, len(entries))
        return Fstab(entries)

    def from_text(self, text: str) -> Fstab:
        """Create a fstab object from the content of a fstab file"""
        return self.from_stream(io.StringIO(text), "<text>")

    def from_store(self, store: FstabStore) -> Fstab:
        """Create a fstab object from a fstab store"""
        with store.open_read() as stream:
            return self.from_stream(stream, store.name)

    def from_file(self, fstab_path: str = "/etc/fstab") -> Fstab:
        """Create a fstab object from the local fstab file"""
        return self.from_store(FileFstabStore(fstab_path))


class FstabWriter:
    encoding: str = "utf-8"

    def to_line(self, entry: FstabEntry) -> str:
        """
        Get the fstab line of an entry

        :raises FstabFormatError: if the line wouldn't be read back as this entry
        """
        line = str(entry)
        fields = (
            entry.device_spec,
            entry.mount_point,
            entry.fs_type,
            ",".join(entry.mount_options),
        )
        for value in fields:
            if value.split() != [value]:
                raise FstabFormatError("Empty field or whitespace in a field", line)
        if entry.device_spec.startswith("#"):
            raise FstabFormatError("Device spec would start a comment", line)
        if not 0 <= entry.check_order <= CHECK_ORDER_MAX:
            raise FstabFormatError("Invalid fsck pass number", line)
        return f"{line}\n"

    def to_lines(self, fstab: Fstab) -> list[str]:
        """Get the fstab lines of all entries, checking every entry first"""
        return [self.to_line(entry) for entry in fstab]

    def write_lines(self, lines: list[str], stream: TextIO) -> int:
        bytes_written = 0
        for line in lines:
            stream.write(line)
            bytes_written += len(line.encode(self.encoding))
        stream.flush()
        return bytes_written

    def to_stream(self, fstab: Fstab, stream: TextIO) -> int:
        """
        Write the fstab entries to a writable text stream

        Only entries are written, comments and formatting are not kept.
        Nothing is written if an entry can't be represented as a fstab line.
        :raises FstabFormatError: if an entry can't be written
        :returns: the number of bytes written
        """
        return self.write_lines(self.to_lines(fstab), stream)

    def to_store(self, fstab: Fstab, store: FstabStore) -> int:
        """
        Replace the content of a fstab store with the fstab entries.
        The store is left untouched if an entry can't be written.
        """
        lines = self.to_lines(fstab)
        with store.open_write() as stream:
            bytes_written = self.write_lines(lines, stream)
        logging.debug("Wrote %d bytes to %s", bytes_written, store.name)
        return bytes_written

    def to_file(self, fstab: Fstab, fstab_path: str = "/etc/fstab") -> int:
        """Replace the local fstab file with the fstab entries"""
        return self.to_store(fstab, FileFstabStore(fstab_path))
