import re
from typing import Optional, Sequence

from fstabkit.fstab.entry.fstab_entry import FstabEntry

FIELD_COUNT = 6
CHECK_ORDER_MAX = 0xFFFF


class FstabFormatError(ValueError):
    """Error raised when a fstab line holds an invalid value"""

    line: str
    line_number: Optional[int]

    def __init__(
        self, message: str, line: str, line_number: Optional[int] = None
    ) -> None:
        self.line = line
        self.line_number = line_number
        location = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}{message}: {line!r}")


class FstabEntryBuilder:
    check_order_pattern = re.compile(r"\+?[0-9]+")

    def split_line(self, line: str) -> list[str]:
        """Split a fstab line into its whitespace separated fields"""
        return line.split()

    def parse_check_order(self, value: str) -> int:
        """
        Parse the fsck pass number as an unsigned 16 bit integer

        :raises ValueError: if the value is not a number or is out of range
        """
        if not self.check_order_pattern.fullmatch(value):
            raise ValueError(f"invalid digit in {value!r}")
        check_order = int(value)
        if check_order > CHECK_ORDER_MAX:
            raise ValueError(f"{value} is greater than {CHECK_ORDER_MAX}")
        return check_order

    def from_fields(
        self,
        fields: Sequence[str],
        line: str = "",
        line_number: Optional[int] = None,
    ) -> FstabEntry:
        """
        Create a fstab entry object from the six fields of a fstab line

        :raises FstabFormatError: if the fsck pass number is invalid
        """
        device_spec, mount_point, fs_type, options, dump, check_order = fields
        try:
            parsed_check_order = self.parse_check_order(check_order)
        except ValueError as error:
            raise FstabFormatError(
                "Invalid fsck pass number", line or " ".join(fields), line_number
            ) from error
        return FstabEntry(
            device_spec=device_spec,
            mount_point=mount_point,
            fs_type=fs_type,
            mount_options=options.split(","),
            dump=dump != "0",
            check_order=parsed_check_order,
        )

    def from_line(self, line: str) -> FstabEntry:
        """Create a fstab entry object from a fstab file line"""
        fields = self.split_line(line)
        if len(fields) != FIELD_COUNT:
            raise FstabFormatError(
                f"Expected {FIELD_COUNT} fields, got {len(fields)}", line
            )
        return self.from_fields(fields, line)
