from dataclasses import dataclass, field


@dataclass
class FstabEntry:
    """
    A single fstab record, see `man 5 fstab` for the meaning of the fields.

    Two entries are equal only when all of their fields are equal.
    """

    device_spec: str
    mount_point: str
    fs_type: str
    mount_options: list[str] = field(default_factory=lambda: ["defaults"])
    dump: bool = False
    check_order: int = 0

    def __str__(self) -> str:
        return " ".join(
            (
                self.device_spec,
                self.mount_point,
                self.fs_type,
                ",".join(self.mount_options),
                "1" if self.dump else "0",
                str(self.check_order),
            )
        )
