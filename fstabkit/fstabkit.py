#!/bin/python3

from argparse import ArgumentParser, Namespace
import logging
import os
import sys
from logging.config import dictConfig as logging_dict_config
from typing import Optional, Sequence

from fstabkit.fstab.entry.fstab_entry import FstabEntry
from fstabkit.fstab.entry.fstab_entry_builder import FstabEntryBuilder, FstabFormatError
from fstabkit.fstab.fstab import Fstab
from fstabkit.fstab.fstab_editor import FstabEditor
from fstabkit.fstab.fstab_store import FileFstabStore


class Application:
    """Class representing the fstabkit application"""

    fstab_path: str = "/etc/fstab"
    use_color_logs: bool = False
    log_level: str = "INFO"
    atomic_writes: bool = True

    __args: Namespace

    def __read_env(self) -> None:
        """Get the default settings from the environment"""
        self.fstab_path = os.getenv("FSTAB_PATH", Application.fstab_path)
        valid_log_levels = logging.getLevelNamesMapping().keys()
        env_log_level = os.getenv("LOG_LEVEL", Application.log_level)
        if env_log_level in valid_log_levels:
            self.log_level = env_log_level
        self.use_color_logs = os.getenv("COLOR_LOGS", "0") == "1"

    def __parse_cli_args(self, argv: Optional[Sequence[str]]) -> None:
        """Parse cli args with argparse to configure the app"""
        parser = ArgumentParser(
            prog="fstabkit",
            description="List, add and remove fstab entries",
        )
        parser.add_argument(
            "--fstab", default=self.fstab_path, help="path of the fstab file"
        )
        parser.add_argument(
            "--color",
            action="store_true",
            default=self.use_color_logs,
            help="use color for logs",
        )
        parser.add_argument(
            "--log-level",
            type=str,
            default=self.log_level,
            help="logging level to use",
            choices=logging.getLevelNamesMapping().keys(),
        )
        parser.add_argument(
            "--no-atomic",
            action="store_true",
            help="truncate and rewrite the fstab in place",
        )
        commands = parser.add_subparsers(dest="command", required=True)

        commands.add_parser("list", help="print the fstab entries")

        add_parser = commands.add_parser("add", help="add or update an entry")
        add_parser.add_argument("device_spec", help="device, UUID=... or LABEL=...")
        add_parser.add_argument("mount_point", help="mount point, or none")
        add_parser.add_argument("fs_type", help="filesystem type")
        add_parser.add_argument(
            "--options", default="defaults", help="comma separated mount options"
        )
        add_parser.add_argument(
            "--dump", action="store_true", help="mark the filesystem for dump"
        )
        add_parser.add_argument(
            "--pass",
            dest="check_order",
            type=FstabEntryBuilder().parse_check_order,
            default=0,
            help="fsck pass number",
        )

        remove_parser = commands.add_parser("remove", help="remove an entry")
        remove_parser.add_argument("device_spec", help="device spec of the entry")

        args = parser.parse_args(argv)
        self.fstab_path = args.fstab
        self.use_color_logs = args.color
        self.log_level = args.log_level
        self.atomic_writes = not args.no_atomic
        self.__args = args

    def __init__(self, argv: Optional[Sequence[str]] = None) -> None:
        self.__read_env()
        self.__parse_cli_args(argv)

    def __setup_logging(self) -> None:
        """Setup logging for the app"""

        # Configure logging
        logging_dict_config(
            {
                "version": 1,
                "formatters": {
                    "color_formatter": {
                        "format": "[{levelname}] {message}",
                        "style": "{",
                        "class": (
                            "fstabkit.logging.color_log_formatter.ColorLogFormatter"
                            if self.use_color_logs
                            else "logging.Formatter"
                        ),
                    }
                },
                "handlers": {
                    "console_handler": {
                        "class": "logging.StreamHandler",
                        "level": self.log_level,
                        "formatter": "color_formatter",
                    }
                },
                "root": {
                    "level": logging.NOTSET,
                    "handlers": ["console_handler"],
                },
            }
        )

    @property
    def editor(self) -> FstabEditor:
        store = FileFstabStore(self.fstab_path, atomic=self.atomic_writes)
        return FstabEditor(store)

    def list_entries(self) -> int:
        entries = self.editor.get_entries()
        print(Fstab(entries), end="")
        return 0

    def add_entry(self) -> int:
        args = self.__args
        entry = FstabEntry(
            device_spec=args.device_spec,
            mount_point=args.mount_point,
            fs_type=args.fs_type,
            mount_options=args.options.split(","),
            dump=args.dump,
            check_order=args.check_order,
        )
        added = self.editor.add_entry(entry)
        logging.info("%s %s", "Added" if added else "Updated", entry)
        return 0

    def remove_entry(self) -> int:
        device_spec = self.__args.device_spec
        if not self.editor.remove_entry(device_spec):
            logging.warning("No fstab entry for %s", device_spec)
            return 1
        logging.info("Removed %s", device_spec)
        return 0

    def run(self) -> int:
        self.__setup_logging()
        logging.debug("Using fstab %s", self.fstab_path)
        match self.__args.command:
            case "list":
                command = self.list_entries
            case "add":
                command = self.add_entry
            case "remove":
                command = self.remove_entry
        try:
            return command()
        except FstabFormatError as error:
            logging.error(
                "Invalid fstab entry for %s", self.fstab_path, exc_info=error
            )
        except OSError as error:
            logging.error("Couldn't access %s", self.fstab_path, exc_info=error)
        return 1


def main():
    app = Application()
    sys.exit(app.run())


if __name__ == "__main__":
    main()
