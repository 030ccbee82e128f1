import contextlib
import io
import logging
import os
import stat
import tempfile
from typing import Iterator, TextIO


class FstabStore:
    """
    Abstract class representing where a fstab table is persisted.
    Instanciate one of the child classes, not this one.
    """

    name: str = "<fstab>"

    def open_read(self) -> contextlib.AbstractContextManager[TextIO]:
        raise NotImplementedError()

    def open_write(self) -> contextlib.AbstractContextManager[TextIO]:
        raise NotImplementedError()


class FileFstabStore(FstabStore):
    """Fstab table stored in a file, usually /etc/fstab"""

    path: str
    atomic: bool
    encoding: str = "utf-8"

    def __init__(self, path: str = "/etc/fstab", atomic: bool = True) -> None:
        self.path = os.fspath(path)
        self.atomic = atomic

    @property
    def name(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path!r}, atomic={self.atomic})"

    def open_read(self) -> contextlib.AbstractContextManager[TextIO]:
        return open(self.path, "r", encoding=self.encoding, newline="")

    def open_write(self) -> contextlib.AbstractContextManager[TextIO]:
        if self.atomic:
            return self.__open_atomic_write()
        return open(self.path, "w", encoding=self.encoding)

    @contextlib.contextmanager
    def __open_atomic_write(self) -> Iterator[TextIO]:
        """
        Write to a temporary file next to the target, then move it over the
        target once everything has been written and synced.
        If anything fails, the target is left untouched.
        """
        directory, basename = os.path.split(os.path.abspath(self.path))
        fd, temp_path = tempfile.mkstemp(prefix=f".{basename}.", dir=directory)
        try:
            with open(fd, "w", encoding=self.encoding) as file:
                yield file
                file.flush()
                os.fsync(file.fileno())
            try:
                target_stat = os.stat(self.path)
            except FileNotFoundError:
                os.chmod(temp_path, 0o644)
            else:
                os.chmod(temp_path, stat.S_IMODE(target_stat.st_mode))
                os.chown(temp_path, target_stat.st_uid, target_stat.st_gid)
            os.replace(temp_path, self.path)
        except BaseException:
            logging.debug("Discarding temporary fstab file %s", temp_path)
            with contextlib.suppress(FileNotFoundError):
                os.unlink(temp_path)
            raise


class StreamFstabStore(FstabStore):
    """Fstab table kept in memory, read and written through text streams"""

    name = "<stream>"
    write_count: int

    def __init__(self, text: str = "") -> None:
        self.__text = text
        self.write_count = 0

    @property
    def text(self) -> str:
        return self.__text

    def open_read(self) -> contextlib.AbstractContextManager[TextIO]:
        return io.StringIO(self.__text)

    @contextlib.contextmanager
    def open_write(self) -> Iterator[TextIO]:
        stream = io.StringIO()
        yield stream
        self.__text = stream.getvalue()
        self.write_count += 1
