"""Source providers: how loadin targets are found and read.

A module name is looked up, in order,
    1. relative to the directory of the file containing the loadin,
    2. relative to the "files" directory next to the main script,
    3. as an absolute path,
and for each of those, as given and then with the ".zr" extension appended if it has no extension. The first match
wins and is returned as a canonical path, which is what the session uses to detect duplicate and circular loadins.
"""

import logging
import os
import posixpath
from abc import ABC, abstractmethod

from zr.lang.error import ModuleError


logger = logging.getLogger(__name__)


EXTENSION = ".zr"
MODULE_DIR = "files"


class SourceProvider(ABC):
    """Superclass for anything that can resolve and read zr modules."""

    @abstractmethod
    def exists(self, path):
        """Whether or not path names a readable module."""

    @abstractmethod
    def canonical(self, path):
        """Returns canonical identity of path: two paths to the same module must give equal identities."""

    @abstractmethod
    def read(self, path):
        """Returns full text of module at path. Should raise ModuleError if it cannot be read."""

    @abstractmethod
    def join(self, *parts):
        """Joins path components."""

    def candidates(self, name, base_dir, main_dir):
        """Yields paths name may refer to, in lookup order."""
        names = [name]
        if not posixpath.splitext(name)[1]:
            names.append(name + EXTENSION)

        for directory in (base_dir, self.join(main_dir, MODULE_DIR)):
            for candidate in names:
                yield self.join(directory, candidate)
        yield from names

    def resolve(self, name, base_dir, main_dir, at=None):
        """Returns canonical path of module name, loaded from a file in base_dir of a program whose main script is in
        main_dir. Raises ModuleError if it cannot be found.
        """
        for candidate in self.candidates(name, base_dir, main_dir):
            if self.exists(candidate):
                path = self.canonical(candidate)
                logger.info("resolved module '%s' to '%s'", name, path)
                return path
            logger.debug("module '%s' not at '%s'", name, candidate)

        raise ModuleError("module '{}' not found", name, at=at)


class FileSourceProvider(SourceProvider):
    """Reads modules from the file system."""

    def exists(self, path):
        return os.path.isabs(path) and os.path.isfile(path)

    def canonical(self, path):
        return os.path.realpath(path)

    def read(self, path):
        try:
            with open(path, "r", encoding="utf-8") as file:
                return file.read()
        except (OSError, UnicodeDecodeError):
            raise ModuleError("'{}' could not be opened", path, diagnosis=False)

    def join(self, *parts):
        return os.path.join(*parts)


class MemorySourceProvider(SourceProvider):
    """Serves modules from a dict of absolute posix path: source text. Useful for embedding and testing."""

    def __init__(self, files):
        self.files = {posixpath.normpath(path): text for path, text in files.items()}

    def exists(self, path):
        return posixpath.isabs(path) and posixpath.normpath(path) in self.files

    def canonical(self, path):
        return posixpath.normpath(path)

    def read(self, path):
        try:
            return self.files[posixpath.normpath(path)]
        except KeyError:
            raise ModuleError("'{}' could not be opened", path, diagnosis=False)

    def join(self, *parts):
        return posixpath.join(*parts)
