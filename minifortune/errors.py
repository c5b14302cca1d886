# minifortune/errors.py
"""
Exception taxonomy.

Every failure of a single fortune request is one of four families:
    InputError        -- unusable path list
    FilesystemError   -- open / seek / read failures
    FormatError       -- malformed .dat index or fortune file
    EmptySourceError  -- nothing to choose from

None of them are retried. NoFortuneSourceAvailable is outside
the hierarchy: "no fortunes installed" is reported to the user, not a failure.
"""


class FortuneError(Exception):
    """Base class for every failure raised by minifortune."""


# -------------------- families --------------------

class InputError(FortuneError, ValueError):
    pass


class FilesystemError(FortuneError, OSError):
    pass


class FormatError(FortuneError, ValueError):
    pass


class EmptySourceError(FortuneError, LookupError):
    pass


# -------------------- input --------------------

class EmptyInput(InputError):
    pass


# -------------------- filesystem --------------------

class DirectoryUnreadable(FilesystemError):
    pass


class IndexOpenError(FilesystemError):
    pass


class SourceOpenError(FilesystemError):
    pass


class SeekError(FilesystemError):
    pass


class ShortRead(FilesystemError):
    pass


# -------------------- format --------------------

class IndexTruncated(FormatError):
    pass


class UnsupportedVersion(FormatError):
    def __init__(self, path, version):
        super().__init__(f"{path}: unsupported .dat header version {version}")
        self.path = path
        self.version = version


class CorruptIndex(FormatError):
    pass


class DelimiterNotFound(FormatError):
    pass


class FragmentOutOfRange(FormatError, IndexError):
    pass


# -------------------- empty sources --------------------

class EmptyIndex(EmptySourceError):
    pass


class NoIndexFiles(EmptySourceError):
    pass


# -------------------- informational --------------------

class NoFortuneSourceAvailable(Exception):
    """No fortune file or directory could be found in any fallback location."""

    def __init__(self, tried):
        self.tried = list(tried)
        super().__init__("no fortunes installed (looked in: " + ", ".join(self.tried) + ")")
