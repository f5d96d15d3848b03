class JiffyError(Exception):
    """Base class for errors raised by jiffy."""


class CacheWriteError(JiffyError):
    """Raised when the menu cache cannot be written.

    A missing cache directory is created and the write retried once
    before this is raised, so it always means the failure is not
    recoverable by the menu pipeline itself.
    """

    def __init__(self, path, errno):
        self.path = str(path)
        self.errno = errno
        super().__init__(f'Failed to open file "{self.path}".\nError code: {errno}')
