class InstallerError(Exception):
    """Fatal condition: the run stops with a non-zero exit status."""


class PreflightError(InstallerError):
    pass


class StorageError(InstallerError):
    pass
