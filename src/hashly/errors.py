class HashlyError(Exception):
    """Base class for errors raised while fingerprinting assets."""


class ConfigurationError(HashlyError):
    pass


class ContainmentError(HashlyError):
    def __init__(self, path: str, base_dir: str):
        super().__init__(f"The file '{path}' is not in the base directory: '{base_dir}'")
        self.path = path
        self.base_dir = base_dir


class ManifestFormatError(HashlyError):
    pass


class PluginError(HashlyError):
    pass


class ReferenceCycleError(HashlyError):
    def __init__(self, path: str):
        super().__init__(f"Reference cycle detected at '{path}'")
        self.path = path


class FileProcessingError(HashlyError):
    """A single file failed; wraps the underlying cause."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause
