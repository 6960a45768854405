class TexAssignerError(Exception):
    """Base class for everything the assigner raises on purpose"""


class ConfigurationError(TexAssignerError):
    """A configured folder does not resolve to a valid container. Aborts the whole run."""

    def __init__(self, label: str, folder: str):
        self.label = label
        self.folder = folder
        super().__init__(f"{label} folder '{folder}' does not exist!")


class NotFoundError(TexAssignerError):
    """A discovered material or texture could not be loaded. Only that item is skipped."""

    def __init__(self, kind: str, path: str):
        self.kind = kind
        self.path = path
        super().__init__(f"Could not load {kind} at '{path}'")
