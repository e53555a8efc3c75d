"""Exceptions raised while loading a project or generating its POM."""


class PomGenerationError(Exception):
    """Base class for errors that abort POM generation."""


class SnapshotDependencyError(PomGenerationError):
    """A release version depends on snapshot versions.

    Attributes:
        coordinates: ``group/artifact:version`` strings of the offending dependencies.
    """

    def __init__(self, message: str, coordinates: list[str]):
        super().__init__(message)
        self.coordinates = coordinates


class ProjectLoadError(PomGenerationError):
    """The project descriptor file is missing or malformed."""
