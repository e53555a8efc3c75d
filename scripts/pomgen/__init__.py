"""Maven pom.xml generation from project descriptors."""

from .cli import generate, main
from .pom_writer import make_pom, make_pom_properties, write_pom
from .project_loader import load_project
from .project_models import DependencySpec, ProjectDescriptor, RepositorySpec

__all__ = [
    "generate", "main", "make_pom", "make_pom_properties", "write_pom",
    "load_project", "DependencySpec", "ProjectDescriptor", "RepositorySpec",
]
