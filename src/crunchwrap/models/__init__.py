"""crunchwrap data models - re-exports all public model classes."""

from crunchwrap.models.config import ToolConfig, load_config
from crunchwrap.models.icons import ICON_CATALOG, MONOCHROME_ICON, IconSpec
from crunchwrap.models.project import ProjectMetadata, TemplateChoice

__all__ = [
    "ICON_CATALOG",
    "IconSpec",
    "MONOCHROME_ICON",
    "ProjectMetadata",
    "TemplateChoice",
    "ToolConfig",
    "load_config",
]
