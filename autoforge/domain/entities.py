"""Internal domain entities shared by the classifier, renderer and store."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional


class Category(str, Enum):
    WEB_APP = "web-app"
    MOBILE_APP = "mobile-app"
    AI_MODEL = "ai-model"
    ECOMMERCE = "ecommerce"
    GAME = "game"
    API_SERVICE = "api-service"
    CUSTOM = "custom"


class ProjectStatus(str, Enum):
    CREATING = "creating"
    COMPLETED = "completed"


class Feature(str, Enum):
    AUTH = "auth"
    CHAT = "chat"
    PAYMENT = "payment"


# Relative path -> file content
RenderedFileSet = Dict[str, str]


def drop_empty(files: Mapping[str, Optional[str]]) -> RenderedFileSet:
    """Return a copy of ``files`` without entries whose content is empty or None."""
    return {path: content for path, content in files.items() if content}


@dataclass(frozen=True)
class ProjectSpec:
    """Parameters derived from a command, consumed by the template renderers."""
    name: str
    category: Category
    technologies: Dict[str, str] = field(default_factory=dict)
    features: FrozenSet[Feature] = frozenset()
    command: str = ""

    def has(self, feature: Feature) -> bool:
        return feature in self.features

    def tech(self, axis: str) -> str:
        return self.technologies[axis]

    @property
    def feature_list(self) -> list[str]:
        """Feature flags in canonical order."""
        return [feature.value for feature in Feature if feature in self.features]


@dataclass
class Project:
    """A generated project. Instances are owned and mutated only by a ProjectStore."""
    id: str
    name: str
    category: Category
    files: RenderedFileSet
    status: ProjectStatus = ProjectStatus.CREATING
    progress: int = 0
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def summary(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.category.value,
            "status": self.status.value,
            "progress": self.progress,
            "created": self.created_at,
            "file_count": len(self.files),
        }
