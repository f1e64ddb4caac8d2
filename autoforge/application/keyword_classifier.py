"""Maps a free-text command to a project category and its parameters."""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from autoforge.domain.entities import Category, Feature, ProjectSpec

# Tested in order; the first category with a matching trigger wins.
CATEGORY_TRIGGERS: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
    (Category.WEB_APP, ("web", "website", "sitio", "página", "pagina")),
    (Category.MOBILE_APP, ("app", "mobile", "móvil", "movil")),
    (Category.AI_MODEL, ("ai", "ia", "inteligencia", "machine learning")),
    (Category.ECOMMERCE, ("ecommerce", "e-commerce", "tienda", "shop", "store")),
    (Category.GAME, ("game", "juego")),
    (Category.API_SERVICE, ("api", "servidor", "server", "backend")),
)

DEFAULT_NAMES: Dict[Category, str] = {
    Category.WEB_APP: "Web App",
    Category.MOBILE_APP: "Mobile App",
    Category.AI_MODEL: "AI Model",
    Category.ECOMMERCE: "Online Store",
    Category.GAME: "Game",
    Category.API_SERVICE: "API Service",
    Category.CUSTOM: "Custom Project",
}

# axis -> (candidate tokens in priority order, default)
TECHNOLOGY_AXES: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "frontend": (("react", "vue", "angular"), "react"),
    "backend": (("node", "express", "fastapi", "flask"), "express"),
    "database": (("mongodb", "postgresql", "mysql"), "mongodb"),
    "mobile_framework": (("react-native", "flutter", "ionic"), "react-native"),
    "model_type": (("neural-network", "cnn", "rnn", "transformer"), "neural-network"),
    "model_framework": (("tensorflow", "pytorch", "scikit-learn"), "tensorflow"),
    "game_engine": (("phaser", "canvas"), "canvas"),
}

CATEGORY_AXES: Dict[Category, Tuple[str, ...]] = {
    Category.WEB_APP: ("frontend", "backend", "database"),
    Category.MOBILE_APP: ("mobile_framework",),
    Category.AI_MODEL: ("model_type", "model_framework"),
    Category.ECOMMERCE: ("frontend", "backend", "database"),
    Category.GAME: ("game_engine",),
    Category.API_SERVICE: ("backend", "database"),
    Category.CUSTOM: (),
}

FEATURE_SYNONYMS: Tuple[Tuple[Feature, Tuple[str, ...]], ...] = (
    (Feature.AUTH, ("auth", "login", "user", "usuario")),
    (Feature.CHAT, ("chat", "message", "mensaje")),
    (Feature.PAYMENT, ("payment", "pay", "pago")),
)

NAME_PATTERN = re.compile(
    r"(?:create|build|make|crear|hacer|construir)\s+(?:an?|una?)\s+(.+?)"
    r"(?:\s+(?:with|using|con|usando)\b|\s*$)",
    re.IGNORECASE,
)


def detect_category(command: str) -> Optional[Category]:
    """Return the first category whose triggers appear in ``command``, if any."""
    lowered = command.lower()
    for category, triggers in CATEGORY_TRIGGERS:
        if any(trigger in lowered for trigger in triggers):
            return category
    return None


def extract_name(command: str) -> Optional[str]:
    match = NAME_PATTERN.search(command)
    if not match:
        return None
    name = match.group(1).strip()
    return name or None


def detect_technology(command: str, candidates: Sequence[str]) -> Optional[str]:
    lowered = command.lower()
    for candidate in candidates:
        if candidate in lowered:
            return candidate
    return None


def detect_features(command: str) -> List[Feature]:
    lowered = command.lower()
    return [
        feature
        for feature, synonyms in FEATURE_SYNONYMS
        if any(synonym in lowered for synonym in synonyms)
    ]


class KeywordClassifier:
    """Classifies commands by ordered substring tests. Never fails."""

    def classify(self, command: str) -> ProjectSpec:
        command = command or ""
        category = detect_category(command)

        if category is None:
            return ProjectSpec(
                name=command.strip() or DEFAULT_NAMES[Category.CUSTOM],
                category=Category.CUSTOM,
                features=frozenset(detect_features(command)),
                command=command,
            )

        technologies = {}
        for axis in CATEGORY_AXES[category]:
            candidates, default = TECHNOLOGY_AXES[axis]
            technologies[axis] = detect_technology(command, candidates) or default

        return ProjectSpec(
            name=extract_name(command) or DEFAULT_NAMES[category],
            category=category,
            technologies=technologies,
            features=frozenset(detect_features(command)),
            command=command,
        )


def classify(command: str) -> ProjectSpec:
    return KeywordClassifier().classify(command)
