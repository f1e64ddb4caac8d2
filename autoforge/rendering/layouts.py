"""Per-category file layouts and the ``render`` entry point.

A layout is an ordered list of :class:`FileEntry` objects. Each entry is either
fixed or guarded by a predicate over the ProjectSpec; guarded entries whose predicate
is false are left out of the result entirely rather than written empty.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from autoforge.domain.entities import Category, Feature, ProjectSpec, RenderedFileSet, drop_empty
from autoforge.domain.errors import TemplateRenderError
from autoforge.rendering import manifests
from autoforge.rendering.renderer import TemplateRenderer, pascal_case, slugify, snake_case

Predicate = Callable[[ProjectSpec], bool]
Builder = Callable[[ProjectSpec], str]


@dataclass(frozen=True)
class FileEntry:
    """One generated file: a template path or a builder, plus an optional guard."""
    path: str
    source: Union[str, Builder]
    when: Optional[Predicate] = None
    stamped: bool = False  # receives the generation timestamp

    def applies_to(self, spec: ProjectSpec) -> bool:
        return self.when is None or self.when(spec)


def feature(flag: Feature) -> Predicate:
    return lambda spec: spec.has(flag)


def tech_is(axis: str, *values: str) -> Predicate:
    return lambda spec: spec.technologies.get(axis) in values


def all_of(*predicates: Predicate) -> Predicate:
    return lambda spec: all(predicate(spec) for predicate in predicates)


README = FileEntry("README.md", "common/README.md.j2", stamped=True)

WEB_APP_LAYOUT: List[FileEntry] = [
    FileEntry("package.json", manifests.web_app_package_json),
    FileEntry("server.js", "web_app/server.js.j2"),
    README,
    FileEntry(".env.example", "common/env.example.j2"),
    FileEntry("routes/api.js", "web_app/routes_api.js.j2"),
    FileEntry("client/src/index.css", "web_app/index.css.j2"),
    FileEntry("client/public/index.html", "web_app/react_index.html.j2", when=tech_is("frontend", "react")),
    FileEntry("client/public/index.html", "web_app/vanilla_index.html.j2", when=tech_is("frontend", "vue", "angular")),
    FileEntry("client/src/App.js", "web_app/App.js.j2", when=tech_is("frontend", "react")),
    FileEntry("models/User.js", "common/User.js.j2", when=tech_is("database", "mongodb")),
    FileEntry("middleware/auth.js", "common/auth_middleware.js.j2", when=feature(Feature.AUTH)),
]

MOBILE_APP_LAYOUT: List[FileEntry] = [
    FileEntry("package.json", manifests.mobile_app_package_json, when=tech_is("mobile_framework", "react-native", "ionic")),
    FileEntry("App.js", "mobile_app/App.js.j2", when=tech_is("mobile_framework", "react-native", "ionic")),
    FileEntry(
        "services/auth.js",
        "mobile_app/auth_service.js.j2",
        when=all_of(tech_is("mobile_framework", "react-native", "ionic"), feature(Feature.AUTH)),
    ),
    FileEntry("pubspec.yaml", "mobile_app/pubspec.yaml.j2", when=tech_is("mobile_framework", "flutter")),
    FileEntry("lib/main.dart", "mobile_app/main.dart.j2", when=tech_is("mobile_framework", "flutter")),
    README,
]

AI_MODEL_LAYOUT: List[FileEntry] = [
    FileEntry("requirements.txt", "ai_model/requirements.txt.j2"),
    FileEntry("model.py", "ai_model/model.py.j2"),
    FileEntry("train.py", "ai_model/train.py.j2"),
    README,
    FileEntry(".env.example", "common/env.example.j2"),
]

ECOMMERCE_LAYOUT: List[FileEntry] = [
    FileEntry("package.json", manifests.ecommerce_package_json),
    FileEntry("server.js", "ecommerce/server.js.j2"),
    FileEntry("routes/products.js", "ecommerce/products.js.j2"),
    FileEntry("routes/cart.js", "ecommerce/cart.js.j2"),
    FileEntry("routes/checkout.js", "ecommerce/checkout.js.j2", when=feature(Feature.PAYMENT)),
    FileEntry("client/public/index.html", "ecommerce/index.html.j2"),
    FileEntry("client/src/index.css", "ecommerce/index.css.j2"),
    FileEntry("client/src/store.js", "ecommerce/store.js.j2"),
    FileEntry("middleware/auth.js", "common/auth_middleware.js.j2", when=feature(Feature.AUTH)),
    README,
    FileEntry(".env.example", "common/env.example.j2"),
]

GAME_LAYOUT: List[FileEntry] = [
    FileEntry("package.json", manifests.game_package_json),
    FileEntry("index.html", "game/index.html.j2"),
    FileEntry("src/game.js", "game/game.js.j2"),
    FileEntry("src/style.css", "game/style.css.j2"),
    README,
]

_JS_BACKEND = tech_is("backend", "node", "express")
_PY_BACKEND = tech_is("backend", "fastapi", "flask")

API_SERVICE_LAYOUT: List[FileEntry] = [
    FileEntry("package.json", manifests.api_service_package_json, when=_JS_BACKEND),
    FileEntry("server.js", "api_service/server.js.j2", when=_JS_BACKEND),
    FileEntry("routes/api.js", "api_service/routes_api.js.j2", when=_JS_BACKEND),
    FileEntry("middleware/auth.js", "common/auth_middleware.js.j2", when=all_of(_JS_BACKEND, feature(Feature.AUTH))),
    FileEntry("requirements.txt", "api_service/requirements.txt.j2", when=_PY_BACKEND),
    FileEntry("main.py", "api_service/main.py.j2", when=_PY_BACKEND),
    README,
    FileEntry(".env.example", "common/env.example.j2"),
]

CUSTOM_LAYOUT: List[FileEntry] = [
    README,
    FileEntry("index.html", "custom/index.html.j2"),
    FileEntry("main.js", "custom/main.js.j2"),
    FileEntry("style.css", "custom/style.css.j2"),
]

_renderer: Optional[TemplateRenderer] = None


def get_renderer() -> TemplateRenderer:
    global _renderer
    if _renderer is None:
        _renderer = TemplateRenderer()
    return _renderer


def build_context(spec: ProjectSpec) -> Dict[str, Any]:
    """Template variables shared by every file of a project."""
    return {
        "spec": spec,
        "name": spec.name,
        "slug": slugify(spec.name),
        "class_name": pascal_case(spec.name),
        "module_name": snake_case(spec.name),
        "category": spec.category.value,
        "tech": dict(spec.technologies),
        "features": spec.feature_list,
        "has_auth": spec.has(Feature.AUTH),
        "has_chat": spec.has(Feature.CHAT),
        "has_payment": spec.has(Feature.PAYMENT),
    }


def render_layout(
    layout: List[FileEntry],
    spec: ProjectSpec,
    generated_at: Optional[str] = None,
) -> RenderedFileSet:
    renderer = get_renderer()
    context = build_context(spec)
    stamp = generated_at or datetime.now().isoformat(timespec="seconds")
    files: Dict[str, Optional[str]] = {}
    for entry in layout:
        if not entry.applies_to(spec):
            continue
        if entry.path in files:
            raise TemplateRenderError(f"Layout for {spec.category.value} emits {entry.path} twice")
        if callable(entry.source):
            files[entry.path] = entry.source(spec)
        elif entry.stamped:
            files[entry.path] = renderer.render(entry.source, {**context, "generated_at": stamp})
        else:
            files[entry.path] = renderer.render(entry.source, context)
    return drop_empty(files)


def render_web_app(spec: ProjectSpec, generated_at: Optional[str] = None) -> RenderedFileSet:
    return render_layout(WEB_APP_LAYOUT, spec, generated_at)


def render_mobile_app(spec: ProjectSpec, generated_at: Optional[str] = None) -> RenderedFileSet:
    return render_layout(MOBILE_APP_LAYOUT, spec, generated_at)


def render_ai_model(spec: ProjectSpec, generated_at: Optional[str] = None) -> RenderedFileSet:
    return render_layout(AI_MODEL_LAYOUT, spec, generated_at)


def render_ecommerce(spec: ProjectSpec, generated_at: Optional[str] = None) -> RenderedFileSet:
    return render_layout(ECOMMERCE_LAYOUT, spec, generated_at)


def render_game(spec: ProjectSpec, generated_at: Optional[str] = None) -> RenderedFileSet:
    return render_layout(GAME_LAYOUT, spec, generated_at)


def render_api_service(spec: ProjectSpec, generated_at: Optional[str] = None) -> RenderedFileSet:
    return render_layout(API_SERVICE_LAYOUT, spec, generated_at)


def render_custom(spec: ProjectSpec, generated_at: Optional[str] = None) -> RenderedFileSet:
    return render_layout(CUSTOM_LAYOUT, spec, generated_at)


RENDERERS: Dict[Category, Callable[..., RenderedFileSet]] = {
    Category.WEB_APP: render_web_app,
    Category.MOBILE_APP: render_mobile_app,
    Category.AI_MODEL: render_ai_model,
    Category.ECOMMERCE: render_ecommerce,
    Category.GAME: render_game,
    Category.API_SERVICE: render_api_service,
    Category.CUSTOM: render_custom,
}


def render(category: Category, spec: ProjectSpec, generated_at: Optional[str] = None) -> RenderedFileSet:
    """Render the file set for ``category`` from ``spec``. No I/O."""
    renderer = RENDERERS.get(Category(category))
    if renderer is None:
        raise TemplateRenderError(f"No renderer registered for category {category}")
    return renderer(spec, generated_at)
