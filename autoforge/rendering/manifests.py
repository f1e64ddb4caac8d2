"""Package manifests for generated projects, built as ordered dicts."""
from __future__ import annotations

import json
from typing import Any, Dict

from autoforge.domain.entities import Feature, ProjectSpec
from autoforge.rendering.renderer import slugify

DESCRIPTION = "Generated by Autoforge"


def dump_manifest(manifest: Dict[str, Any]) -> str:
    """Serialize with 2-space indentation, keys in insertion order."""
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def _database_dependencies(database: str) -> Dict[str, str]:
    if database == "mongodb":
        return {"mongoose": "^7.0.0"}
    if database == "postgresql":
        return {"pg": "^8.8.0"}
    if database == "mysql":
        return {"mysql2": "^3.6.0"}
    return {}


def _server_dependencies(spec: ProjectSpec) -> Dict[str, str]:
    dependencies = {
        "express": "^4.18.2",
        "cors": "^2.8.5",
        "dotenv": "^16.3.1",
    }
    dependencies.update(_database_dependencies(spec.technologies.get("database", "")))
    if spec.has(Feature.AUTH):
        dependencies["jsonwebtoken"] = "^9.0.0"
        dependencies["bcryptjs"] = "^2.4.3"
    if spec.has(Feature.CHAT):
        dependencies["socket.io"] = "^4.7.2"
    if spec.has(Feature.PAYMENT):
        dependencies["stripe"] = "^13.0.0"
    return dependencies


def _node_manifest(spec: ProjectSpec, scripts: Dict[str, str], dependencies: Dict[str, str]) -> Dict[str, Any]:
    return {
        "name": slugify(spec.name),
        "version": "1.0.0",
        "description": DESCRIPTION,
        "main": "server.js",
        "scripts": scripts,
        "dependencies": dependencies,
        "devDependencies": {"nodemon": "^3.0.1"},
        "license": "MIT",
    }


def web_app_package_json(spec: ProjectSpec) -> str:
    scripts = {
        "start": "node server.js",
        "dev": "nodemon server.js",
    }
    if spec.tech("frontend") == "react":
        scripts["build"] = "npm run build:react"
        scripts["build:react"] = "cd client && npm run build"
    else:
        scripts["build"] = "echo \"Build complete\""
    return dump_manifest(_node_manifest(spec, scripts, _server_dependencies(spec)))


def ecommerce_package_json(spec: ProjectSpec) -> str:
    scripts = {
        "start": "node server.js",
        "dev": "nodemon server.js",
    }
    return dump_manifest(_node_manifest(spec, scripts, _server_dependencies(spec)))


def api_service_package_json(spec: ProjectSpec) -> str:
    scripts = {
        "start": "node server.js",
        "dev": "nodemon server.js",
        "test": "node --test",
    }
    return dump_manifest(_node_manifest(spec, scripts, _server_dependencies(spec)))


def mobile_app_package_json(spec: ProjectSpec) -> str:
    dependencies = {
        "expo": "~49.0.0",
        "react": "18.2.0",
        "react-native": "0.72.0",
        "@react-navigation/native": "^6.1.0",
    }
    if spec.tech("mobile_framework") == "ionic":
        dependencies["@ionic/react"] = "^7.0.0"
    if spec.has(Feature.AUTH):
        dependencies["@react-native-async-storage/async-storage"] = "^1.19.0"
    manifest = {
        "name": slugify(spec.name),
        "version": "1.0.0",
        "description": DESCRIPTION,
        "main": "App.js",
        "scripts": {
            "start": "expo start",
            "android": "expo start --android",
            "ios": "expo start --ios",
            "web": "expo start --web",
        },
        "dependencies": dependencies,
        "license": "MIT",
    }
    return dump_manifest(manifest)


def game_package_json(spec: ProjectSpec) -> str:
    dependencies: Dict[str, str] = {}
    if spec.tech("game_engine") == "phaser":
        dependencies["phaser"] = "^3.60.0"
    manifest = {
        "name": slugify(spec.name),
        "version": "1.0.0",
        "description": DESCRIPTION,
        "scripts": {
            "start": "npx http-server . -p 3000",
        },
        "dependencies": dependencies,
        "license": "MIT",
    }
    return dump_manifest(manifest)
