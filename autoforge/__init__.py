"""
autoforge Application Package

Directory Structure:
├── routers/           # FastAPI route handlers
├── schemas/           # Pydantic models for API requests/responses
├── application/       # Command pipeline and keyword classification
├── domain/            # Entities, errors, events, identifiers
├── rendering/         # Jinja2 templates and per-category file layouts
├── storage/           # Project store, file materializer, zip export
└── config.py          # Application configuration

A command flows through the pipeline as:
1. **KeywordClassifier** (application.keyword_classifier): text -> ProjectSpec
2. **render** (rendering): ProjectSpec -> relative path -> content mapping
3. **ProjectStore** (storage.memory): registers the project record
4. **FileMaterializer** (storage.filesystem): writes files under PROJECTS_DIR/<id>
5. **ArchiveExporter** (storage.archive): zips a project on download
"""
