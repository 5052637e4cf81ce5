"""
Base package: provider-agnostic contracts shared by every backend.

- Interfaces: the ``ContentGenerator`` protocol
- Models: internal content, requests and Google-shaped responses
- Errors and logging: the taxonomy and structured event helpers
- Factory: lazy creation of generators from a ``GeneratorConfig``

Submodules are imported directly (``contentgen_providers.base.factory`` ...);
this package module re-exports nothing so that importing it stays cheap.
"""
