"""gh-profile -- generate a GitHub profile README from live GitHub data.

gh-profile fetches a user's public profile and repositories, normalizes
them into a stable data model, renders the result through a template and
lets plugins adjust the data and the rendered markdown along the way.

Typical workflow::

    gh-profile generate octocat -t showcase -o README.md
    gh-profile preview octocat            # redacted render on stdout

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for config, GitHub payloads and normalized data.
    config: Config file loading, migration and precedence resolution.
    plugins: Plugin contract, validator, resolver, registry and runner.
    templates: Template registry, built-in templates and preview.
    core: Normalization, aggregation and the generation pipeline.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.3.0"
