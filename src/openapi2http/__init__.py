"""openapi2http -- Convert OpenAPI/Swagger documents into ``.http`` request files.

This package reads an OpenAPI 3.x (or Swagger 2.0) document from a local file
or an HTTP/HTTPS URL and writes a plain-text ``.http`` collection with one
templated request per operation, ready for editor-integrated HTTP clients such
as VS Code REST Client or the JetBrains HTTP Client.

Typical usage::

    openapi2http --source https://petstore3.swagger.io/api/v3/openapi.json
    openapi2http -s ./openapi.yaml -e http://localhost:8080 -o local.http

Modules:
    app: Typer application and CLI entry point.
    converter: The end-to-end conversion pipeline.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "1.0.0"
