# Re-export helpers for Markdown template files.

from .template_io import (
    export_template_markdown,
    import_template_markdown,
    read_template_file,
    template_metadata,
    write_template_file,
)

__all__ = [
    "export_template_markdown",
    "import_template_markdown",
    "read_template_file",
    "template_metadata",
    "write_template_file",
]
