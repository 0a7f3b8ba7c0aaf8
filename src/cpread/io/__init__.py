"""I/O layer for cpread - delivers raw lines to the tokenizer."""

# Re-export these for import convenience
from .base import LineSource, DEFAULT_ENCODING
from .local import StreamLineSource, FileLineSource, open_file_source, open_stdin_source


def open_source(source=None, **kwargs):
    """Factory function to create the appropriate LineSource for `source`.

    None or "-" selects stdin, anything with `readline` is wrapped as a
    stream (not closed by us), everything else is treated as a path.
    """
    if source is None or (isinstance(source, str) and source == "-"):
        return open_stdin_source(**kwargs)

    if isinstance(source, LineSource):
        return source

    if hasattr(source, 'readline'):
        return StreamLineSource(source, **kwargs)

    return open_file_source(source, **kwargs)
