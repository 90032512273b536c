"""OSC 8 terminal hyperlinks.

Modern terminals turn text wrapped in an OSC 8 escape sequence into a
clickable link::

    ESC ] 8 ; params ; uri BEL  text  ESC ] 8 ; ; BEL

``params`` is an optional ``key=value`` list separated by ``:`` (``id``
ties together the pieces of a link broken across lines).
"""


def hyperlink(url: str, text: str | None = None, params: dict[str, str] | None = None) -> str:
    """Wrap *text* (default: the URL itself) in an OSC 8 link to *url*."""
    param_str = ":".join(f"{key}={value}" for key, value in (params or {}).items())
    return f"\x1b]8;{param_str};{url}\x07{text if text is not None else url}\x1b]8;;\x07"

