"""Connection string option merging for client entities."""

from __future__ import annotations

import json
from typing import Any


def _format_option(value: Any) -> str:
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, str):
        text = value
    elif isinstance(value, (int, float)):
        text = str(value)
    else:
        text = json.dumps(value)
    return text.lstrip('"').rstrip('"')


def merge_uri_options(uri: str, uri_options: dict[str, Any] | None = None) -> str:
    """Merge ``uri_options`` into the query string of ``uri``.

    Options in ``uri_options`` override options of the same name already
    present in ``uri``; other existing options keep their relative order.

    Args:
        uri: Base connection string, e.g. ``mongodb://host/?ssl=false``.
        uri_options: Options to merge in. If None, ``uri`` is returned as is.

    Returns:
        The merged connection string.
    """
    if uri_options is None:
        return uri

    base, _, query = uri.partition("?")
    # Two slashes precede the host list and one precedes the auth database;
    # the latter is optional in the input but required before "?".
    if base.count("/") < 3:
        base += "/"

    options: list[str] = []
    for option in query.split("&") if query else []:
        if not option:
            continue
        key = option.split("=", 1)[0]
        if key not in uri_options:
            options.append(option)

    for key, value in uri_options.items():
        options.append(f"{key}={_format_option(value)}")

    if not options:
        return base
    return f"{base}?{'&'.join(options)}"
