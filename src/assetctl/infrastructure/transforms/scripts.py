"""JavaScript minification via rjsmin."""

from __future__ import annotations

import rjsmin


def minify_js(source: str, *, keep_bang_comments: bool = False) -> str:
    """Strip comments and insignificant whitespace from *source*."""
    return rjsmin.jsmin(source, keep_bang_comments=keep_bang_comments)
