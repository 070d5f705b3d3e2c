from __future__ import annotations

import html
import re

_FLAGS = re.IGNORECASE

# Applied in order. Nested or overlapping tags that none of these patterns
# capture fall through to the tag stripper and end up as plain text.
_SUBSTITUTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<h1[^>]*>(.*?)</h1>", _FLAGS), r"# \1\n\n"),
    (re.compile(r"<h2[^>]*>(.*?)</h2>", _FLAGS), r"## \1\n\n"),
    (re.compile(r"<h3[^>]*>(.*?)</h3>", _FLAGS), r"### \1\n\n"),
    (re.compile(r"<strong[^>]*>(.*?)</strong>", _FLAGS), r"**\1**"),
    (re.compile(r"<b[^>]*>(.*?)</b>", _FLAGS), r"**\1**"),
    (re.compile(r"<em[^>]*>(.*?)</em>", _FLAGS), r"*\1*"),
    (re.compile(r"<i[^>]*>(.*?)</i>", _FLAGS), r"*\1*"),
    (re.compile(r"<s[^>]*>(.*?)</s>", _FLAGS), r"~~\1~~"),
    (re.compile(r"<strike[^>]*>(.*?)</strike>", _FLAGS), r"~~\1~~"),
    (re.compile(r"<code[^>]*>(.*?)</code>", _FLAGS), r"`\1`"),
    (re.compile(r"<blockquote[^>]*>(.*?)</blockquote>", _FLAGS), r"> \1\n"),
    (re.compile(r"<li[^>]*>(.*?)</li>", _FLAGS), r"- \1\n"),
    (re.compile(r"<p[^>]*>(.*?)</p>", _FLAGS), r"\1\n\n"),
    (re.compile(r"<br\s*/?>", _FLAGS), "\n"),
]

_TAG_RE = re.compile(r"<[^>]+>")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def html_to_markdown(markup: str) -> str:
    """Best-effort, lossy HTML to Markdown. Not meant to round-trip."""
    out = markup
    for pattern, repl in _SUBSTITUTIONS:
        out = pattern.sub(repl, out)
    out = _TAG_RE.sub("", out)
    out = html.unescape(out)
    out = _BLANK_RUN_RE.sub("\n\n", out)
    return out.strip()
