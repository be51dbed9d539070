"""
Extractors for the configuration dialects credentials are read from.

- ``KEY=VALUE`` lines, as found in Laravel ``.env`` files
- ``define('KEY', 'VALUE');`` declarations, as found in ``wp-config.php``
"""

import re
from typing import Optional


def extract_env_var(contents: str, var_name: str) -> Optional[str]:
    """
    Return the value assigned to ``var_name`` in ``KEY=VALUE`` text.

    The value is either a double-quoted string or the rest of the line.
    Quotes are stripped and the result trimmed. Only the first matching
    line counts.
    """
    pattern = re.compile(
        rf'^[\t ]*{re.escape(var_name)}[\t ]*=[\t ]*("[^"]*"|[^"\n]*)[\t ]*$',
        re.MULTILINE,
    )
    match = pattern.search(contents)
    if not match:
        return None

    return match.group(1).strip('"').strip()


def extract_define_var(contents: str, var_name: str) -> Optional[str]:
    """
    Return the value of a PHP ``define()`` for ``var_name``.

    The value must be closed by the same quote character that opened it,
    followed by the closing parenthesis, so ``"it's"`` and ``'it\\'s'`` are
    read whole. Escaped quotes are left as written. Anything other than a
    single literal, such as ``'a' . 'b'``, yields None.
    """
    pattern = re.compile(
        rf"""^[\t ]*define\([\t ]*['"]{re.escape(var_name)}['"][\t ]*,"""
        rf"""[\t ]*(['"])((?:\\.|(?!\1)[^\\\n])*)\1[\t ]*\)""",
        re.MULTILINE,
    )
    match = pattern.search(contents)
    if not match:
        return None

    return match.group(2).strip()
