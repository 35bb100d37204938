"""
L3 Detection — Version text parsing.

Maps a tool identifier and its raw ``--version`` style output to a
version token. Pure: never runs anything, never raises.
"""

from __future__ import annotations

import re

# R prints its own version through an expression, not a flag
R_VERSION_EXPR = "cat(paste0(R.version$major,'.',R.version$minor))"

_THREE_PART = r"(\d+\.\d+\.\d+)"

VERSION_COMMANDS: dict[str, tuple[list[str], str]] = {
    "git":      (["git", "--version"],                  _THREE_PART),
    "quarto":   (["quarto", "--version"],               _THREE_PART),
    "latexmk":  (["latexmk", "-version"],               r"(\d+\.\d+[a-z]?)"),
    "make":     (["make", "--version"],                 r"(\d+\.\d+)"),
    "R":        (["Rscript", "-e", R_VERSION_EXPR],     r"(\d+\.\d+(?:\.\d+)?)"),
}

# Tools whose answer is on the last output line (startup noise comes first)
_LAST_LINE_TOOLS = frozenset({"R"})


def version_command(tool: str, executable: str | None = None) -> list[str]:
    """Build the argv that makes ``tool`` report its version.

    Args:
        tool: Tool identifier as used in the manifest (``git``, ``R``...).
        executable: Explicit binary path (registry fallback). Replaces
            the first argv element.
    """
    entry = VERSION_COMMANDS.get(tool)
    cmd = list(entry[0]) if entry else [tool, "--version"]
    if executable:
        cmd[0] = executable
    return cmd


def extract_version(tool: str, text: str | None) -> str | None:
    """Pull a version token out of tool output.

    Unknown tools use a three-part dotted numeric pattern.

    Returns:
        The first match, or None when nothing matches.
    """
    if not text:
        return None

    entry = VERSION_COMMANDS.get(tool)
    pattern = entry[1] if entry else _THREE_PART

    if tool in _LAST_LINE_TOOLS:
        lines = [ln for ln in text.splitlines() if ln.strip()]
        if not lines:
            return None
        text = lines[-1]

    match = re.search(pattern, text)
    return match.group(1) if match else None
