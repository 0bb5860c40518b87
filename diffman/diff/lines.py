"""Line splitting shared by the parser and the patch engine.

Newline characters separate lines and are not part of them. Every emitted
line is terminated by exactly one newline, so a missing final newline in the
input is not preserved.
"""


def split_lines(text: str) -> list[str]:
    """Split text on '\\n', dropping one trailing '\\r' per line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def join_lines(lines: list[str]) -> str:
    """Join lines, terminating each with a single newline."""
    return "".join(f"{line}\n" for line in lines)
