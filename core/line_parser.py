# core/line_parser.py

from typing import List


def parse_line(line: str) -> List[str]:
    """
    Split a submitted line into arguments.

    Spaces separate arguments outside double quotes and are literal inside
    them; a quote closes the current argument. There is no escape character.
    Whatever is left at the end is always appended (trimmed), so a line that
    ends in a closing quote yields a trailing empty argument.
    """
    args: List[str] = []
    current: List[str] = []
    in_quotes = False

    for c in line:
        if c == '"':
            if current:
                args.append("".join(current))
                current.clear()
            in_quotes = not in_quotes
        elif in_quotes:
            current.append(c)
        elif c == " ":
            if current:
                args.append("".join(current))
                current.clear()
        else:
            current.append(c)

    args.append("".join(current).strip())
    return args
