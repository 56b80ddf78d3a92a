import os
import sys
from pathlib import Path

sys.path.append(os.path.join(os.path.dirname(__file__), "src"))

from torcode import (
    BencodeDecodeError,
    BencodeDict,
    BencodeList,
    BencodeString,
    BencodeType,
    InvalidUtf8Error,
    decode_all,
)

INDENT = "  "
# Byte strings longer than this are shown as a size plus a hex preview
PREVIEW_BYTES = 16


def format_string(value: BencodeString) -> str:
    try:
        return repr(value.as_str())
    except InvalidUtf8Error:
        raw = value.as_bytes()
        suffix = "..." if len(raw) > PREVIEW_BYTES else ""
        return f"<{len(raw)} bytes: {raw[:PREVIEW_BYTES].hex()}{suffix}>"


def format_tree(value: BencodeType, depth: int = 0) -> list:
    """Renders a decoded value as indented lines, one per scalar or container."""
    pad = INDENT * depth

    if isinstance(value, BencodeList):
        lines = [f"{pad}list ({len(value)} items)"]
        for item in value:
            lines.extend(format_tree(item, depth + 1))
        return lines

    if isinstance(value, BencodeDict):
        lines = [f"{pad}dict ({len(value)} keys)"]
        for key, item in value.as_dict().items():
            label = format_string(BencodeString(key))
            if isinstance(item, (BencodeList, BencodeDict)):
                lines.append(f"{pad}{INDENT}{label}:")
                lines.extend(format_tree(item, depth + 2))
            else:
                lines.append(f"{pad}{INDENT}{label}: {format_tree(item)[0]}")
        return lines

    if isinstance(value, BencodeString):
        return [f"{pad}{format_string(value)}"]

    return [f"{pad}{value.as_int()}"]


def main(argv=None) -> int:
    paths = sys.argv[1:] if argv is None else argv
    if not paths:
        print("usage: main.py FILE [FILE ...]", file=sys.stderr)
        return 2

    failed = False
    for path in map(Path, paths):
        try:
            root = decode_all(path.read_bytes())
        except (OSError, BencodeDecodeError) as e:
            print(f"[main] {path}: {e}", file=sys.stderr)
            failed = True
            continue

        print(f"[main] {path}")
        for line in format_tree(root):
            print(line)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
