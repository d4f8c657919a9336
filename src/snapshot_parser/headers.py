"""
Manifest header and Export-Package clause parsing.

Header sections follow the JAR manifest rules used by OSGi frameworks:
    - "Name: value" lines
    - a line starting with a single space continues the previous value
    - an empty line ends the section

Export-Package values follow the OSGi clause grammar:
    clause ( ',' clause )*
    clause = package ( ';' package )* ( ';' parameter )*
    parameter = key '=' value | key ':=' value
"""

from typing import Iterable, Optional

from .errors import ManifestHeaderError
from .models import ExportClause


EXPORT_PACKAGE_HEADER = "Export-Package"


def parse_manifest_headers(lines: Iterable[str]) -> dict[str, str]:
    """
    Parse a manifest header section into a name -> value mapping.

    Args:
        lines: Header lines (trailing newlines are ignored)

    Returns:
        Header values keyed by header name, in section order

    Raises:
        ManifestHeaderError: On a continuation before any header, a line
            or a line without a colon
    """
    headers: dict[str, str] = {}
    name: Optional[str] = None
    value_parts: list[str] = []

    def store() -> None:
        # Repeated names (ignoring case) keep the last value.
        for key in [k for k in headers if k.lower() == name.lower()]:
            del headers[key]
        headers[name] = "".join(value_parts).strip()

    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            break

        if line.startswith(" "):
            if name is None:
                raise ManifestHeaderError(
                    f"Continuation line before any header: {line!r}"
                )
            value_parts.append(line[1:])
            continue

        if name is not None:
            store()

        colon = line.find(":")
        if colon == -1:
            raise ManifestHeaderError(f"Header line has no ':' separator: {line!r}")

        name = line[:colon].strip()
        value_parts = [line[colon + 1:]]

    if name is not None:
        store()

    return headers


def find_header(headers: dict[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _split_unquoted(text: str, separator: str) -> list[str]:
    """Split on a separator that is not inside a double-quoted string."""
    parts = []
    current = []
    in_quotes = False
    escaped = False

    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
            continue
        if ch == "\\" and in_quotes:
            current.append(ch)
            escaped = True
            continue
        if ch == '"':
            in_quotes = not in_quotes
        if ch == separator and not in_quotes:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)

    if in_quotes:
        raise ManifestHeaderError(f"Unterminated quoted string in: {text!r}")

    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        if len(value) < 2 or not value.endswith('"'):
            raise ManifestHeaderError(f"Malformed quoted value: {value!r}")
        value = value[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    return value


def _find_unquoted(text: str, target: str) -> int:
    in_quotes = False
    for index, ch in enumerate(text):
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == target and not in_quotes:
            return index
    return -1


def parse_export_clauses(value: Optional[str]) -> list[ExportClause]:
    """
    Parse an Export-Package header value into clauses.

    Args:
        value: Raw header value (None or blank means no exports)

    Returns:
        Clauses in header order

    Raises:
        ManifestHeaderError: On unterminated quotes, empty clauses,
            parameters without a package or packages after parameters

    Example:
        >>> clauses = parse_export_clauses(
        ...     'com.example.a;com.example.b;version="1.2.0";uses:="x,y"'
        ... )
        >>> clauses[0].packages
        ['com.example.a', 'com.example.b']
        >>> clauses[0].attributes["version"]
        '1.2.0'
    """
    if value is None or not value.strip():
        return []

    clauses = []
    for clause_text in _split_unquoted(value, ","):
        if not clause_text.strip():
            raise ManifestHeaderError(f"Empty clause in header value: {value!r}")

        packages: list[str] = []
        attributes: dict[str, str] = {}
        directives: dict[str, str] = {}

        for piece in _split_unquoted(clause_text, ";"):
            piece = piece.strip()
            if not piece:
                raise ManifestHeaderError(f"Empty element in clause: {clause_text.strip()!r}")

            equals = _find_unquoted(piece, "=")
            if equals == -1:
                if attributes or directives:
                    raise ManifestHeaderError(
                        f"Package {piece!r} follows a parameter in clause: {clause_text.strip()!r}"
                    )
                packages.append(piece)
                continue

            if not packages:
                raise ManifestHeaderError(
                    f"Parameter without a package in clause: {clause_text.strip()!r}"
                )

            key = piece[:equals].strip()
            if not key.rstrip(":"):
                raise ManifestHeaderError(f"Parameter without a name: {piece!r}")
            param_value = _unquote(piece[equals + 1:])
            if key.endswith(":"):
                directives[key[:-1].strip()] = param_value
            else:
                attributes[key] = param_value

        clauses.append(ExportClause(
            packages=packages,
            attributes=attributes,
            directives=directives
        ))

    return clauses
