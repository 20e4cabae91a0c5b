"""
Recipe — read the version declaration out of the Dockerfile.

Two declaration forms are understood:
  ENV SYMBOLSERVER_VERSION 1.4.0      (key, whitespace, value)
  ENV SYMBOLSERVER_VERSION=1.4.0 ...  (one or more key=value pairs)

Line continuations are not joined; a trailing backslash is dropped and
the version must be declared on a single line.
"""
import logging
import re
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from docker_release.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Docker tag grammar
TAG_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")


@dataclass(frozen=True)
class EnvDeclaration:
    key: str
    value: str
    line_no: int   # 1-based


def read_recipe_lines(path: Path) -> List[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise ConfigurationError(f"cannot read build recipe {path}: {e}") from e


def _split_pairs(rest: str, line_no: int) -> List[Tuple[str, str]]:
    first = rest.split(None, 1)
    if "=" not in first[0]:
        value = first[1].strip() if len(first) > 1 else ""
        return [(first[0], value)]

    try:
        tokens = shlex.split(rest)
    except ValueError as e:
        logger.warning("line %d: unparseable declaration skipped (%s)", line_no, e)
        return []
    return [tuple(t.split("=", 1)) for t in tokens if "=" in t]


def parse_env_declarations(
    lines: Iterable[str],
    declaration: str = "ENV",
) -> List[EnvDeclaration]:
    """All key/value declarations introduced by *declaration*, in file order."""
    found: List[EnvDeclaration] = []
    for line_no, line in enumerate(lines, start=1):
        line = line.rstrip()
        if line.endswith("\\"):
            line = line[:-1]
        fields = line.split(None, 1)
        if len(fields) < 2 or fields[0].upper() != declaration.upper():
            continue
        for key, value in _split_pairs(fields[1], line_no):
            found.append(EnvDeclaration(key=key, value=value, line_no=line_no))
    return found


def find_declaration(
    declarations: Iterable[EnvDeclaration],
    key: str,
) -> Optional[EnvDeclaration]:
    for decl in declarations:
        if decl.key == key:
            return decl
    return None


def parse_version(
    lines: Iterable[str],
    key: str,
    declaration: str = "ENV",
) -> str:
    """
    Return the value of the first ``<declaration> <key>`` line.

    Raises
    ------
    ConfigurationError
        No such line, empty value, or a value that is not a valid image tag.
    """
    lines = list(lines)
    decl = find_declaration(parse_env_declarations(lines, declaration), key)
    if decl is None:
        mention = re.compile(rf"(^|\s){re.escape(key)}(=|\s|$)")
        for line_no, line in enumerate(lines, start=1):
            fields = line.split(None, 1)
            if len(fields) == 2 and fields[0].upper() == declaration.upper() \
                    and mention.search(fields[1]):
                raise ConfigurationError(
                    f"line {line_no}: could not parse {key} from {line.strip()!r}"
                )
        raise ConfigurationError(f"no '{declaration} {key}' declaration in build recipe")
    if not decl.value:
        raise ConfigurationError(f"line {decl.line_no}: {key} is declared without a value")
    if not TAG_RE.match(decl.value):
        raise ConfigurationError(
            f"line {decl.line_no}: {key} value {decl.value!r} is not a bare version token"
        )
    return decl.value


def check_download_url(
    declarations: Iterable[EnvDeclaration],
    version: str,
    key: str,
) -> bool:
    """
    Warn when the declared download URL does not mention *version*.

    Returns False only when the URL is declared and stale.
    """
    decl = find_declaration(declarations, key)
    if decl is None or version in decl.value:
        return True
    logger.warning(
        "line %d: %s does not reference version %s: %s",
        decl.line_no, key, version, decl.value,
    )
    return False
