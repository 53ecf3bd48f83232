"""Collect driver descriptions from driver sources and render the README table."""

from __future__ import annotations

import argparse
import os
import re
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from wcwidth import wcswidth

PROJECT_NAME = "sqlrepl"

DRIVER_TABLE_START = "<!-- DRIVER DETAILS START -->"
DRIVER_TABLE_END = "<!-- DRIVER DETAILS END -->"

GROUP_NAMES = ("base", "most", "all", "wire")

_SKIP_DIRS = frozenset({"completer", "metadata"})

_DIR_RE = re.compile(r"^([^/]+)/([^./]+)\.go$")
_ALIAS_RE = re.compile(r"^Alias:\s+(.*)$", re.MULTILINE)
_SEE_RE = re.compile(r"^See:\s+(.*)$", re.MULTILINE)
_GROUP_RE = re.compile(r"^Group:\s+(.*)$", re.MULTILINE)
_CLEAN_RE = re.compile(r"[\r\n]")
_PACKAGE_RE = re.compile(r"^\s*package\s+\w+")
_IMPORT_RE = re.compile(r'^\s*(?:import\s+)?(?:[\w.]+\s+)?"([^"]+)"\s*(//.*)?$')
_DIRECTIVE_RE = re.compile(r"^//[a-z0-9]+:[a-z0-9]")


@dataclass
class DriverInfo:
    """Description of one driver, gathered from its source file."""

    tag: str
    driver: str = ""
    pkg: str = ""
    desc: str = ""
    url: str = ""
    cgo: bool = False
    aliases: list[tuple[str, str]] = field(default_factory=list)
    wire: bool = False
    group: str = "most"


def _doc_comment(source: str) -> str:
    """Return the text of the comment block directly above the package clause."""
    lines = source.splitlines()
    pkg_line = next((i for i, line in enumerate(lines) if _PACKAGE_RE.match(line)), None)
    if pkg_line is None:
        raise ValueError("no package clause found")
    comments: list[str] = []
    for line in reversed(lines[:pkg_line]):
        stripped = line.strip()
        if not stripped.startswith("//"):
            break
        comments.append(stripped)
    comments.reverse()
    text: list[str] = []
    for c in comments:
        if _DIRECTIVE_RE.match(c):
            continue
        body = c[2:]
        if body.startswith(" "):
            body = body[1:]
        text.append(body.rstrip())
    collapsed: list[str] = []
    for line in text:
        if line == "" and (not collapsed or collapsed[-1] == ""):
            continue
        collapsed.append(line)
    while collapsed and collapsed[-1] == "":
        collapsed.pop()
    return "\n".join(collapsed) + "\n" if collapsed else ""


def _driver_import(source: str) -> tuple[str, str] | None:
    """Return the import path and comment of the import marked DRIVER."""
    for line in source.splitlines():
        m = _IMPORT_RE.match(line)
        if m and m.group(2) and "DRIVER" in m.group(2):
            return m.group(1), m.group(2)
    return None


def parse_driver_info(tag: str, source: str) -> DriverInfo:
    """Parse the description of driver ``tag`` from its Go source text."""
    name, pkg = tag, ""
    imp = _driver_import(source)
    if imp is not None:
        pkg, comment = imp
        i = comment.find(":")
        if i != -1:
            name = comment[i + 1:].strip()
    comment = _doc_comment(source)
    prefix = f"Package {tag} defines and registers {PROJECT_NAME}'s "
    if not comment.startswith(prefix):
        raise ValueError(f"invalid doc comment prefix for driver {tag!r}")
    desc = comment[len(prefix):]
    i = desc.find(" driver.")
    if i == -1:
        raise ValueError(f"cannot find description suffix for driver {tag!r}")
    desc = desc[:i].strip()
    if not desc:
        raise ValueError(f"unable to parse description for driver {tag!r}")
    aliases = []
    for m in _ALIAS_RE.finditer(comment):
        parts = m.group(1).split(",")
        if len(parts) < 2:
            raise ValueError(f"invalid alias {m.group(1)!r} for driver {tag!r}")
        aliases.append((parts[0].strip(), parts[1].strip()))
    see = _SEE_RE.search(comment)
    if see is None:
        raise ValueError(f"missing See: <URL> for driver {tag!r}")
    group_m = _GROUP_RE.search(comment)
    group = group_m.group(1).strip() if group_m else "most"
    return DriverInfo(
        tag=tag,
        driver=name,
        pkg=pkg,
        desc=_CLEAN_RE.sub("", desc),
        url=see.group(1).strip(),
        cgo="Requires CGO." in _CLEAN_RE.sub("", comment),
        aliases=aliases,
        group=group,
    )


def load_drivers(root: str) -> dict[str, dict[str, DriverInfo]]:
    """Load every driver under ``root`` (``<tag>/<tag>.go``), split by group.

    The result maps ``base``, ``most``, ``all`` and ``wire`` to drivers by tag
    (wire-compatible aliases are keyed by their own name).
    """
    groups: dict[str, dict[str, DriverInfo]] = {g: {} for g in GROUP_NAMES}
    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in sorted(filenames):
            full = os.path.join(dirpath, filename)
            rel = os.path.relpath(full, root).replace(os.sep, "/")
            m = _DIR_RE.match(rel)
            if not m or m.group(1) != m.group(2) or m.group(1) in _SKIP_DIRS:
                continue
            tag = m.group(1)
            with open(full, encoding="utf-8") as f:
                info = parse_driver_info(tag, f.read())
            if info.group not in ("base", "most", "all"):
                raise ValueError(f"driver {tag} has invalid group {info.group!r}")
            groups[info.group][tag] = info
            for alias, desc in info.aliases:
                groups["wire"][alias] = DriverInfo(
                    tag=tag, driver=alias, pkg=info.pkg, desc=desc, wire=True
                )
    return groups


def _width(s: str) -> int:
    w = wcswidth(s)
    return len(s) if w < 0 else w


def table_rows(widths: Sequence[int], c: str, *args: Sequence[str]) -> str:
    """Render ``args`` as Markdown table rows padded with ``c`` to ``widths``.

    With no rows, a single row of empty cells is rendered.
    """
    rows = args or ([""] * len(widths),)
    out = []
    for row in rows:
        line = "".join(
            "|" + c + cell + c * (width - _width(cell)) + c
            for cell, width in zip(row, widths)
        )
        out.append(line + "|\n")
    return "".join(out)


def _build_aliases(v: DriverInfo, aliases: Mapping[str, Sequence[str]]) -> str:
    name = v.driver if v.wire else v.tag
    names = list(aliases.get(name, ()))
    if v.wire:
        names.append(name)
    else:
        names = [v.driver if a == v.tag else a for a in names]
    if names:
        return "`" + "`, `".join(names) + "`"
    return ""


def build_rows(
    drivers: Mapping[str, DriverInfo],
    widths: Sequence[int],
    aliases: Mapping[str, Sequence[str]],
) -> tuple[list[list[str]], list[int]]:
    """Build the table rows for ``drivers``, returning them and the widened widths."""
    widths = list(widths)
    rows = []
    for v in sorted(drivers.values(), key=lambda d: d.desc.lower()):
        notes = ""
        if v.cgo:
            notes = "<sup>[†][f-cgo]</sup>"
        if v.wire:
            notes = "<sup>[‡][f-wire]</sup>"
        row = [
            v.desc,
            "`" + v.tag + "`",
            _build_aliases(v, aliases),
            f"[{v.pkg}][d-{v.tag}]{notes}",
        ]
        widths = [max(_width(cell), w) for cell, w in zip(row, widths)]
        rows.append(row)
    return rows, widths


def build_table_links(*args: Mapping[str, DriverInfo]) -> str:
    """Render the Markdown link references for the drivers, sorted by tag."""
    drivers = sorted((v for m in args for v in m.values()), key=lambda d: d.tag)
    return "".join(f"[d-{v.tag}]: {v.url}\n" for v in drivers)


def build_driver_table(
    groups: Mapping[str, Mapping[str, DriverInfo]],
    aliases: Mapping[str, Sequence[str]],
) -> str:
    """Render the whole driver table with its link references."""
    hdr = ["Database", "Scheme / Tag", "Scheme Aliases", "Driver Package / Notes"]
    widths = [len(h) for h in hdr]
    built = {}
    for name in GROUP_NAMES:
        built[name], widths = build_rows(groups.get(name, {}), widths, aliases)
    s = table_rows(widths, " ", hdr)
    s += table_rows(widths, "-")
    for name in GROUP_NAMES:
        s += table_rows(widths, " ", *built[name]) if built[name] else table_rows(widths, " ")
        s += table_rows(widths, " ")
    s += table_rows(
        widths,
        " ",
        ["**NO DRIVERS**", "`no_base`", "", "_no base drivers (useful for development)_"],
        ["**MOST DRIVERS**", "`most`", "", "_all stable drivers_"],
        ["**ALL DRIVERS**", "`all`", "", "_all drivers_"],
        ["**NO &lt;TAG&gt;**", "`no_<tag>`", "", "_exclude driver with `<tag>`_"],
    )
    return s + "\n" + build_table_links(
        groups.get("base", {}), groups.get("most", {}), groups.get("all", {})
    )


def write_readme(path: str, table: str) -> None:
    """Replace the text between the driver table markers in ``path`` with ``table``."""
    with open(path, encoding="utf-8") as f:
        buf = f.read()
    start = buf.find(DRIVER_TABLE_START)
    end = buf.find(DRIVER_TABLE_END)
    if start == -1 or end == -1:
        raise ValueError("unable to find driver table start/end in README.md")
    out = buf[: start + len(DRIVER_TABLE_START)] + "\n" + table + buf[end:]
    with open(path, "w", encoding="utf-8") as f:
        f.write(out)


def _parse_alias(value: str) -> tuple[str, list[str]]:
    scheme, sep, rest = value.partition("=")
    if not sep or not scheme:
        raise argparse.ArgumentTypeError(f"invalid alias {value!r}, want SCHEME=A,B")
    return scheme, [a.strip() for a in rest.split(",") if a.strip()]


def main(argv: Sequence[str] | None = None) -> int:
    """Regenerate the driver table in the README from the driver sources."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--root", default=".", help="repository root")
    parser.add_argument("--readme", default="", help="README path (default: ROOT/README.md)")
    parser.add_argument(
        "--alias", action="append", type=_parse_alias, default=[],
        metavar="SCHEME=A,B", help="scheme aliases shown for a driver",
    )
    args = parser.parse_args(argv)
    readme = args.readme or os.path.join(args.root, "README.md")
    aliases = dict(args.alias)
    try:
        groups = load_drivers(os.path.join(args.root, "drivers"))
        write_readme(readme, build_driver_table(groups, aliases))
    except (OSError, ValueError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())