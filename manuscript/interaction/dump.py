from __future__ import annotations

from typing import Any, Callable, Iterator

import click

from ..connectors.base import DesktopConnector

PREVIEW_LIMIT = 20


def preview(value: str, limit: int = PREVIEW_LIMIT) -> str:
    if len(value) > limit:
        return value[: limit - 3] + "..."
    return value


def format_node(conn: DesktopConnector, node: Any, depth: int, color: bool = False) -> str:
    role = conn.role_name(node) or "Unknown"
    ident = conn.identifier(node) or ""
    desc = conn.description(node) or ""
    value = preview(conn.value(node) or "")
    line = "  " * depth + f"- [{role}]"
    if ident:
        line += " id='" + (click.style(ident, fg="green") if color else ident) + "'"
    if desc:
        line += f" desc='{desc}'"
    if value:
        line += f" val='{value}'"
    return line


def iter_dump_lines(conn: DesktopConnector, root: Any, color: bool = False) -> Iterator[str]:
    for node, depth in conn.walk(root):
        yield format_node(conn, node, depth, color=color)


def dump_tree(conn: DesktopConnector, root: Any, echo: Callable[[str], None] = click.echo, color: bool = True) -> int:
    count = 0
    for line in iter_dump_lines(conn, root, color=color):
        echo(line)
        count += 1
    return count
