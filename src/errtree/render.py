"""
Flatten an error tree into indented, wrapped text.

Rendering happens in two passes:

1. `build_render_tree` turns an `Error` (and the context chains attached to it
   and its descendants) into a tree of `Branch` / `KeyValueLeaf` nodes. Nodes
   are visited in pre-order and context frames already surfaced by an ancestor
   or an earlier sibling are skipped, so attributes shared through a common
   frame are printed once, at the first point in the tree that reaches them.
2. `render` serializes the node tree depth-first with two spaces of indent per
   branch level, wrapping every line to the target width.

Both passes use explicit work stacks, so cause chains thousands of levels deep
render without hitting the interpreter recursion limit.
"""

from __future__ import annotations

import shutil
import textwrap
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AbstractSet, Optional, Union

from rich.cells import cell_len

if TYPE_CHECKING:
    from errtree.log import Log
    from errtree.tree import Error

CAUSED_BY = "Caused by:"
INCIDENTALLY = "Incidentally:"
INDENT = "  "
FALLBACK_WIDTH = 80
MIN_TEXT_WIDTH = 20


@dataclass
class KeyValueLeaf:
    key: str
    value: str


@dataclass
class Branch:
    title: str
    children: list["RenderNode"] = field(default_factory=list)


RenderNode = Union[Branch, KeyValueLeaf]


def _context_leaves(
    contexts: tuple["Log", ...],
    seen_frames: set["Log"],
) -> list[KeyValueLeaf]:
    """Walk each context chain toward its root, emitting attributes of unseen frames.

    Frames walked here are added to `seen_frames`.
    """
    leaves: list[KeyValueLeaf] = []
    seen_keys: set[str] = set()
    for log in contexts:
        for frame in log.frames():
            # Frames hash by identity, so this is an identity check.
            if frame in seen_frames:
                break
            for key, value in frame.attrs.items():
                if key in seen_keys:
                    continue
                seen_keys.add(key)
                leaves.append(KeyValueLeaf(key, value))
            seen_frames.add(frame)
    return leaves


def build_render_tree(error: "Error", seen_frames: AbstractSet["Log"] = frozenset()) -> Branch:
    """
    Build the render-node tree for `error`.

    Context frames are shown at the first node, in pre-order, whose chains
    reach them: once an ancestor or an earlier sibling has shown a frame, its
    attributes (and those of its ancestors) are not repeated. `seen_frames`
    holds frames already displayed elsewhere. An error's own attributes are
    always shown.
    """
    seen: set["Log"] = set(seen_frames)
    root: Optional[Branch] = None
    # (error, list the built node is appended to)
    stack: list[tuple["Error", Optional[list[RenderNode]]]] = [(error, None)]
    while stack:
        current, target = stack.pop()
        node = Branch(current.message)
        if target is None:
            root = node
        else:
            target.append(node)

        node.children.extend(KeyValueLeaf(key, value) for key, value in current.attrs.items())
        # Only context keys are deduplicated, never the error's own.
        node.children.extend(_context_leaves(current.context, seen))

        pending: list[tuple["Error", Optional[list[RenderNode]]]] = []
        for title, children in ((CAUSED_BY, current.causes), (INCIDENTALLY, current.incidental)):
            if not children:
                continue
            group = Branch(title)
            node.children.append(group)
            pending.extend((child, group.children) for child in children)
        # Reversed so children are visited, and appended, in original order.
        stack.extend(reversed(pending))

    assert root is not None
    return root


def resolve_width(width: Optional[int] = None) -> int:
    """Pick the line width: explicit, then settings, then terminal, then 80."""
    if width is not None:
        return width
    from errtree.config import get_settings

    configured = get_settings().line_width
    if configured is not None:
        return configured
    return shutil.get_terminal_size((FALLBACK_WIDTH, 24)).columns or FALLBACK_WIDTH


def wrap(text: str, initial_indent: str, subsequent_indent: str, width: int) -> list[str]:
    """
    Wrap `text` into lines, keeping its own line breaks.

    Deeply nested text always gets at least MIN_TEXT_WIDTH columns after its
    indent instead of being broken apart character by character.
    """
    width = max(width, len(initial_indent) + MIN_TEXT_WIDTH, len(subsequent_indent) + MIN_TEXT_WIDTH)
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        wrapped = textwrap.wrap(
            paragraph,
            width=width,
            initial_indent=subsequent_indent if lines else initial_indent,
            subsequent_indent=subsequent_indent,
            break_on_hyphens=False,
        )
        lines.extend(wrapped or [(subsequent_indent if lines else initial_indent).rstrip()])
    return lines


def render(node: RenderNode, width: Optional[int] = None, indent: int = 0) -> str:
    """Serialize a render tree to text, one trailing newline per line."""
    width = resolve_width(width)
    out: list[str] = []
    stack: list[tuple[int, RenderNode]] = [(indent, node)]
    while stack:
        depth, top = stack.pop()
        prefix = INDENT * depth
        if isinstance(top, KeyValueLeaf):
            label = f"- {top.key} = "
            lines = wrap(top.value.strip(), prefix + label, prefix + " " * cell_len(label), width)
        else:
            lines = wrap(top.title, prefix, prefix, width)
            stack.extend((depth + 1, child) for child in reversed(top.children))
        out.extend(line + "\n" for line in lines)
    return "".join(out)


def render_error(error: "Error", width: Optional[int] = None) -> str:
    """Render an error and its attached context chains to text."""
    return render(build_render_tree(error), width=width)
