"""Code generator: ordered per-node templates assembled into one script."""

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import CODE_BANNER, EMPTY_PIPELINE_PLACEHOLDER
from .registry import NodeRegistry, default_registry
from .schemas import Edge, GeneratedCode, Node
from .sequencer import sequence

logger = logging.getLogger(__name__)

# Top-level ``import x`` / ``from x import y``; indented imports stay in the body.
IMPORT_PATTERN = re.compile(r"^(import\s+[\w.]+|from\s+[\w.]+\s+import\s+\S)")


def is_import_line(line: str) -> bool:
    return bool(IMPORT_PATTERN.match(line.rstrip()))


def split_imports(block: str) -> Tuple[List[str], List[str]]:
    """Partition a block into import lines and body lines.

    Body lines lose leading and trailing blank lines, and runs of blank lines
    left behind by removed imports collapse to a single blank line.
    """
    imports: List[str] = []
    body: List[str] = []
    for raw_line in block.splitlines():
        line = raw_line.rstrip()
        if is_import_line(line):
            imports.append(line)
            continue
        if not line.strip() and (not body or not body[-1].strip()):
            continue
        body.append(line)
    while body and not body[-1].strip():
        body.pop()
    return imports, body


def node_label_comment(label: str) -> str:
    return f"# ── {label} ──"


def generate(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    registry: Optional[NodeRegistry] = None,
    include_labels: bool = True,
) -> GeneratedCode:
    """
    Emit the pipeline as a single script.

    Nodes are taken in sequencer order. A node whose type is unregistered, or
    whose template renders nothing or fails, is skipped without error. Import
    lines are hoisted to the top in first-seen order with duplicates removed.
    """
    registry = registry if registry is not None else default_registry
    if not nodes:
        return GeneratedCode(full_source=EMPTY_PIPELINE_PLACEHOLDER)

    import_lines: List[str] = []
    seen_imports = set()
    per_node_source: Dict[str, str] = {}
    sections: List[str] = []

    for node in sequence(nodes, edges):
        descriptor = registry.lookup(node.type)
        if descriptor is None:
            logger.debug("Skipping node %s: no descriptor for type '%s'", node.id, node.type)
            continue

        try:
            block = descriptor.render(node.configuration)
        except Exception as exc:
            logger.warning("Skipping node %s: template for '%s' failed: %s", node.id, node.type, exc)
            continue
        if not block or not block.strip():
            logger.debug("Skipping node %s: template produced no code", node.id)
            continue

        imports, body = split_imports(block)
        for line in imports:
            if line not in seen_imports:
                seen_imports.add(line)
                import_lines.append(line)

        if not body:
            continue
        body_text = "\n".join(body)
        per_node_source[node.id] = body_text
        if include_labels:
            sections.append(f"{node_label_comment(registry.label_of(node))}\n{body_text}")
        else:
            sections.append(body_text)

    parts: List[str] = []
    if import_lines:
        parts.append("\n".join(import_lines))
    parts.append(CODE_BANNER)
    parts.extend(sections)
    full_source = "\n\n".join(parts) + "\n"

    return GeneratedCode(
        full_source=full_source,
        import_lines=import_lines,
        per_node_source=per_node_source,
    )
