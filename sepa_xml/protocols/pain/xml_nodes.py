"""
XML node helpers

A single helper creates a nested element path below a parent and returns
the innermost element. Its policy decides what happens to the value:

    # Path only, no text
    add_node(root, "PmtTpInf", policy=NodePolicy.CONTAINER)
    # -> <root><PmtTpInf/></root>

    # Path and text only when the value is present (None and "" are absent)
    add_node(root, "Purp", "Cd", value=code, policy=NodePolicy.OPTIONAL)

    # Path and text always, zero and False included
    add_node(root, "NbOfTxs", value=0)
    # -> <root><NbOfTxs>0</NbOfTxs></root>
"""

from enum import Enum, auto
from typing import Any, Optional
from xml.etree import ElementTree as ET


class NodePolicy(Enum):
    """How add_node treats the value."""

    CONTAINER = auto()  # Create the path, never set text
    OPTIONAL = auto()  # Skip the whole path when the value is absent
    REQUIRED = auto()  # Always create the path and set text


def format_value(value: Any) -> str:
    """Render a value as element text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_absent(value: Any) -> bool:
    return value is None or value == ""


def add_node(
    parent: ET.Element,
    *tags: str,
    value: Any = None,
    policy: NodePolicy = NodePolicy.REQUIRED,
) -> Optional[ET.Element]:
    """
    Append a nested element path to parent.

    Args:
        parent: Element receiving the path
        tags: Element names from outermost to innermost
        value: Text for the innermost element
        policy: CONTAINER, OPTIONAL or REQUIRED

    Returns:
        The innermost element, or None when an OPTIONAL value was absent
    """
    if policy is NodePolicy.OPTIONAL and is_absent(value):
        return None

    node = parent
    for tag in tags:
        node = ET.SubElement(node, tag)

    if policy is not NodePolicy.CONTAINER:
        node.text = format_value(value)

    return node
