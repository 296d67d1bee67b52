"""
LSX Resource Reader

Reads LSX resource files (XML attribute trees) into regions of nodes:

    <save>
      <region id="Feats">
        <node id="root">
          <children>
            <node id="Feat">
              <attribute id="UUID" type="guid" value="..."/>
              <attribute id="Name" type="FixedString" value="Alert"/>
            </node>
          </children>
        </node>
      </region>
    </save>

Each region is represented by its root node. Children are grouped by node
id, in document order. Attribute accessors either fall back to a default
or raise MissingAttributeError when no default is given.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import UUID

_REQUIRED: Any = object()

TRUE_VALUES = {"true", "1", "yes"}


class MissingAttributeError(KeyError):
    """A required attribute is absent from a node."""
    def __init__(self, attribute: str, node: str):
        self.attribute = attribute
        self.node = node
        super().__init__(f"Missing the attribute {attribute} for the node {node}")

    def __str__(self):
        return self.args[0]


@dataclass
class LsxAttribute:
    """A typed attribute of an LSX node."""
    attr_type: str
    value: Optional[str] = None
    # TranslatedString attributes carry handle/version instead of value
    handle: Optional[str] = None
    version: Optional[str] = None

    def as_string(self) -> str:
        if self.value is not None:
            return self.value
        if self.handle is not None:
            if self.version is not None:
                return f"{self.handle};{self.version}"
            return self.handle
        return ""


@dataclass
class LsxNode:
    """A node with attributes and id-grouped children."""
    name: str
    attributes: Dict[str, LsxAttribute] = field(default_factory=dict)
    children: Dict[str, List["LsxNode"]] = field(default_factory=dict)

    def __repr__(self):
        return f"LsxNode({self.name}, {len(self.attributes)} attrs, {self.child_count} children)"

    @property
    def child_count(self) -> int:
        return sum(len(nodes) for nodes in self.children.values())

    def get_children(self, name: str) -> List["LsxNode"]:
        return self.children.get(name, [])

    def _lookup(self, name: str, default: Any) -> Optional[LsxAttribute]:
        attribute = self.attributes.get(name)
        if attribute is None and default is _REQUIRED:
            raise MissingAttributeError(name, self.name)
        return attribute

    def get_bool(self, name: str, default: bool = False) -> bool:
        attribute = self.attributes.get(name)
        if attribute is None:
            return default
        return attribute.as_string().strip().lower() in TRUE_VALUES

    def get_string(self, name: str, default: Any = _REQUIRED) -> Optional[str]:
        attribute = self._lookup(name, default)
        if attribute is None:
            return default
        return attribute.as_string()

    def get_guid(self, name: str, default: Any = _REQUIRED) -> Optional[UUID]:
        attribute = self._lookup(name, default)
        if attribute is None:
            return default
        return UUID(attribute.as_string())

    def get_int(self, name: str, default: Any = _REQUIRED) -> Optional[int]:
        attribute = self._lookup(name, default)
        if attribute is None:
            return default
        return int(attribute.as_string())


@dataclass
class LsxResource:
    """A parsed LSX file: region id -> region root node."""
    regions: Dict[str, LsxNode] = field(default_factory=dict)

    def get_region(self, name: str) -> Optional[LsxNode]:
        return self.regions.get(name)


def _convert_node(element: ET.Element) -> LsxNode:
    node = LsxNode(name=element.get("id", ""))

    for attr in element.findall("attribute"):
        attr_id = attr.get("id")
        if not attr_id:
            continue
        node.attributes[attr_id] = LsxAttribute(
            attr_type=attr.get("type", ""),
            value=attr.get("value"),
            handle=attr.get("handle"),
            version=attr.get("version"),
        )

    children = element.find("children")
    if children is not None:
        for child in children.findall("node"):
            converted = _convert_node(child)
            node.children.setdefault(converted.name, []).append(converted)

    return node


def read_lsx(data: bytes) -> LsxResource:
    """
    Parse LSX content.

    Raises:
        xml.etree.ElementTree.ParseError: If the content is not valid XML
    """
    root = ET.fromstring(data)
    resource = LsxResource()

    for region in root.iter("region"):
        region_id = region.get("id")
        if not region_id:
            continue
        region_root = region.find("node")
        if region_root is None:
            region_root = ET.Element("node", id=region_id)
        resource.regions[region_id] = _convert_node(region_root)

    return resource
