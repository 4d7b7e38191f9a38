"""Minimal markup tree: nodes with a name, attributes, text content and children."""
import io
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lxml import etree


class XMLParseError(Exception):
    """The document stopped being well-formed at ``line_number``."""

    def __init__(self, error: Exception, line_number: int):
        super().__init__(f"{error} (line {line_number})")
        self.error = error
        self.line_number = line_number


class NoContentError(XMLParseError):
    """The document is empty or has no root element."""

    def __init__(self, error: Optional[Exception] = None):
        super().__init__(error or ValueError("Document has no root element"), 1)


@dataclass
class XMLNode:
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    content: str = ""
    children: List["XMLNode"] = field(default_factory=list)

    def child_for(self, tag: str) -> Optional["XMLNode"]:
        return next((c for c in self.children if c.name.lower() == tag), None)

    def children_of_type(self, tag: str) -> List["XMLNode"]:
        return [c for c in self.children if c.name.lower() == tag]


class BasicXMLParser:
    def __init__(self, xml: str):
        self.xml = xml

    def parse(self) -> XMLNode:
        """Build the node tree of the whole document.

        Raises NoContentError when no element was opened before the document
        ended or failed, XMLParseError for any later syntax error.
        """
        data = self.xml.encode("utf-8")
        stack: List[XMLNode] = []
        root = None
        last_line = 1
        try:
            for event, elem in etree.iterparse(io.BytesIO(data), events=("start", "end"),
                                               resolve_entities=False, no_network=True,
                                               encoding="utf-8"):
                if event == "start":
                    last_line = elem.sourceline or last_line
                    node = XMLNode(name=etree.QName(elem).localname,
                                   attributes={etree.QName(k).localname: v for k, v in elem.attrib.items()})
                    if stack:
                        stack[-1].children.append(node)
                    else:
                        root = node
                    stack.append(node)
                else:
                    stack.pop().content = (elem.text or "").strip()
        except etree.XMLSyntaxError as e:
            if root is None:
                raise NoContentError(e)
            raise XMLParseError(e, e.lineno if e.lineno and e.lineno > 0 else last_line)

        if root is None:
            raise NoContentError()
        return root
