"""Parse tree node definitions.

These models are the explicit, serializable tree that every renderer consumes.
Attribute names are snake_case in Python and aliased to the field names used
in the JSON and YAML documents (``TypeName``, ``Text``, ``Children``,
``Properties``, ``Name``, ``Value``).
"""

from typing import Any, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class Property(BaseModel):
    """A named or positional piece of structural data attached to a node.

    Elements inside a list-valued property carry no name. A value is either a
    string, a nested list of properties, or absent.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(
        default=None, alias="Name", description="Attribute name, absent for list elements"
    )
    value: Optional[Union[str, List["Property"]]] = Field(
        default=None, alias="Value", description="String or nested property list"
    )


class ParseData(BaseModel):
    """One captured node of the parsed SQL statement.

    Attributes:
        type_name: Runtime type name of the underlying parser node
        text: SQL text spanned by the node
        children: Child nodes in visitation order, absent for leaves
        properties: Type-specific structural data, absent when there is none
    """

    model_config = ConfigDict(populate_by_name=True)

    type_name: str = Field(..., alias="TypeName", description="Runtime type name of the node")
    text: str = Field(default="", alias="Text", description="Source text spanned by the node")
    children: Optional[List["ParseData"]] = Field(
        default=None, alias="Children", description="Child nodes, absent for leaves"
    )
    properties: Optional[List[Property]] = Field(
        default=None, alias="Properties", description="Reflected structural data"
    )

    _source: Any = PrivateAttr(default=None)

    @classmethod
    def for_node(cls, type_name: str, text: str, source: Any) -> "ParseData":
        """Create a node that remembers the parser object it was captured from."""
        data = cls(type_name=type_name, text=text)
        data._source = source
        return data

    @property
    def source(self) -> Any:
        """The parser object this node was captured from, if any."""
        return self._source

    def add_child(self, child: "ParseData") -> None:
        if self.children is None:
            self.children = []
        self.children.append(child)

    def count(self) -> int:
        """Return the number of nodes in this subtree, this node included."""
        return sum(1 for _ in self.walk())

    def walk(self) -> Iterator["ParseData"]:
        """Yield every node of this subtree in depth-first, pre-order order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))


Property.model_rebuild()
ParseData.model_rebuild()
