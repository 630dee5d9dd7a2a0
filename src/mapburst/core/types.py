"""
Core type definitions for mapburst.

The tree models serialise with the camelCase keys the browser client reads
(``sizeGzipped``, ``sourcesContent``), while Python code uses snake_case.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field


class LeafInfo(TypedDict):
    """Per-file facts handed to a caller-supplied table function."""
    name: str
    contents: str
    size: int
    sizeGzipped: int
    loc: int


TableFn = Callable[[LeafInfo], Dict[str, Any]]


class TreeNode(BaseModel):
    """
    A file or directory in the source tree.

    Files are told apart from directories by the presence of ``size``,
    not by an empty ``children`` list.
    """
    name: str
    children: List["TreeNode"] = Field(default_factory=list)
    size: Optional[int] = None
    size_gzipped: Optional[int] = Field(default=None, alias="sizeGzipped")
    loc: Optional[int] = None
    contents: Optional[str] = None
    table: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def is_file(self) -> bool:
        return self.size is not None

    def child(self, name: str) -> Optional["TreeNode"]:
        """Return the direct child with this exact name, if any."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def walk(self) -> Iterator["TreeNode"]:
        """Yield this node and every descendant, depth-first, in child order."""
        yield self
        for node in self.children:
            yield from node.walk()

    def files(self) -> Iterator["TreeNode"]:
        return (node for node in self.walk() if node.is_file)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; leaf-only attributes are omitted on directories."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeNode":
        return cls.model_validate(data)


TreeNode.model_rebuild()


class SourceMap(BaseModel):
    """
    The parts of a source map the visualizer needs.

    Unknown keys (``mappings``, ``names``, ``version`` ...) are preserved.
    """
    sources: List[str]
    sources_content: List[Optional[str]] = Field(alias="sourcesContent")
    file: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def entries(self) -> Iterator[tuple[str, str]]:
        """Yield (path, contents) pairs in source order."""
        for path, contents in zip(self.sources, self.sources_content):
            yield path, contents or ""
