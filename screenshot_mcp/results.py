"""
Tool result content returned to the protocol layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

PNG_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class TextContent:
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImageContent:
    data: str  # base64
    mime_type: str = PNG_MIME_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "image", "mimeType": self.mime_type, "data": self.data}


ContentItem = Union[TextContent, ImageContent]


@dataclass
class ToolResult:
    content: List[ContentItem] = field(default_factory=list)
    is_error: bool = False
    path: Optional[str] = None

    @classmethod
    def text(cls, text: str, is_error: bool = False, path: Optional[str] = None) -> "ToolResult":
        return cls(content=[TextContent(text)], is_error=is_error, path=path)

    @property
    def texts(self) -> List[str]:
        return [item.text for item in self.content if isinstance(item, TextContent)]

    @property
    def images(self) -> List[ImageContent]:
        return [item for item in self.content if isinstance(item, ImageContent)]

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"content": [item.to_dict() for item in self.content]}
        if self.is_error:
            payload["isError"] = True
        return payload
