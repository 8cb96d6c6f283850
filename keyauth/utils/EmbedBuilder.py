"""
Builds Discord-style message bodies for KeyAuth webhooks.
"""
import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class EmbedField:
    name: str
    value: str
    inline: Optional[bool] = None


@dataclass
class EmbedAuthor:
    name: str
    url: Optional[str] = None
    iconURL: Optional[str] = None


@dataclass
class EmbedFooter:
    text: str
    iconURL: Optional[str] = None


@dataclass
class Embed:
    color: Optional[int] = None
    description: Optional[str] = None
    timestamp: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    author: Optional[EmbedAuthor] = None
    fields: List[EmbedField] = field(default_factory=list)
    footer: Optional[EmbedFooter] = None
    image: Optional[str] = None
    thumbnail: Optional[str] = None

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary, dropping unset fields"""
        result = {}
        for key, value in asdict(self).items():
            if value is None or value == []:
                continue
            if key in ('image', 'thumbnail'):
                value = {'url': value}
            elif isinstance(value, dict):
                value = {k: v for k, v in value.items() if v is not None}
            elif key == 'fields':
                value = [{k: v for k, v in item.items() if v is not None} for item in value]
            result[key] = value
        return result


class EmbedBuilder:
    """Message with optional text content and embeds."""

    def __init__(self, content: Optional[str] = None, embeds: Optional[List[Embed]] = None):
        self.content = content
        self.embeds = embeds

    def toJSON(self) -> Dict[str, Any]:
        return {
            'content': self.content,
            'embeds': None if self.embeds is None else [
                embed.toDict() if isinstance(embed, Embed) else embed for embed in self.embeds
            ],
        }

    def toString(self) -> str:
        return json.dumps({k: v for k, v in self.toJSON().items() if v is not None})

    def __str__(self) -> str:
        return self.toString()
