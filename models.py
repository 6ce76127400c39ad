from dataclasses import dataclass, field

@dataclass
class FeedItem:
    title: str
    link: str
    published: str
    description: str

@dataclass
class Feed:
    url: str
    title: str
    items: list[FeedItem] = field(default_factory=list)
