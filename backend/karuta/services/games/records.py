from dataclasses import dataclass


@dataclass(frozen=True)
class PoemRecord:
    """One poem of the catalog: the reading card is the upper verse, the
    grab card is the lower verse."""
    id: int
    author: str
    upper_verse: str
    lower_verse: str

    @classmethod
    def from_dict(cls, data: dict) -> "PoemRecord":
        return cls(
            id=data['id'],
            author=data['author'],
            upper_verse=data['upperVerse'],
            lower_verse=data['lowerVerse'],
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'author': self.author,
            'upperVerse': self.upper_verse,
            'lowerVerse': self.lower_verse,
        }
