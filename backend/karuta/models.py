from karuta import db
from karuta.services.games.records import PoemRecord


class Poem(db.Model):
    __tablename__ = 'poem'
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    author = db.Column(db.String(128), nullable=False)
    upper_verse = db.Column(db.Text, nullable=False)
    lower_verse = db.Column(db.Text, nullable=False)

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            author=data['author'],
            upper_verse=data['upperVerse'],
            lower_verse=data['lowerVerse'],
        )

    def to_dict(self):
        return {
            'id': self.id,
            'author': self.author,
            'upperVerse': self.upper_verse,
            'lowerVerse': self.lower_verse,
        }

    def to_record(self) -> PoemRecord:
        return PoemRecord(
            id=self.id,
            author=self.author,
            upper_verse=self.upper_verse,
            lower_verse=self.lower_verse,
        )


def load_catalog():
    """All stored poems ordered by id."""
    return Poem.query.order_by(Poem.id).all()
