import enum
from petshop import db
from petshop.utils.util import new_id, utcnow


class Porte(enum.Enum):
    PEQUENO = 'PEQUENO'
    MEDIO = 'MEDIO'
    GRANDE = 'GRANDE'


class Dog(db.Model):
    __tablename__ = 'dog'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    nome = db.Column(db.String(100), nullable=False)
    idade = db.Column(db.Integer, nullable=False)
    raca = db.Column(db.String(100), nullable=False)
    porte = db.Column(db.Enum(Porte), nullable=False)
    owner_id = db.Column(db.String(36), db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f'<Dog {self.nome} ({self.raca})>'
