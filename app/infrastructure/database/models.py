"""
Modelos de base de datos (ORM).
"""
from sqlalchemy import Column, Text, JSON

from app.infrastructure.database.session import Base


class BlockchainResourceModel(Base):
    """
    Documento espejado de un recurso on-chain.

    La clave es el tipo Move del recurso (p. ej. ``0x1::coin::CoinStore<...>``):
    como maximo un documento por tipo.
    """

    __tablename__ = "blockchain_resources"

    type = Column(Text, primary_key=True)
    data = Column(JSON, nullable=True)

    def to_document(self) -> dict:
        return {"type": self.type, "data": self.data}

    def __repr__(self):
        return f"<BlockchainResource(type={self.type})>"
