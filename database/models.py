"""
SQLAlchemy ORM models mapping the existing ``UsuariosVidal`` table.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "UsuariosVidal"

    id = Column("IdUsuario", Integer, primary_key=True, autoincrement=True)
    name = Column("Nombre", String(100), nullable=True)
    email = Column("Correo", String(255), nullable=False)
    password_hash = Column("ContrasenaHash", String(256), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
