"""Modelos SQLAlchemy."""
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Clase base para modelos."""
    pass


class Usuario(Base):
    """Modelo de usuarios (solo lectura)."""
    __tablename__ = "usuarios"
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nombre: Mapped[str | None] = mapped_column(String(200), nullable=True)
    apellido: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)


class Producto(Base):
    """Modelo de productos (solo lectura)."""
    __tablename__ = "productos"
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    codigo: Mapped[str | None] = mapped_column(String(50), nullable=True)
    nombre: Mapped[str | None] = mapped_column(String(300), nullable=True)
    categoria: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Datos heredados: puede venir como "12,50"
    precio: Mapped[str | None] = mapped_column(String(50), nullable=True)


class Pedido(Base):
    """
    Modelo de pedidos (solo lectura).
    
    `documento` guarda el pedido tal como lo escribió el servicio de órdenes
    (resumen, productos, totales...), con la forma que tenía en cada época.
    """
    __tablename__ = "pedidos"
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    codigo: Mapped[str | None] = mapped_column(String(50), nullable=True)
    user_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("usuarios.id"), nullable=True)
    estado: Mapped[str | None] = mapped_column(String(50), nullable=True)
    fecha: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    created_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    documento: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)


class Reporte(Base):
    """Modelo de reportes generados."""
    __tablename__ = "reportes"
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), default="report")
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON)
    created_by: Mapped[str] = mapped_column(String(255), default="")
    language: Mapped[str] = mapped_column(String(10), default="en")
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class Proyeccion(Base):
    """Modelo de proyecciones financieras."""
    __tablename__ = "proyecciones"
    
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200))
    type: Mapped[str] = mapped_column(String(50), default="financial")
    payload: Mapped[dict[str, Any]] = mapped_column(JSON)
    created_by: Mapped[str] = mapped_column(String(255), default="")
    language: Mapped[str] = mapped_column(String(10), default="en")
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
