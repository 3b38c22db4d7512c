"""Adaptadores de infraestructura: in-memory, SQLAlchemy y gateways HTTP."""
