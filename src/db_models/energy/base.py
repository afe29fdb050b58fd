"""Declarative base for the energy database."""

from sqlalchemy.orm import declarative_base

EnergyBase = declarative_base()

__all__ = ["EnergyBase"]
