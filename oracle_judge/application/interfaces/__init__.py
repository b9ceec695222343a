"""Interfaces - Dependency contracts for use cases"""
from .prediction_repository import IPredictionRepository

__all__ = ["IPredictionRepository"]
