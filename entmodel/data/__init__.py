"""Normalization of nested record data into flat entity tables."""

from entmodel.data.models import NormalizedData
from entmodel.data.normalizer import Normalizer, normalize

__all__ = ["NormalizedData", "Normalizer", "normalize"]
