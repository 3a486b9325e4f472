"""Normalization layer for raw transaction records."""

from ledgerlens.normalization.normalizer import (
    NormalizationResult,
    RejectedRecord,
    TransactionNormalizer,
)

__all__ = ["NormalizationResult", "RejectedRecord", "TransactionNormalizer"]
