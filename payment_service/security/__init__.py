"""Fraud detection."""
from .fraud_detector import HIGH_RISK_COUNTRIES, FraudDetector

__all__ = ["FraudDetector", "HIGH_RISK_COUNTRIES"]
