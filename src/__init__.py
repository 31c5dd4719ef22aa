"""
Gift Card Service

A FastAPI-based service where registered users send monetary gift
cards to each other and receivers accept or reject them.
"""

__version__ = "0.1.0"
