"""Domain Layer: cache contract, value objects and exceptions.

Has no dependencies on the core or infrastructure layers.
"""
