"""Domain Interfaces (Ports):

Defines the contracts (Abstract Base Classes) that cache layers and
infrastructure adapters must implement.
"""
