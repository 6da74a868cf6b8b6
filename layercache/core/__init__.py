"""Core Layer: the base store, the policy decorators and the composer.

Each decorator wraps another Cache and adds one behavior; the builder
stacks them in a fixed order.
"""
