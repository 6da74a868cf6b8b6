"""Infrastructure Layer: configuration, logging and console adapters.

Connects the cache library to the outside world (environment, files,
terminal) without the core depending on any of it.
"""
