"""Default adapters for the engine, dictionary source and language detector.

Modules are imported individually so hosts without the enchant C library can still
use the rest of the package.
"""
