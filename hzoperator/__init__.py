"""Hazelcast platform resource model and AsciiDoc API reference generator."""

__version__ = "0.1.0"