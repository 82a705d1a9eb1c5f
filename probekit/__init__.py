"""Experiments, statistics, rankings and an experiment cache, plus structural matchers for fields, keys and elements."""

__version__ = "0.1.0"