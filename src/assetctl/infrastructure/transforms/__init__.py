"""Transformation steps — thin adapters over third-party libraries.

Each module exposes plain functions that take bytes/text (or a source
path) and return transformed content. They raise on malformed input;
catching and reporting is the processor's job.
"""
