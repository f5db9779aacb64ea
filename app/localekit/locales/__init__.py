"""Bundled translation resources.

Holds the shipped `<locale>.properties` files read via importlib.resources.
Keeping this as a real package makes the files discoverable both from a
source checkout and when installed.
"""
