"""Skellige command line interface."""
