"""Punctuation mapping engine, configuration and display overlay."""
