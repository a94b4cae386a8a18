"""
Services package for the person document store.
"""
