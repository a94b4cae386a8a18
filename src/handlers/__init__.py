"""
Lambda handlers package.
"""
