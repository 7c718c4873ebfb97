"""
models/ - Domain Layer
======================
Plain data types describing Drive files.
"""
