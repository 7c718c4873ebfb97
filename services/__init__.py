"""
services/ - Business Layer
==========================
Embed building and the Drive link workflow.
"""
