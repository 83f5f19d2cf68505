"""
booklist: a JSON-file backed book list service and its client.
"""

__version__ = "0.1.0"
