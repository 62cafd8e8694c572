"""gx - interactive front end for everyday git operations"""

__version__ = "0.1.0"
