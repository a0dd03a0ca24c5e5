"""
pwvault - a small command-line credential store.

Keeps site / username / password records in a whitespace-delimited text
file (``passwordVault`` in the working directory by default) and edits them
from a line-oriented command loop on stdin.

NOTE: passwords are stored in cleartext. Do not point this at anything you
care about.

Components:
- storage.py: backing file load/save
- vault.py: in-memory store and add/remove operations
- cli.py: command loop and argument parser
"""

__version__ = "0.1.0"
