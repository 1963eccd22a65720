"""
Personal Finance Ledger - Source Package

A small console ledger for recording, listing, deleting and totalling
personal transactions, kept in a plain text file between runs.

DESIGN PRINCIPLES:
1. One flat file, rewritten in full on every change
2. Bad input is re-asked, never guessed
3. Storage failures are reported, never fatal
4. Every ledger change is logged as a structured event
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Ledger Team"
