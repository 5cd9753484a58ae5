"""
Accounts: Registration, login and bearer tokens for the Stockroom API.
"""
