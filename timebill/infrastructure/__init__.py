"""
Infrastructure adapters: persistence, auth, mail, documents and HTTP.
"""
