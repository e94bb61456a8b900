"""
Application layer - Use cases orchestrating domain and collaborators.
"""
