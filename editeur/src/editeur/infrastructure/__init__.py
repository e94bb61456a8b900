"""
Infrastructure layer - External integrations and adapters.
"""
